"""Cosmetic, cancellable sequences shown while a result is being "processed".

Both sequences follow the same rule: start() invalidates any run in flight and
hands back a token; a run only keeps going (and only fires its completion)
while its token is still current. Waits use threading.Event so cancel() wakes
a sleeping run immediately.
"""
from __future__ import annotations
import math
import threading
from typing import Callable, List, Optional, Sequence

import numpy as np

PROCESSING_MESSAGES = (
    "Analyzing Vitals...",
    "Checking Medical History...",
    "Correlating Symptoms...",
    "Generating Action Plan...",
)


class _Restartable:
    def __init__(self):
        self._lock = threading.Lock()
        self._generation = 0
        self._stop = threading.Event()

    def start(self) -> int:
        with self._lock:
            self._stop.set()
            self._stop = threading.Event()
            self._generation += 1
            return self._generation

    def cancel(self) -> None:
        with self._lock:
            self._stop.set()
            self._generation += 1

    def is_current(self, token: int) -> bool:
        return token == self._generation

    def _wait(self, token: int, seconds: float) -> bool:
        """Sleep up to `seconds`; True while the run is still current."""
        stop = self._stop
        if not self.is_current(token):
            return False
        if seconds > 0:
            stop.wait(seconds)
        return self.is_current(token)


class ProcessingSequence(_Restartable):
    def __init__(self, messages: Sequence[str] = PROCESSING_MESSAGES,
                 interval: float = 0.5, total_delay: float = 2.5):
        super().__init__()
        self.messages = tuple(messages)
        self.interval = float(interval)
        self.total_delay = float(total_delay)

    def run(self, on_message: Callable[[str], None], on_complete: Callable[[], None],
            token: Optional[int] = None) -> bool:
        """Emit each message, then fire on_complete once. False if cancelled first."""
        token = self.start() if token is None else token
        elapsed = 0.0
        for msg in self.messages:
            if not self.is_current(token):
                return False
            on_message(msg)
            if not self._wait(token, self.interval):
                return False
            elapsed += self.interval
        if not self._wait(token, max(0.0, self.total_delay - elapsed)):
            return False
        on_complete()
        return True


def counter_frames(score: int, max_frames: int = 60) -> List[int]:
    """Values shown by the counting-up score display, ending exactly on `score`."""
    score = int(score)
    if score <= 0:
        return [0]
    n = min(score, max(1, int(max_frames)))
    frames = np.unique(np.round(np.linspace(1, score, num=n)).astype(int))
    return [int(x) for x in frames]


class ScoreCounter(_Restartable):
    def __init__(self, tick: float = 0.02, max_frames: int = 60):
        super().__init__()
        self.tick = float(tick)
        self.max_frames = int(max_frames)

    def run(self, score: int, on_frame: Callable[[int], None], token: Optional[int] = None) -> bool:
        token = self.start() if token is None else token
        for value in counter_frames(score, self.max_frames):
            if not self.is_current(token):
                return False
            on_frame(value)
            if not self._wait(token, self.tick):
                return False
        return True


def ring_offset(score: float, radius: float) -> float:
    """stroke-dashoffset for a circular progress ring filled to score/100."""
    circumference = radius * 2 * math.pi
    return circumference - (float(score) / 100.0) * circumference
