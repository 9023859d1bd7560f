from __future__ import annotations
import random
from typing import Optional

DAILY_TIPS = (
    "Drink at least 8 glasses of water today.",
    "Take a 10-minute walk after lunch.",
    "Reduce screen time an hour before bed.",
    "Eat a fruit instead of a sugary snack.",
    "Did you know? Laughing boosts heart health!",
)


def daily_tip(rng: Optional[random.Random] = None) -> str:
    """Pick one tip for the landing page."""
    return (rng or random).choice(DAILY_TIPS)
