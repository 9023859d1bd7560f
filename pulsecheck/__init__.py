from importlib.metadata import version, PackageNotFoundError
__all__ = ["answers", "animation", "local_store", "risk_engine", "scoring_config", "tips", "wizard", "utils"]
try:
    __version__ = version("pulsecheck")
except PackageNotFoundError:
    __version__ = "0.1.0"

# Re-export the main entry points for convenience
from .answers import AnswerRecord  # noqa: E402
from .risk_engine import RiskResult, evaluate  # noqa: E402
from .wizard import WizardController, WizardState  # noqa: E402

__all__ += ["AnswerRecord", "RiskResult", "evaluate", "WizardController", "WizardState"]
