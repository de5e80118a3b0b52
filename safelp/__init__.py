"""Safe modeling layer over an external linear-programming engine.

Build an instance with Model, solve it into a SolvedModel, and convert back
with ``into_model()`` to edit and re-solve on the same engine context.
"""

from .errors import (
    SafeLPError,
    PreconditionViolation,
    EngineAllocationError,
    ModelFileNotFoundError,
    UnsupportedFormatError,
    InvalidCodeError,
    StaleIdentifierError,
    HandleReleasedError,
    ModelConsumedError,
    EngineError,
)
from .models import *  # noqa: F401,F403
from .models import __all__ as _models_all
from .engine import SolverEngine, HighsEngine, NativeHandle
from .optimization import (
    Model,
    SolvedModel,
    SolverConfig,
    SolverSettings,
    SolveSummary,
)

__version__ = "0.1.0"

__all__ = [
    # Views
    "Model",
    "SolvedModel",
    # Configuration and results
    "SolverConfig",
    "SolverSettings",
    "SolveSummary",
    # Engines
    "SolverEngine",
    "HighsEngine",
    "NativeHandle",
    # Errors
    "SafeLPError",
    "PreconditionViolation",
    "EngineAllocationError",
    "ModelFileNotFoundError",
    "UnsupportedFormatError",
    "InvalidCodeError",
    "StaleIdentifierError",
    "HandleReleasedError",
    "ModelConsumedError",
    "EngineError",
] + list(_models_all)
