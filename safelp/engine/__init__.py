"""Engine contexts and their ownership."""

from .base import SolverEngine
from .highs_engine import HighsEngine, STATUS_BY_MODEL_STATUS
from .native_handle import NativeHandle, EngineFactory

__all__ = [
    "SolverEngine",
    "HighsEngine",
    "STATUS_BY_MODEL_STATUS",
    "NativeHandle",
    "EngineFactory",
]
