"""Model views, solver configuration and result schema."""

from .base_view import EngineView
from .model import Model
from .solved_model import SolvedModel
from .solver_config import SolverConfig, SolverSettings
from .result_schema import SolveSummary

__all__ = [
    # Views
    "EngineView",
    "Model",
    "SolvedModel",
    # Configuration
    "SolverConfig",
    "SolverSettings",
    # Results
    "SolveSummary",
]
