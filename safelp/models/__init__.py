"""Value types shared by the engine boundary and the model views."""

from .status import Status
from .basis_status import BasisStatus
from .identifiers import ColumnId, RowId, IdentifierAllocator
from .params import (
    ParamKind,
    BoolParam,
    IntParam,
    RealParam,
    ObjSense,
    Representation,
    Algorithm,
    FactorUpdateType,
    Verbosity,
    Simplifier,
    Scaler,
    Starter,
    Pricer,
    RatioTester,
    SyncMode,
    ReadMode,
    SolveMode,
    CheckMode,
    Timer,
    HyperPricing,
    SolutionPolishing,
    INT_PARAM_VALUE_TYPES,
    param_kind,
    resolve_param_name,
)

__all__ = [
    # Outcome codes
    "Status",
    "BasisStatus",
    # Identifiers
    "ColumnId",
    "RowId",
    "IdentifierAllocator",
    # Parameter registry
    "ParamKind",
    "BoolParam",
    "IntParam",
    "RealParam",
    "INT_PARAM_VALUE_TYPES",
    "param_kind",
    "resolve_param_name",
    # Typed parameter values
    "ObjSense",
    "Representation",
    "Algorithm",
    "FactorUpdateType",
    "Verbosity",
    "Simplifier",
    "Scaler",
    "Starter",
    "Pricer",
    "RatioTester",
    "SyncMode",
    "ReadMode",
    "SolveMode",
    "CheckMode",
    "Timer",
    "HyperPricing",
    "SolutionPolishing",
]
