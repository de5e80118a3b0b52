"""Parameter registry for the LP engine.

Every knob the engine accepts belongs to exactly one of three disjoint closed
enumerations, keyed by the kind of value it takes:

- BoolParam: boolean switches
- IntParam: integer settings, some of which take a closed set of choices
- RealParam: tolerances, limits and thresholds

Member values ARE the numeric parameter ids sent to the engine. Ids are stable
and only meaningful together with their kind: ``BoolParam.EQTRANS`` and
``IntParam.REPRESENTATION`` share id 1 but never collide because the engine
has one setter per kind.

Integer parameters that select among named choices (objective sense,
algorithm, pricer, ...) have a typed value enumeration below.
INT_PARAM_VALUE_TYPES binds each of those IntParams to its value type.

Adding a parameter means adding one member to the right enumeration (and, for
a choice-valued integer parameter, its value enumeration plus one entry in
INT_PARAM_VALUE_TYPES). Nothing else changes.
"""

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Union


class ParamKind(str, Enum):
    """Value kind of a parameter."""
    BOOL = "bool"
    INT = "int"
    REAL = "real"


class BoolParam(IntEnum):
    """Boolean engine parameters."""
    LIFTING = 0                             # Reduce range of nonzero matrix coefficients by lifting
    EQTRANS = 1                             # Transform LP to equality form before a rational solve
    TESTDUALINF = 2                         # Test dual infeasibility to try to return a dual solution
    RATFAC = 3                              # Rational factorization after iterative refinement
    USE_DECOMP_DUAL_SIMPLEX = 4             # Solve with the decomposition based dual simplex
    COMPUTE_DEGEN = 5                       # Compute degeneracy for each basis
    USE_COMP_DUAL = 6                       # Use dual of complementary problem in decomposition simplex
    EXPLICIT_VIOL = 7                       # Compute row/bound violations explicitly in decomposition simplex
    ACCEPT_CYCLING = 8                      # Accept cycling solutions during iterative refinement
    RATREC = 9                              # Rational reconstruction after each refinement
    POWER_SCALING = 10                      # Round refinement scaling factors to powers of two
    RATFAC_JUMP = 11                        # Continue refinement with exact basic solution if not optimal
    ROW_BOUND_FLIPS = 12                    # Bound flipping also for row representation
    PERSISTENT_SCALING = 13                 # Persistent scaling
    FULL_PERTURBATION = 14                  # Perturb the entire problem, not only one pivot's bounds
    ENSURE_RAY = 15                         # Re-optimize to get an infeasibility/unboundedness proof
    FORCE_BASIC = 16                        # Enforce that the optimal solution is basic
    SIMPLIFIER_SINGLETON_COLS = 17          # Presolver: singleton columns
    SIMPLIFIER_CONSTRAINT_PROPAGATION = 18  # Presolver: constraint propagation
    SIMPLIFIER_PARALLEL_ROW_DETECTION = 19  # Presolver: parallel rows
    SIMPLIFIER_PARALLEL_COL_DETECTION = 20  # Presolver: parallel columns
    SIMPLIFIER_SINGLETON_STUFFING = 21      # Presolver: singleton stuffing
    SIMPLIFIER_DUAL_FIX = 22                # Presolver: dual fixing
    SIMPLIFIER_FIX_CONTINUOUS = 23          # Presolver: fix continuous
    SIMPLIFIER_DOMINATED_COLS = 24          # Presolver: dominated columns

    @property
    def kind(self) -> ParamKind:
        return ParamKind.BOOL


class IntParam(IntEnum):
    """Integer engine parameters."""
    OBJSENSE = 0                # see ObjSense
    REPRESENTATION = 1          # see Representation
    ALGORITHM = 2               # see Algorithm
    FACTOR_UPDATE_TYPE = 3      # see FactorUpdateType
    FACTOR_UPDATE_MAX = 4       # Maximum number of updates without fresh factorization
    ITERLIMIT = 5               # Iteration limit (-1 if unlimited)
    REFLIMIT = 6                # Refinement limit (-1 if unlimited)
    STALLREFLIMIT = 7           # Stalling refinement limit (-1 if unlimited)
    DISPLAYFREQ = 8             # Display frequency
    VERBOSITY = 9               # see Verbosity
    SIMPLIFIER = 10             # see Simplifier
    SCALER = 11                 # see Scaler
    STARTER = 12                # see Starter
    PRICER = 13                 # see Pricer
    RATIOTESTER = 14            # see RatioTester
    SYNCMODE = 15               # see SyncMode
    READMODE = 16               # see ReadMode
    SOLVEMODE = 17              # see SolveMode
    CHECKMODE = 18              # see CheckMode
    TIMER = 19                  # see Timer
    HYPER_PRICING = 20          # see HyperPricing
    RATFAC_MINSTALLS = 21       # Minimum stalling refinements before rational factorization
    LEASTSQ_MAXROUNDS = 22      # Maximum CG iterations in least square scaling
    SOLUTION_POLISHING = 23     # see SolutionPolishing
    DECOMP_ITERLIMIT = 24       # Iterations before decomposition simplex initialization stops
    DECOMP_MAXADDEDROWS = 25    # Maximum rows added per decomposition iteration
    DECOMP_DISPLAYFREQ = 26     # Decomposition output frequency
    DECOMP_VERBOSITY = 27       # see Verbosity
    PRINTBASISMETRIC = 28       # Print condition number during the solve
    STATTIMER = 29              # see Timer

    @property
    def kind(self) -> ParamKind:
        return ParamKind.INT

    @property
    def value_type(self):
        """Typed value enumeration of this parameter, or None for plain integers."""
        return INT_PARAM_VALUE_TYPES.get(self)


class RealParam(IntEnum):
    """Real-valued engine parameters."""
    FEASTOL = 0                     # Primal feasibility tolerance
    OPTTOL = 1                      # Dual feasibility tolerance
    EPSILON_ZERO = 2                # General zero tolerance
    EPSILON_FACTORIZATION = 3       # Zero tolerance used in factorization
    EPSILON_UPDATE = 4              # Zero tolerance used in factorization updates
    EPSILON_PIVOT = 5               # Pivot zero tolerance used in factorization
    INFTY = 6                       # Infinity threshold
    TIMELIMIT = 7                   # Time limit in seconds (INFTY if unlimited)
    OBJLIMIT_LOWER = 8              # Lower limit on objective value
    OBJLIMIT_UPPER = 9              # Upper limit on objective value
    FPFEASTOL = 10                  # Floating-point feasibility tolerance during refinement
    FPOPTTOL = 11                   # Floating-point optimality tolerance during refinement
    MAXSCALEINCR = 12               # Maximum increase of scaling factors between refinements
    LIFTMINVAL = 13                 # Lower lifting threshold
    LIFTMAXVAL = 14                 # Upper lifting threshold
    SPARSITY_THRESHOLD = 15         # Sparse pricing threshold
    REPRESENTATION_SWITCH = 16      # Rows/columns ratio for switching representation in auto mode
    RATREC_FREQ = 17                # Geometric frequency of rational reconstruction
    MINRED = 18                     # Minimal reduction to continue simplification
    REFAC_BASIS_NNZ = 19            # Refactor threshold on nonzeros
    REFAC_UPDATE_FILL = 20          # Refactor threshold on update fill-in
    REFAC_MEM_FACTOR = 21           # Refactor threshold on memory growth
    LEASTSQ_ACRCY = 22              # Accuracy of CG in least squares scaling
    OBJ_OFFSET = 23                 # Objective offset
    MIN_MARKOWITZ = 24              # Minimal Markowitz threshold in LU factorization
    SIMPLIFIER_MODIFYROWFAC = 25    # Minimal modification threshold for presolve reductions

    @property
    def kind(self) -> ParamKind:
        return ParamKind.REAL


Param = Union[BoolParam, IntParam, RealParam]


# ============================================================================
# Typed values of choice-valued integer parameters
# ============================================================================

class ObjSense(IntEnum):
    MINIMIZE = -1
    MAXIMIZE = 1


class Representation(IntEnum):
    AUTO = 0
    COLUMN = 1
    ROW = 2


class Algorithm(IntEnum):
    PRIMAL = 0
    DUAL = 1


class FactorUpdateType(IntEnum):
    ETA = 0     # product form update
    FT = 1      # Forrest-Tomlin type update


class Verbosity(IntEnum):
    ERROR = 0
    WARNING = 1
    DEBUG = 2
    NORMAL = 3
    HIGH = 4
    FULL = 5


class Simplifier(IntEnum):
    OFF = 0
    AUTO = 1
    PAPILO = 2
    INTERNAL = 3


class Scaler(IntEnum):
    OFF = 0
    UNIEQUI = 1     # uni-equilibrium
    BIEQUI = 2      # bi-equilibrium
    GEO1 = 3        # geometric mean, 1 round
    GEO8 = 4        # geometric mean, 8 rounds
    LEASTSQ = 5     # least squares
    GEOEQUI = 6     # geometric followed by equilibrium


class Starter(IntEnum):
    OFF = 0
    WEIGHT = 1
    SUM = 2
    VECTOR = 3


class Pricer(IntEnum):
    AUTO = 0
    DANTZIG = 1
    PARMULT = 2
    DEVEX = 3
    QUICKSTEEP = 4
    STEEP = 5


class RatioTester(IntEnum):
    TEXTBOOK = 0
    HARRIS = 1
    FAST = 2
    BOUNDFLIPPING = 3


class SyncMode(IntEnum):
    ONLYREAL = 0
    AUTO = 1
    MANUAL = 2


class ReadMode(IntEnum):
    REAL = 0
    RATIONAL = 1


class SolveMode(IntEnum):
    REAL = 0
    AUTO = 1
    RATIONAL = 2


class CheckMode(IntEnum):
    REAL = 0
    AUTO = 1
    RATIONAL = 2


class Timer(IntEnum):
    OFF = 0
    CPU = 1
    WALLCLOCK = 2


class HyperPricing(IntEnum):
    OFF = 0
    AUTO = 1
    ON = 2


class SolutionPolishing(IntEnum):
    OFF = 0
    INTEGRALITY = 1
    FRACTIONALITY = 2


INT_PARAM_VALUE_TYPES = MappingProxyType({
    IntParam.OBJSENSE: ObjSense,
    IntParam.REPRESENTATION: Representation,
    IntParam.ALGORITHM: Algorithm,
    IntParam.FACTOR_UPDATE_TYPE: FactorUpdateType,
    IntParam.VERBOSITY: Verbosity,
    IntParam.SIMPLIFIER: Simplifier,
    IntParam.SCALER: Scaler,
    IntParam.STARTER: Starter,
    IntParam.PRICER: Pricer,
    IntParam.RATIOTESTER: RatioTester,
    IntParam.SYNCMODE: SyncMode,
    IntParam.READMODE: ReadMode,
    IntParam.SOLVEMODE: SolveMode,
    IntParam.CHECKMODE: CheckMode,
    IntParam.TIMER: Timer,
    IntParam.HYPER_PRICING: HyperPricing,
    IntParam.SOLUTION_POLISHING: SolutionPolishing,
    IntParam.DECOMP_VERBOSITY: Verbosity,
    IntParam.STATTIMER: Timer,
})

_PARAMS_BY_KIND = MappingProxyType({
    ParamKind.BOOL: BoolParam,
    ParamKind.INT: IntParam,
    ParamKind.REAL: RealParam,
})


def param_kind(param: Param) -> ParamKind:
    """Return the value kind of a parameter enumerator.

    Raises:
        TypeError: If ``param`` is not a BoolParam, IntParam or RealParam.
    """
    if isinstance(param, (BoolParam, IntParam, RealParam)):
        return param.kind
    raise TypeError(f"Expected BoolParam, IntParam or RealParam, got {type(param).__name__}")


def resolve_param_name(kind: ParamKind, name) -> Param:
    """Resolve a parameter of the given kind from a member, id or name.

    Names follow the enumerator spelling, matched case-insensitively, with
    dashes or spaces accepted in place of underscores (``"time-limit"`` does
    not match ``TIMELIMIT``).

    Args:
        kind: Which of the three enumerations to search
        name: An enumerator of that kind, its integer id, or its name

    Returns:
        The matching enumerator

    Raises:
        ValueError: If nothing of that kind matches
    """
    enum_cls = _PARAMS_BY_KIND[ParamKind(kind)]
    if isinstance(name, enum_cls):
        return name
    if isinstance(name, (BoolParam, IntParam, RealParam)):
        raise ValueError(f"{name!r} is a {name.kind.value} parameter, not {ParamKind(kind).value}")
    if isinstance(name, int) and not isinstance(name, bool):
        return enum_cls(name)
    if isinstance(name, str):
        key = name.strip().upper().replace("-", "_").replace(" ", "_")
        if key.isdigit():
            return enum_cls(int(key))
        try:
            return enum_cls[key]
        except KeyError:
            raise ValueError(f"Unknown {ParamKind(kind).value} parameter: {name!r}") from None
    raise ValueError(f"Cannot resolve {ParamKind(kind).value} parameter from {name!r}")
