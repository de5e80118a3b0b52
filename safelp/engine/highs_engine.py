"""HiGHS-backed engine context.

Wraps one ``highspy.Highs`` instance behind the SolverEngine boundary:

- Parameter ids are recorded, and those with a HiGHS counterpart are
  forwarded as HiGHS options. Ids without a counterpart are kept so that the
  getters round-trip, and logged at DEBUG.
- HiGHS model statuses are translated into the engine status codes listed in
  Status; HiGHS basis statuses into BasisStatus codes.
- New contexts are silent (output_flag off) and maximize, which is the
  objective sense the parameter defaults advertise.

Values are never range-checked here. HiGHS rejecting an option is logged at
WARNING and otherwise ignored; its effect, if any, shows up in the next status.
"""

import logging
import time
from types import MappingProxyType
from typing import List, Optional, Sequence

import highspy
import numpy as np

from .base import SolverEngine
from ..errors import EngineError
from ..models.basis_status import BasisStatus
from ..models.params import (
    Algorithm,
    IntParam,
    ObjSense,
    Pricer,
    RealParam,
    Scaler,
    Simplifier,
    Starter,
    Timer,
    Verbosity,
)
from ..models.status import Status

logger = logging.getLogger(__name__)


# ============================================================================
# Translation tables
# ============================================================================

#: HiGHS model status name -> engine status code
STATUS_BY_MODEL_STATUS = MappingProxyType({
    "kNotset": Status.UNKNOWN,
    "kLoadError": Status.ERROR,
    "kModelError": Status.ERROR,
    "kPresolveError": Status.ERROR,
    "kSolveError": Status.ERROR,
    "kPostsolveError": Status.ERROR,
    "kMemoryLimit": Status.ERROR,
    "kModelEmpty": Status.OPTIMAL,
    "kOptimal": Status.OPTIMAL,
    "kInfeasible": Status.INFEASIBLE,
    "kUnboundedOrInfeasible": Status.INFORUNBD,
    "kUnbounded": Status.UNBOUNDED,
    "kObjectiveBound": Status.ABORT_VALUE,
    "kObjectiveTarget": Status.ABORT_VALUE,
    "kTimeLimit": Status.ABORT_TIME,
    "kIterationLimit": Status.ABORT_ITER,
    "kUnknown": Status.UNKNOWN,
    "kSolutionLimit": Status.UNKNOWN,
    "kInterrupt": Status.UNKNOWN,
})

_SIMPLEX_STRATEGY = MappingProxyType({
    Algorithm.PRIMAL: 4,
    Algorithm.DUAL: 1,
})

_PRESOLVE = MappingProxyType({
    Simplifier.OFF: "off",
    Simplifier.AUTO: "choose",
    Simplifier.PAPILO: "on",
    Simplifier.INTERNAL: "on",
})

_SCALE_STRATEGY = MappingProxyType({
    Scaler.OFF: 0,
    Scaler.UNIEQUI: 2,
    Scaler.BIEQUI: 3,
    Scaler.GEO1: 1,
    Scaler.GEO8: 1,
    Scaler.LEASTSQ: 1,
    Scaler.GEOEQUI: 1,
})

_CRASH_STRATEGY = MappingProxyType({
    Starter.OFF: 0,
    Starter.WEIGHT: 1,
    Starter.SUM: 1,
    Starter.VECTOR: 2,
})

_EDGE_WEIGHT_STRATEGY = MappingProxyType({
    Pricer.AUTO: -1,
    Pricer.DANTZIG: 0,
    Pricer.PARMULT: 0,
    Pricer.DEVEX: 1,
    Pricer.QUICKSTEEP: 2,
    Pricer.STEEP: 2,
})

#: Real parameters forwarded one-to-one as HiGHS options
_REAL_OPTIONS = MappingProxyType({
    RealParam.FEASTOL: "primal_feasibility_tolerance",
    RealParam.OPTTOL: "dual_feasibility_tolerance",
    RealParam.EPSILON_ZERO: "small_matrix_value",
    RealParam.INFTY: "infinite_bound",
    RealParam.TIMELIMIT: "time_limit",
    RealParam.OBJLIMIT_UPPER: "objective_bound",
})

_INT_DEFAULTS = MappingProxyType({
    IntParam.OBJSENSE: ObjSense.MAXIMIZE.value,
    IntParam.ALGORITHM: Algorithm.DUAL.value,
    IntParam.ITERLIMIT: -1,
    IntParam.VERBOSITY: Verbosity.ERROR.value,
    IntParam.SIMPLIFIER: Simplifier.AUTO.value,
    IntParam.PRICER: Pricer.AUTO.value,
    IntParam.TIMER: Timer.CPU.value,
})

_REAL_DEFAULTS = MappingProxyType({
    RealParam.TIMELIMIT: highspy.kHighsInf,
    RealParam.OBJ_OFFSET: 0.0,
})

_CLOCKS = MappingProxyType({
    Timer.CPU: time.process_time,
    Timer.WALLCLOCK: time.perf_counter,
})


class HighsEngine(SolverEngine):
    """SolverEngine implementation over a single ``highspy.Highs`` object."""

    def __init__(self, highs: "highspy.Highs"):
        self._highs = highs
        self._bool_params = {}
        self._int_params = dict(_INT_DEFAULTS)
        self._real_params = dict(_REAL_DEFAULTS)
        self._status = Status.NO_PROBLEM.code
        self._solving_time = 0.0

        self._set_option("output_flag", False)
        self._highs.changeObjectiveSense(highspy.ObjSense.kMaximize)

    @classmethod
    def create(cls) -> Optional["HighsEngine"]:
        engine = cls(highspy.Highs())
        logger.debug(f"Created HiGHS context (version {engine._highs.version()})")
        return engine

    def free(self) -> None:
        if self._highs is not None:
            self._highs.clear()
            self._highs = None
            logger.debug("Freed HiGHS context")

    # ------------------------------------------------------------------
    # Problem structure
    # ------------------------------------------------------------------

    def add_col_real(self, colentries, colsize, nnonzeros, objval, lb, ub) -> None:
        indices, values = _sparse_entries(colentries, colsize, nnonzeros)
        self._check(
            self._highs.addCol(float(objval), float(lb), float(ub), len(indices), indices, values),
            "addCol",
        )

    def add_row_real(self, rowentries, rowsize, nnonzeros, lhs, rhs) -> None:
        indices, values = _sparse_entries(rowentries, rowsize, nnonzeros)
        self._check(
            self._highs.addRow(float(lhs), float(rhs), len(indices), indices, values),
            "addRow",
        )

    def remove_col_real(self, colidx: int) -> None:
        self._check(self._highs.deleteCols(1, np.array([colidx], dtype=np.int32)), "deleteCols")

    def remove_row_real(self, rowidx: int) -> None:
        self._check(self._highs.deleteRows(1, np.array([rowidx], dtype=np.int32)), "deleteRows")

    def change_var_bounds_real(self, colidx: int, lb: float, ub: float) -> None:
        self._check(self._highs.changeColBounds(colidx, float(lb), float(ub)), "changeColBounds")

    def change_row_range_real(self, rowidx: int, lhs: float, rhs: float) -> None:
        self._check(self._highs.changeRowBounds(rowidx, float(lhs), float(rhs)), "changeRowBounds")

    def change_obj_real(self, colidx: int, objval: float) -> None:
        self._check(self._highs.changeColCost(colidx, float(objval)), "changeColCost")

    def num_cols(self) -> int:
        return self._highs.getNumCol()

    def num_rows(self) -> int:
        return self._highs.getNumRow()

    def read_instance_file(self, filename: str) -> bool:
        status = self._highs.readModel(str(filename))
        if status == highspy.HighsStatus.kError:
            logger.warning(f"HiGHS could not read {filename}")
            return False

        # The file carries its own sense and offset; keep the getters truthful.
        lp = self._highs.getLp()
        if lp.sense_ == highspy.ObjSense.kMinimize:
            self._int_params[IntParam.OBJSENSE] = ObjSense.MINIMIZE.value
        else:
            self._int_params[IntParam.OBJSENSE] = ObjSense.MAXIMIZE.value
        self._real_params[RealParam.OBJ_OFFSET] = lp.offset_
        logger.info(f"Read {filename}: {lp.num_col_} columns, {lp.num_row_} rows")
        return True

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def set_bool_param(self, paramcode: int, paramvalue: bool) -> None:
        self._bool_params[paramcode] = paramvalue
        logger.debug(f"Boolean parameter {paramcode}={paramvalue} recorded (no HiGHS counterpart)")

    def set_int_param(self, paramcode: int, paramvalue: int) -> None:
        self._int_params[paramcode] = paramvalue

        if paramcode == IntParam.OBJSENSE:
            if paramvalue == ObjSense.MINIMIZE:
                self._highs.changeObjectiveSense(highspy.ObjSense.kMinimize)
            elif paramvalue == ObjSense.MAXIMIZE:
                self._highs.changeObjectiveSense(highspy.ObjSense.kMaximize)
            else:
                logger.warning(f"Objective sense {paramvalue} has no HiGHS counterpart")
        elif paramcode == IntParam.ITERLIMIT:
            limit = highspy.kHighsIInf if paramvalue == -1 else paramvalue
            self._set_option("simplex_iteration_limit", limit)
        elif paramcode == IntParam.VERBOSITY:
            self._set_option("output_flag", paramvalue >= Verbosity.NORMAL)
        elif paramcode == IntParam.FACTOR_UPDATE_MAX:
            self._set_option("simplex_update_limit", paramvalue)
        elif paramcode == IntParam.ALGORITHM:
            self._set_choice("simplex_strategy", _SIMPLEX_STRATEGY, paramvalue)
        elif paramcode == IntParam.SIMPLIFIER:
            self._set_choice("presolve", _PRESOLVE, paramvalue)
        elif paramcode == IntParam.SCALER:
            self._set_choice("simplex_scale_strategy", _SCALE_STRATEGY, paramvalue)
        elif paramcode == IntParam.STARTER:
            self._set_choice("simplex_crash_strategy", _CRASH_STRATEGY, paramvalue)
        elif paramcode == IntParam.PRICER:
            self._set_choice("simplex_dual_edge_weight_strategy", _EDGE_WEIGHT_STRATEGY, paramvalue)
            self._set_choice("simplex_primal_edge_weight_strategy", _EDGE_WEIGHT_STRATEGY, paramvalue)
        elif paramcode == IntParam.TIMER:
            pass  # read back by solving_time()
        else:
            logger.debug(f"Integer parameter {paramcode}={paramvalue} recorded (no HiGHS counterpart)")

    def set_real_param(self, paramcode: int, paramvalue: float) -> None:
        self._real_params[paramcode] = paramvalue

        if paramcode == RealParam.OBJ_OFFSET:
            self._check(self._highs.changeObjectiveOffset(float(paramvalue)), "changeObjectiveOffset")
        elif paramcode in _REAL_OPTIONS:
            self._set_option(_REAL_OPTIONS[paramcode], float(paramvalue))
        else:
            logger.debug(f"Real parameter {paramcode}={paramvalue} recorded (no HiGHS counterpart)")

    def get_bool_param(self, paramcode: int) -> Optional[bool]:
        return self._bool_params.get(paramcode)

    def get_int_param(self, paramcode: int) -> Optional[int]:
        return self._int_params.get(paramcode)

    def get_real_param(self, paramcode: int) -> Optional[float]:
        return self._real_params.get(paramcode)

    # ------------------------------------------------------------------
    # Solving and results
    # ------------------------------------------------------------------

    def optimize(self) -> int:
        clock = _CLOCKS.get(self._int_params.get(IntParam.TIMER))
        start = clock() if clock else 0.0

        run_status = self._highs.run()

        self._solving_time = max(0.0, clock() - start) if clock else 0.0
        if run_status == highspy.HighsStatus.kError:
            logger.warning("HiGHS run() returned an error status")

        model_status = self._highs.getModelStatus()
        status = STATUS_BY_MODEL_STATUS.get(model_status.name)
        if status is None:
            logger.warning(f"Unmapped HiGHS model status {model_status.name}; reporting ERROR")
            status = Status.ERROR
        self._status = status.code
        return self._status

    def obj_value_real(self) -> float:
        return float(self._highs.getObjectiveValue())

    def get_primal_real(self, dim: int) -> List[float]:
        return _dense(self._highs.getSolution().col_value, dim)

    def get_dual_real(self, dim: int) -> List[float]:
        return _dense(self._highs.getSolution().row_dual, dim)

    def get_redcost_real(self, dim: int) -> List[float]:
        return _dense(self._highs.getSolution().col_dual, dim)

    def num_iterations(self) -> int:
        return max(0, int(self._highs.getInfo().simplex_iteration_count))

    def solving_time(self) -> float:
        return self._solving_time

    def basis_col_status(self, colidx: int) -> int:
        basis = self._highs.getBasis()
        if not basis.valid or colidx >= len(basis.col_status):
            return BasisStatus.UNKNOWN.code
        lp = self._highs.getLp()
        return _basis_code(basis.col_status[colidx], lp.col_lower_[colidx], lp.col_upper_[colidx], is_col=True)

    def basis_row_status(self, rowidx: int) -> int:
        basis = self._highs.getBasis()
        if not basis.valid or rowidx >= len(basis.row_status):
            return BasisStatus.UNKNOWN.code
        lp = self._highs.getLp()
        return _basis_code(basis.row_status[rowidx], lp.row_lower_[rowidx], lp.row_upper_[rowidx], is_col=False)

    def basis_col_statuses(self, dim: int) -> List[int]:
        basis = self._highs.getBasis()
        if not basis.valid:
            return [BasisStatus.UNKNOWN.code] * dim
        lp = self._highs.getLp()
        return _basis_codes(basis.col_status, lp.col_lower_, lp.col_upper_, dim, is_col=True)

    def basis_row_statuses(self, dim: int) -> List[int]:
        basis = self._highs.getBasis()
        if not basis.valid:
            return [BasisStatus.UNKNOWN.code] * dim
        lp = self._highs.getLp()
        return _basis_codes(basis.row_status, lp.row_lower_, lp.row_upper_, dim, is_col=False)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _set_option(self, name: str, value) -> None:
        if self._highs.setOptionValue(name, value) == highspy.HighsStatus.kError:
            logger.warning(f"HiGHS rejected option {name}={value!r}")
        else:
            logger.debug(f"HiGHS option {name}={value!r}")

    def _set_choice(self, name: str, table, paramvalue: int) -> None:
        if paramvalue in table:
            self._set_option(name, table[paramvalue])
        else:
            logger.warning(f"Value {paramvalue} for HiGHS option {name} has no counterpart; ignored")

    def _check(self, status, call: str) -> None:
        if status == highspy.HighsStatus.kError:
            raise EngineError(f"HiGHS {call} failed")


def _sparse_entries(entries: Sequence[float], size: int, nnonzeros: int):
    """Convert dense entries into HiGHS (indices, values) arrays."""
    dense = np.asarray(list(entries)[:size], dtype=np.float64)
    indices = np.flatnonzero(dense).astype(np.int32)
    if len(indices) != nnonzeros:
        logger.warning(f"Declared {nnonzeros} nonzeros but found {len(indices)}; using the entries")
    return indices, dense[indices]


def _dense(values, dim: int) -> List[float]:
    values = [float(v) for v in values][:dim]
    return values + [0.0] * (dim - len(values))


def _basis_code(highs_status, lower: float, upper: float, is_col: bool) -> int:
    name = highs_status.name
    if name == "kBasic":
        return BasisStatus.BASIC.code
    if name in ("kLower", "kUpper"):
        if lower == upper:
            return BasisStatus.FIXED.code
        return BasisStatus.AT_LOWER.code if name == "kLower" else BasisStatus.AT_UPPER.code
    if name == "kZero" and is_col:
        return BasisStatus.FREE.code
    return BasisStatus.UNKNOWN.code


def _basis_codes(statuses, lower, upper, dim: int, is_col: bool) -> List[int]:
    codes = [_basis_code(statuses[i], lower[i], upper[i], is_col) for i in range(min(dim, len(statuses)))]
    return codes + [BasisStatus.UNKNOWN.code] * (dim - len(codes))
