"""Builder view of an LP instance.

A Model owns a fresh engine context from construction on. Columns and rows
are appended, changed and removed in place; parameters are forwarded to the
engine as they are set. ``optimize()`` hands the context to the engine for one
blocking solve and returns a SolvedModel, consuming the Model.

Example:
    model = Model()
    x = model.add_col(objective=1.0, upper_bound=5.0)
    y = model.add_col(objective=1.0, upper_bound=10.0)
    model.add_row([1.0, 1.0], lhs=1.0, rhs=5.0)
    solved = model.optimize()
    solved.obj_val()        # 5.0 (maximization is the default sense)
"""

import logging
import math
import operator
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Sequence, Union

from .base_view import EngineView
from .constants import LP_FILE_SUFFIXES
from ..engine.native_handle import EngineFactory, NativeHandle
from ..errors import EngineError, ModelFileNotFoundError, UnsupportedFormatError
from ..models.identifiers import ColumnId, IdentifierAllocator, RowId
from ..models.params import (
    Algorithm,
    BoolParam,
    CheckMode,
    FactorUpdateType,
    HyperPricing,
    IntParam,
    ObjSense,
    ParamKind,
    Param,
    Pricer,
    RatioTester,
    ReadMode,
    RealParam,
    Representation,
    Scaler,
    Simplifier,
    SolutionPolishing,
    SolveMode,
    Starter,
    SyncMode,
    Timer,
    Verbosity,
    param_kind,
)
from ..models.status import Status

if TYPE_CHECKING:
    from .solved_model import SolvedModel
    from .solver_config import SolverSettings

logger = logging.getLogger(__name__)

Coefficients = Union[Sequence[float], Mapping]


class Model(EngineView):
    """Mutable LP instance backed by one engine context.

    Args:
        engine_factory: Callable creating the engine context. Defaults to a
            HiGHS context.

    Raises:
        EngineAllocationError: If the engine context cannot be created
    """

    def __init__(self, engine_factory: Optional[EngineFactory] = None):
        super().__init__(
            NativeHandle(engine_factory),
            IdentifierAllocator(ColumnId),
            IdentifierAllocator(RowId),
        )
        logger.debug("Created model")

    @classmethod
    def from_solved(cls, solved: "SolvedModel") -> "Model":
        """Convert a SolvedModel back into a Model (consumes ``solved``)."""
        return solved.into_model()

    @classmethod
    def _adopt(cls, handle, cols, rows) -> "Model":
        model = cls.__new__(cls)
        EngineView.__init__(model, handle, cols, rows)
        return model

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def add_col(
        self,
        coefficients: Coefficients = (),
        objective: float = 0.0,
        lower_bound: float = 0.0,
        upper_bound: float = math.inf,
    ) -> ColumnId:
        """Append a column.

        Args:
            coefficients: Dense values aligned to row order, or a mapping of
                row index (or RowId) to value. Zeros are dropped.
            objective: Objective coefficient
            lower_bound: Lower bound (not checked against upper_bound)
            upper_bound: Upper bound

        Returns:
            Identifier of the new column (its index is the previous column count)

        Raises:
            EngineError: If coefficients address rows that do not exist
        """
        engine = self._engine
        entries = self._dense_entries(coefficients, engine.num_rows(), self._rows)
        nnonzeros = _count_nonzeros(entries)
        count = engine.num_cols()

        engine.add_col_real(entries, len(entries), nnonzeros, float(objective),
                            float(lower_bound), float(upper_bound))
        col = self._cols.mint(count)
        logger.debug(f"Added {col}: {nnonzeros} nonzeros, obj={objective}, "
                     f"bounds=[{lower_bound}, {upper_bound}]")
        return col

    def add_row(
        self,
        coefficients: Coefficients = (),
        lhs: float = -math.inf,
        rhs: float = math.inf,
    ) -> RowId:
        """Append a range row ``lhs <= a.x <= rhs``.

        Args:
            coefficients: Dense values aligned to column order, or a mapping of
                column index (or ColumnId) to value. Zeros are dropped.
            lhs: Left-hand side
            rhs: Right-hand side

        Returns:
            Identifier of the new row

        Raises:
            EngineError: If coefficients address columns that do not exist
        """
        engine = self._engine
        entries = self._dense_entries(coefficients, engine.num_cols(), self._cols)
        nnonzeros = _count_nonzeros(entries)
        count = engine.num_rows()

        engine.add_row_real(entries, len(entries), nnonzeros, float(lhs), float(rhs))
        row = self._rows.mint(count)
        logger.debug(f"Added {row}: {nnonzeros} nonzeros, range=[{lhs}, {rhs}]")
        return row

    def remove_col(self, col: ColumnId) -> None:
        """Remove a column. Identifiers of later columns become stale."""
        engine = self._engine
        engine.remove_col_real(self._cols.check(col))
        self._cols.release(col)
        logger.debug(f"Removed {col}")

    def remove_row(self, row: RowId) -> None:
        """Remove a row. Identifiers of later rows become stale."""
        engine = self._engine
        engine.remove_row_real(self._rows.check(row))
        self._rows.release(row)
        logger.debug(f"Removed {row}")

    def change_col_bounds(self, col: ColumnId, lower_bound: float, upper_bound: float) -> None:
        engine = self._engine
        engine.change_var_bounds_real(self._cols.check(col), float(lower_bound), float(upper_bound))

    def change_row_range(self, row: RowId, lhs: float, rhs: float) -> None:
        engine = self._engine
        engine.change_row_range_real(self._rows.check(row), float(lhs), float(rhs))

    def change_col_objective(self, col: ColumnId, objective: float) -> None:
        engine = self._engine
        engine.change_obj_real(self._cols.check(col), float(objective))

    def col_id(self, index: int) -> ColumnId:
        """Current identifier of the column at ``index``."""
        self._ensure_live()
        return self._cols.identifier_at(index)

    def row_id(self, index: int) -> RowId:
        """Current identifier of the row at ``index``."""
        self._ensure_live()
        return self._rows.identifier_at(index)

    def read_file(self, path: Union[str, Path]) -> None:
        """Replace the problem with one read from an LP or MPS file.

        Every outstanding ColumnId/RowId becomes stale. The objective sense
        and offset are those declared by the file.

        Raises:
            ModelFileNotFoundError: If ``path`` does not exist
            UnsupportedFormatError: If the suffix is not .lp or .mps
            EngineError: If the engine cannot parse the file
        """
        engine = self._engine
        path = Path(path)
        if not path.is_file():
            raise ModelFileNotFoundError(f"Model file not found: {path}")
        if path.suffix not in LP_FILE_SUFFIXES:
            raise UnsupportedFormatError(
                f"Unsupported model file format '{path.suffix}' (expected one of {', '.join(LP_FILE_SUFFIXES)})"
            )

        if not engine.read_instance_file(str(path)):
            raise EngineError(f"Engine could not read model file: {path}")

        self._cols.reset(engine.num_cols())
        self._rows.reset(engine.num_rows())
        logger.info(f"Loaded {path.name}: {len(self._cols)} columns, {len(self._rows)} rows")

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def set_bool_param(self, param: BoolParam, value: bool) -> None:
        self._engine.set_bool_param(BoolParam(param).value, bool(value))

    def set_int_param(self, param: IntParam, value: int) -> None:
        self._engine.set_int_param(IntParam(param).value, int(value))

    def set_real_param(self, param: RealParam, value: float) -> None:
        self._engine.set_real_param(RealParam(param).value, float(value))

    def set_param(self, param: Param, value) -> None:
        """Set any parameter, dispatching on its kind."""
        kind = param_kind(param)
        if kind is ParamKind.BOOL:
            self.set_bool_param(param, value)
        elif kind is ParamKind.INT:
            self.set_int_param(param, value)
        else:
            self.set_real_param(param, value)

    def apply_settings(self, settings: "SolverSettings") -> None:
        """Forward every value of a SolverSettings bundle."""
        settings.apply(self)

    def set_obj_sense(self, sense: ObjSense) -> None:
        self.set_int_param(IntParam.OBJSENSE, ObjSense(sense))

    def set_representation(self, representation: Representation) -> None:
        self.set_int_param(IntParam.REPRESENTATION, Representation(representation))

    def set_algorithm(self, algorithm: Algorithm) -> None:
        self.set_int_param(IntParam.ALGORITHM, Algorithm(algorithm))

    def set_factor_update_type(self, update_type: FactorUpdateType) -> None:
        self.set_int_param(IntParam.FACTOR_UPDATE_TYPE, FactorUpdateType(update_type))

    def set_verbosity(self, verbosity: Verbosity) -> None:
        self.set_int_param(IntParam.VERBOSITY, Verbosity(verbosity))

    def set_simplifier(self, simplifier: Simplifier) -> None:
        self.set_int_param(IntParam.SIMPLIFIER, Simplifier(simplifier))

    def set_scaler(self, scaler: Scaler) -> None:
        self.set_int_param(IntParam.SCALER, Scaler(scaler))

    def set_starter(self, starter: Starter) -> None:
        self.set_int_param(IntParam.STARTER, Starter(starter))

    def set_pricer(self, pricer: Pricer) -> None:
        self.set_int_param(IntParam.PRICER, Pricer(pricer))

    def set_ratio_tester(self, ratio_tester: RatioTester) -> None:
        self.set_int_param(IntParam.RATIOTESTER, RatioTester(ratio_tester))

    def set_sync_mode(self, sync_mode: SyncMode) -> None:
        self.set_int_param(IntParam.SYNCMODE, SyncMode(sync_mode))

    def set_read_mode(self, read_mode: ReadMode) -> None:
        self.set_int_param(IntParam.READMODE, ReadMode(read_mode))

    def set_solve_mode(self, solve_mode: SolveMode) -> None:
        self.set_int_param(IntParam.SOLVEMODE, SolveMode(solve_mode))

    def set_check_mode(self, check_mode: CheckMode) -> None:
        self.set_int_param(IntParam.CHECKMODE, CheckMode(check_mode))

    def set_timer(self, timer: Timer) -> None:
        self.set_int_param(IntParam.TIMER, Timer(timer))

    def set_hyper_pricing(self, hyper_pricing: HyperPricing) -> None:
        self.set_int_param(IntParam.HYPER_PRICING, HyperPricing(hyper_pricing))

    def set_solution_polishing(self, polishing: SolutionPolishing) -> None:
        self.set_int_param(IntParam.SOLUTION_POLISHING, SolutionPolishing(polishing))

    # ------------------------------------------------------------------
    # Solve
    # ------------------------------------------------------------------

    def optimize(self) -> "SolvedModel":
        """Solve the instance and return the result view.

        The Model is consumed. Infeasible, unbounded or aborted solves are
        reported through ``SolvedModel.status()``, not raised. On any failure
        the engine context is released before the exception propagates.

        Raises:
            InvalidCodeError: If the engine returns a code outside the status
                table
            EngineError: If the engine fails while solving or reporting the
                outcome
        """
        from .solved_model import SolvedModel

        engine = self._engine
        handle, cols, rows = self._transfer()

        try:
            logger.info(f"Optimizing: {engine.num_cols()} columns, {engine.num_rows()} rows")
            status = Status.from_code(engine.optimize())
            logger.info(
                f"Optimization finished: status={status.name}, objective={engine.obj_value_real()}, "
                f"iterations={engine.num_iterations()}, time={engine.solving_time():.3f}s"
            )
        except Exception as e:
            logger.error(f"Optimization failed, releasing engine context: {e}")
            handle.release()
            raise

        return SolvedModel(handle, cols, rows, status)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _dense_entries(coefficients: Coefficients, size: int, allocator: IdentifierAllocator) -> List[float]:
        """Expand coefficients into a dense list of at least ``size`` entries.

        Sparse keys beyond ``size`` lengthen the list; the engine rejects them.
        """
        if not isinstance(coefficients, Mapping):
            return [float(v) for v in coefficients]

        entries = [0.0] * size
        for key, value in coefficients.items():
            if isinstance(key, (ColumnId, RowId)):
                index = allocator.check(key)
            else:
                index = operator.index(key)
            if index < 0:
                raise EngineError(f"Negative coefficient index {index}")
            if index >= len(entries):
                entries.extend([0.0] * (index + 1 - len(entries)))
            entries[index] = float(value)
        return entries


def _count_nonzeros(entries: Sequence[float]) -> int:
    return sum(1 for v in entries if v != 0.0)
