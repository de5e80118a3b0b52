"""Result view of an LP instance.

A SolvedModel exists only as the return value of ``Model.optimize()``. Its
status is fixed for its whole lifetime; the remaining queries read whatever
the engine computed in that solve. ``into_model()`` hands the same context
back to a Model for further edits (the next solve warm-starts from it).
"""

import logging
from typing import TYPE_CHECKING, List

import pandas as pd
from pyomo.opt import SolverStatus, TerminationCondition

from .base_view import EngineView
from .constants import SOLUTION_TOLERANCE
from .result_schema import SolveSummary
from ..models.basis_status import BasisStatus
from ..models.identifiers import ColumnId, RowId
from ..models.status import Status

if TYPE_CHECKING:
    from .model import Model

logger = logging.getLogger(__name__)


class SolvedModel(EngineView):
    """Read-only queries on a solved instance."""

    def __init__(self, handle, cols, rows, status: Status):
        super().__init__(handle, cols, rows)
        self._status = status

    def status(self) -> Status:
        """Status of the solve that produced this view."""
        self._ensure_live()
        return self._status

    def termination_condition(self) -> TerminationCondition:
        return self.status().termination_condition

    def solver_status(self) -> SolverStatus:
        return self.status().solver_status

    def obj_val(self) -> float:
        return self._engine.obj_value_real()

    def primal_solution(self) -> List[float]:
        """Column values, one per column."""
        engine = self._engine
        return engine.get_primal_real(engine.num_cols())

    def dual_solution(self) -> List[float]:
        """Row duals, one per row."""
        engine = self._engine
        return engine.get_dual_real(engine.num_rows())

    def reduced_costs(self) -> List[float]:
        """Column reduced costs, one per column."""
        engine = self._engine
        return engine.get_redcost_real(engine.num_cols())

    def num_iterations(self) -> int:
        return self._engine.num_iterations()

    def solving_time(self) -> float:
        return self._engine.solving_time()

    def col_basis_status(self, col: ColumnId) -> BasisStatus:
        """Basis status of a column.

        Raises:
            StaleIdentifierError: If ``col`` no longer addresses a column
            InvalidCodeError: If the engine reports a code outside the table
        """
        engine = self._engine
        return BasisStatus.from_col_code(engine.basis_col_status(self._cols.check(col)))

    def row_basis_status(self, row: RowId) -> BasisStatus:
        """Basis status of a row. Rows are never FREE."""
        engine = self._engine
        return BasisStatus.from_row_code(engine.basis_row_status(self._rows.check(row)))

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def summary(self, include_solution: bool = True) -> SolveSummary:
        """Validated snapshot of this solve.

        Args:
            include_solution: Also copy the primal, dual and reduced-cost vectors
        """
        status = self.status()
        summary = SolveSummary(
            status=status.name,
            status_code=status.code,
            termination_condition=status.termination_condition.value,
            objective_value=self.obj_val(),
            num_iterations=self.num_iterations(),
            solving_time=self.solving_time(),
            num_cols=self.num_cols(),
            num_rows=self.num_rows(),
            primal_solution=self.primal_solution() if include_solution else [],
            dual_solution=self.dual_solution() if include_solution else [],
            reduced_costs=self.reduced_costs() if include_solution else [],
        )
        logger.debug(f"Summary: {summary}")
        return summary

    def column_frame(self) -> pd.DataFrame:
        """One row per column: value, reduced cost and basis status."""
        engine = self._engine
        n = engine.num_cols()
        values = engine.get_primal_real(n)
        frame = pd.DataFrame({
            "column": [str(self._cols.identifier_at(i)) for i in range(n)],
            "value": values,
            "reduced_cost": engine.get_redcost_real(n),
            "basis_status": [BasisStatus.from_col_code(code).name for code in engine.basis_col_statuses(n)],
            "nonzero": [abs(v) > SOLUTION_TOLERANCE for v in values],
        })
        return frame.set_index("column")

    def row_frame(self) -> pd.DataFrame:
        """One row per row: dual value and basis status."""
        engine = self._engine
        m = engine.num_rows()
        frame = pd.DataFrame({
            "row": [str(self._rows.identifier_at(i)) for i in range(m)],
            "dual": engine.get_dual_real(m),
            "basis_status": [BasisStatus.from_row_code(code).name for code in engine.basis_row_statuses(m)],
        })
        return frame.set_index("row")

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def into_model(self) -> "Model":
        """Return to the builder view over the same context (consumes this view)."""
        from .model import Model

        handle, cols, rows = self._transfer()
        logger.debug("Converted solved model back into a model")
        return Model._adopt(handle, cols, rows)
