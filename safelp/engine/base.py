"""Boundary to the external LP engine.

SolverEngine declares every call this layer makes into an engine context. An
instance IS one native context: ``create()`` allocates it and ``free()``
releases it. Engines speak in raw integers (parameter ids, status codes, basis
codes) and dense float arrays; mapping those onto typed values is the job of
the model views, not of the engine.

Implementations:
- HighsEngine (highs_engine.py): HiGHS through highspy
- tests/fixtures/engine_mocks.py: in-memory double that counts allocations
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence


class SolverEngine(ABC):
    """One native engine context.

    Contexts are not thread-safe. Each is owned by exactly one NativeHandle.
    """

    @classmethod
    @abstractmethod
    def create(cls) -> Optional["SolverEngine"]:
        """Allocate a new context, or return None if allocation failed."""
        raise NotImplementedError("Subclass must implement create()")

    @abstractmethod
    def free(self) -> None:
        """Release the context. Called exactly once by the owning handle."""
        raise NotImplementedError("Subclass must implement free()")

    # ------------------------------------------------------------------
    # Problem structure
    # ------------------------------------------------------------------

    @abstractmethod
    def add_col_real(
        self,
        colentries: Sequence[float],
        colsize: int,
        nnonzeros: int,
        objval: float,
        lb: float,
        ub: float,
    ) -> None:
        """Append a column given dense entries aligned to row order."""
        raise NotImplementedError

    @abstractmethod
    def add_row_real(
        self,
        rowentries: Sequence[float],
        rowsize: int,
        nnonzeros: int,
        lhs: float,
        rhs: float,
    ) -> None:
        """Append a range row given dense entries aligned to column order."""
        raise NotImplementedError

    @abstractmethod
    def remove_col_real(self, colidx: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_row_real(self, rowidx: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def change_var_bounds_real(self, colidx: int, lb: float, ub: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def change_row_range_real(self, rowidx: int, lhs: float, rhs: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def change_obj_real(self, colidx: int, objval: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def num_cols(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def num_rows(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_instance_file(self, filename: str) -> bool:
        """Replace the problem with the one parsed from ``filename``.

        Returns:
            True if the engine parsed the file
        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Parameters (raw ids)
    # ------------------------------------------------------------------

    @abstractmethod
    def set_bool_param(self, paramcode: int, paramvalue: bool) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_int_param(self, paramcode: int, paramvalue: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_real_param(self, paramcode: int, paramvalue: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_bool_param(self, paramcode: int) -> Optional[bool]:
        raise NotImplementedError

    @abstractmethod
    def get_int_param(self, paramcode: int) -> Optional[int]:
        raise NotImplementedError

    @abstractmethod
    def get_real_param(self, paramcode: int) -> Optional[float]:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Solving and results
    # ------------------------------------------------------------------

    @abstractmethod
    def optimize(self) -> int:
        """Run the solver to completion and return its status code."""
        raise NotImplementedError

    @abstractmethod
    def obj_value_real(self) -> float:
        raise NotImplementedError

    @abstractmethod
    def get_primal_real(self, dim: int) -> List[float]:
        raise NotImplementedError

    @abstractmethod
    def get_dual_real(self, dim: int) -> List[float]:
        raise NotImplementedError

    @abstractmethod
    def get_redcost_real(self, dim: int) -> List[float]:
        raise NotImplementedError

    @abstractmethod
    def num_iterations(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def solving_time(self) -> float:
        """Seconds spent in the last optimize() call."""
        raise NotImplementedError

    @abstractmethod
    def basis_col_status(self, colidx: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def basis_row_status(self, rowidx: int) -> int:
        raise NotImplementedError

    def basis_col_statuses(self, dim: int) -> List[int]:
        """Basis codes of the first ``dim`` columns, in position order."""
        return [self.basis_col_status(i) for i in range(dim)]

    def basis_row_statuses(self, dim: int) -> List[int]:
        """Basis codes of the first ``dim`` rows, in position order."""
        return [self.basis_row_status(i) for i in range(dim)]
