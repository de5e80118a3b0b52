"""Base class for the two views of one engine context.

Model (builder) and SolvedModel (result) are distinct types over the same
NativeHandle and identifier allocators. Converting one into the other moves
those three objects into the new view and marks the old view consumed; any
later call on a consumed view raises ModelConsumedError.

This base class provides:
- Access to the live engine context (consumed/released checks)
- Column and row counts
- Parameter getters, typed where a value enumeration exists
- close() and context-manager support
"""

import logging
from typing import Optional, Tuple, Union

from ..engine.base import SolverEngine
from ..engine.native_handle import NativeHandle
from ..errors import ModelConsumedError
from ..models.identifiers import IdentifierAllocator
from ..models.params import BoolParam, IntParam, RealParam

logger = logging.getLogger(__name__)


class EngineView:
    """Shared state and queries of Model and SolvedModel."""

    def __init__(
        self,
        handle: NativeHandle,
        cols: IdentifierAllocator,
        rows: IdentifierAllocator,
    ):
        self._handle = handle
        self._cols = cols
        self._rows = rows
        self._consumed = False

    @property
    def _engine(self) -> SolverEngine:
        if self._consumed:
            raise ModelConsumedError(
                f"This {type(self).__name__} was converted into another view and can no longer be used"
            )
        return self._handle.context

    def _ensure_live(self) -> None:
        """Raise unless this view still owns a live engine context."""
        self._engine

    def _transfer(self) -> Tuple[NativeHandle, IdentifierAllocator, IdentifierAllocator]:
        """Give up the handle and allocators to a new view."""
        self._ensure_live()
        self._consumed = True
        return self._handle, self._cols, self._rows

    @property
    def consumed(self) -> bool:
        return self._consumed

    def num_cols(self) -> int:
        return self._engine.num_cols()

    def num_rows(self) -> int:
        return self._engine.num_rows()

    # ------------------------------------------------------------------
    # Parameter getters
    # ------------------------------------------------------------------

    def bool_param(self, param: BoolParam) -> Optional[bool]:
        return self._engine.get_bool_param(BoolParam(param).value)

    def int_param(self, param: IntParam) -> Optional[Union[int, object]]:
        """Current value of an integer parameter.

        Returns:
            The typed value for choice-valued parameters (e.g. ``Simplifier.OFF``),
            the plain integer otherwise, or None if the engine does not know it.
            A value outside its typed enumeration is returned as a plain integer.
        """
        param = IntParam(param)
        value = self._engine.get_int_param(param.value)
        value_type = param.value_type
        if value is None or value_type is None:
            return value
        try:
            return value_type(value)
        except ValueError:
            return value

    def real_param(self, param: RealParam) -> Optional[float]:
        return self._engine.get_real_param(RealParam(param).value)

    # ------------------------------------------------------------------
    # Lifetime
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release the engine context now.

        Closing a consumed view is a no-op; the context belongs to the view it
        was converted into.
        """
        if not self._consumed:
            self._handle.release()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        if self._consumed:
            return f"<{type(self).__name__} (consumed)>"
        if self._handle.released:
            return f"<{type(self).__name__} (closed)>"
        return f"<{type(self).__name__} cols={self.num_cols()} rows={self.num_rows()}>"
