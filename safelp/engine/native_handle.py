"""Exclusive ownership of one engine context.

A NativeHandle is created when a Model is constructed and travels unchanged
between Model and SolvedModel. The context is freed exactly once: on explicit
``release()``, on context-manager exit, or when the last view referencing the
handle is garbage collected (``weakref.finalize`` also covers interpreter exit).
"""

import logging
import weakref
from typing import Callable, Optional

from .base import SolverEngine
from ..errors import EngineAllocationError, HandleReleasedError

logger = logging.getLogger(__name__)

EngineFactory = Callable[[], Optional[SolverEngine]]


def _free_context(context: SolverEngine) -> None:
    # Must not reference the handle itself, or finalize would keep it alive.
    context.free()


class NativeHandle:
    """Owner of one engine context.

    Args:
        engine_factory: Zero-argument callable returning a new engine context,
            or None on failure. Defaults to ``HighsEngine.create``.

    Raises:
        EngineAllocationError: If the factory fails or returns None
    """

    def __init__(self, engine_factory: Optional[EngineFactory] = None):
        if engine_factory is None:
            from .highs_engine import HighsEngine
            engine_factory = HighsEngine.create

        try:
            context = engine_factory()
        except Exception as e:
            logger.error(f"Engine context allocation failed: {e}")
            raise EngineAllocationError(f"Engine context allocation failed: {e}") from e

        if context is None:
            raise EngineAllocationError("Engine factory returned no context")

        self._context = context
        self._finalizer = weakref.finalize(self, _free_context, context)

    @property
    def context(self) -> SolverEngine:
        """The live engine context.

        Raises:
            HandleReleasedError: If the handle was already released
        """
        if not self._finalizer.alive:
            raise HandleReleasedError("Engine context has already been released")
        return self._context

    @property
    def released(self) -> bool:
        return not self._finalizer.alive

    def release(self) -> None:
        """Free the engine context. Idempotent."""
        if self._finalizer.alive:
            self._finalizer()
            logger.debug("Released engine context")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False

    def __repr__(self) -> str:
        state = "released" if self.released else type(self._context).__name__
        return f"NativeHandle({state})"
