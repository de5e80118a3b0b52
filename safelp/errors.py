"""Exception taxonomy for the modeling layer.

Two families exist:

- PreconditionViolation: the caller (or the engine) broke a contract this layer
  relies on. No safe default exists, so the current call is terminated.
- EngineError: the engine refused a structural call it was handed.

Solver outcomes such as infeasibility, unboundedness or aborts on a limit are
NOT exceptions. They are ordinary Status values inspected after optimize().
"""


class SafeLPError(Exception):
    """Base class for all errors raised by safelp."""


class PreconditionViolation(SafeLPError):
    """A contract required by the current call does not hold."""


class EngineAllocationError(PreconditionViolation, RuntimeError):
    """The engine could not allocate a native context."""


class ModelFileNotFoundError(PreconditionViolation, FileNotFoundError):
    """The problem file handed to read_file() does not exist."""


class UnsupportedFormatError(PreconditionViolation, ValueError):
    """The problem file suffix is neither .lp nor .mps."""


class InvalidCodeError(PreconditionViolation, ValueError):
    """The engine returned an integer outside a documented code table."""


class StaleIdentifierError(PreconditionViolation, LookupError):
    """A ColumnId/RowId no longer refers to the position it was issued for."""


class HandleReleasedError(PreconditionViolation, RuntimeError):
    """The native engine context has already been released."""


class ModelConsumedError(PreconditionViolation, RuntimeError):
    """The Model/SolvedModel view gave its handle away in a state transition."""


class EngineError(SafeLPError, RuntimeError):
    """The engine rejected a call (bad structural data, unparsable file)."""
