"""Solver outcome enumeration and its engine code table."""

import operator
from enum import IntEnum
from types import MappingProxyType

from pyomo.opt import SolverStatus, TerminationCondition

from ..errors import InvalidCodeError


class Status(IntEnum):
    """Outcome reported by the engine for one optimize() call.

    Member values are the engine's integer codes and must not change.
    """
    ERROR = -15                        # An error occurred
    NO_RATIOTESTER = -14               # No ratio tester loaded
    NO_PRICER = -13                    # No pricer loaded
    NO_SOLVER = -12                    # No linear solver loaded
    NOT_INIT = -11                     # Not initialised
    ABORT_EXDECOMP = -10               # Aborted to exit decomposition simplex
    ABORT_DECOMP = -9                  # Aborted to commence decomposition simplex
    ABORT_CYCLING = -8                 # Aborted on detection of cycling
    ABORT_TIME = -7                    # Aborted on time limit
    ABORT_ITER = -6                    # Aborted on iteration limit
    ABORT_VALUE = -5                   # Aborted on objective limit
    SINGULAR = -4                      # Basis is singular
    NO_PROBLEM = -3                    # No problem has been loaded
    REGULAR = -2                       # LP has a usable basis
    RUNNING = -1                       # Algorithm is running
    UNKNOWN = 0                        # Nothing known on loaded problem
    OPTIMAL = 1                        # Solved to optimality
    UNBOUNDED = 2                      # Proven primal unbounded
    INFEASIBLE = 3                     # Proven primal infeasible
    INFORUNBD = 4                      # Primal infeasible or unbounded
    OPTIMAL_UNSCALED_VIOLATIONS = 5    # Optimal, but unscaled solution has violations

    @classmethod
    def from_code(cls, code) -> "Status":
        """Map an engine integer to its Status.

        Raises:
            InvalidCodeError: If ``code`` is not an integer of the code table.
        """
        try:
            if isinstance(code, bool):
                raise TypeError("bool is not a status code")
            return _STATUS_BY_CODE[operator.index(code)]
        except (KeyError, TypeError):
            raise InvalidCodeError(
                f"Engine returned status code {code!r}, which is outside the "
                f"documented range [{min(_STATUS_BY_CODE)}, {max(_STATUS_BY_CODE)}]"
            ) from None

    @property
    def code(self) -> int:
        """Engine integer for this status."""
        return int(self)

    def is_optimal(self) -> bool:
        return self in (Status.OPTIMAL, Status.OPTIMAL_UNSCALED_VIOLATIONS)

    def is_aborted(self) -> bool:
        """True when the engine stopped early on a limit or on cycling."""
        return Status.ABORT_EXDECOMP <= self <= Status.ABORT_VALUE

    def is_error(self) -> bool:
        """True for engine-internal failures (missing modules, singular basis)."""
        return self <= Status.NOT_INIT or self == Status.SINGULAR

    @property
    def termination_condition(self) -> TerminationCondition:
        """This status in Pyomo's termination vocabulary."""
        return _TERMINATION_BY_STATUS[self]

    @property
    def solver_status(self) -> SolverStatus:
        """This status in Pyomo's solver-status vocabulary."""
        if self.is_error():
            return SolverStatus.error
        if self.is_aborted():
            return SolverStatus.aborted
        if self in (Status.UNKNOWN, Status.REGULAR, Status.RUNNING, Status.NO_PROBLEM):
            return SolverStatus.warning
        return SolverStatus.ok


_STATUS_BY_CODE = MappingProxyType({status.value: status for status in Status})

_TERMINATION_BY_STATUS = MappingProxyType({
    Status.ERROR: TerminationCondition.error,
    Status.NO_RATIOTESTER: TerminationCondition.internalSolverError,
    Status.NO_PRICER: TerminationCondition.internalSolverError,
    Status.NO_SOLVER: TerminationCondition.internalSolverError,
    Status.NOT_INIT: TerminationCondition.internalSolverError,
    Status.ABORT_EXDECOMP: TerminationCondition.other,
    Status.ABORT_DECOMP: TerminationCondition.other,
    Status.ABORT_CYCLING: TerminationCondition.other,
    Status.ABORT_TIME: TerminationCondition.maxTimeLimit,
    Status.ABORT_ITER: TerminationCondition.maxIterations,
    Status.ABORT_VALUE: TerminationCondition.minFunctionValue,
    Status.SINGULAR: TerminationCondition.solverFailure,
    Status.NO_PROBLEM: TerminationCondition.invalidProblem,
    Status.REGULAR: TerminationCondition.unknown,
    Status.RUNNING: TerminationCondition.unknown,
    Status.UNKNOWN: TerminationCondition.unknown,
    Status.OPTIMAL: TerminationCondition.optimal,
    Status.UNBOUNDED: TerminationCondition.unbounded,
    Status.INFEASIBLE: TerminationCondition.infeasible,
    Status.INFORUNBD: TerminationCondition.infeasibleOrUnbounded,
    Status.OPTIMAL_UNSCALED_VIOLATIONS: TerminationCondition.optimal,
})
