"""Per-column and per-row basis status codes."""

import operator
from enum import IntEnum
from types import MappingProxyType

from ..errors import InvalidCodeError


class BasisStatus(IntEnum):
    """Position of a column or row relative to the simplex basis."""
    AT_UPPER = 0    # set to its upper bound
    AT_LOWER = 1    # set to its lower bound
    FIXED = 2       # fixed to its identical bounds
    FREE = 3        # free and fixed to zero (columns only)
    BASIC = 4
    UNKNOWN = 5     # nothing known about basis status

    @classmethod
    def from_col_code(cls, code) -> "BasisStatus":
        """Map an engine column code to its BasisStatus.

        Raises:
            InvalidCodeError: If ``code`` is not in the column code table.
        """
        return _lookup(_COL_STATUS_BY_CODE, code, "column")

    @classmethod
    def from_row_code(cls, code) -> "BasisStatus":
        """Map an engine row code to its BasisStatus.

        Rows have no FREE state, so code 3 is rejected as well.

        Raises:
            InvalidCodeError: If ``code`` is not in the row code table.
        """
        return _lookup(_ROW_STATUS_BY_CODE, code, "row")

    @property
    def code(self) -> int:
        return int(self)

    def is_basic(self) -> bool:
        return self == BasisStatus.BASIC

    def is_at_bound(self) -> bool:
        return self in (BasisStatus.AT_UPPER, BasisStatus.AT_LOWER, BasisStatus.FIXED)


_COL_STATUS_BY_CODE = MappingProxyType({status.value: status for status in BasisStatus})

_ROW_STATUS_BY_CODE = MappingProxyType({
    status.value: status for status in BasisStatus if status != BasisStatus.FREE
})


def _lookup(table, code, kind: str) -> BasisStatus:
    try:
        if isinstance(code, bool):
            raise TypeError("bool is not a basis status code")
        return table[operator.index(code)]
    except (KeyError, TypeError):
        raise InvalidCodeError(
            f"Engine returned {kind} basis status code {code!r}; "
            f"valid {kind} codes are {sorted(table)}"
        ) from None
