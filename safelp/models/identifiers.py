"""Column and row identifiers.

An identifier records the position a column/row had when it was issued plus a
generation stamp. Removing a position shifts every later position down by one,
so the allocator restamps those positions; identifiers issued before the
removal then no longer match and are rejected with StaleIdentifierError instead
of silently addressing a different column/row.

Identifiers for positions before the removed one keep their stamp and stay
valid.
"""

from dataclasses import dataclass
from typing import List

from ..errors import StaleIdentifierError


@dataclass(frozen=True)
class ColumnId:
    """Identifier of a column in a Model."""
    index: int
    generation: int = 0

    def __index__(self) -> int:
        return self.index

    def __str__(self) -> str:
        return f"col{self.index}"


@dataclass(frozen=True)
class RowId:
    """Identifier of a row in a Model."""
    index: int
    generation: int = 0

    def __index__(self) -> int:
        return self.index

    def __str__(self) -> str:
        return f"row{self.index}"


class IdentifierAllocator:
    """Mints identifiers of one kind and validates them on use.

    The allocator keeps one generation stamp per live position. It never talks
    to the engine; the owning Model passes in the engine counts.
    """

    def __init__(self, id_type, count: int = 0):
        self.id_type = id_type
        self._generation = 0
        self._stamps: List[int] = [0] * count

    def __len__(self) -> int:
        return len(self._stamps)

    @property
    def generation(self) -> int:
        return self._generation

    def mint(self, count_before: int):
        """Issue the identifier of a freshly appended position.

        Args:
            count_before: Engine count before the append (the new 0-based index)
        """
        if count_before != len(self._stamps):
            # The engine grew behind our back (or shrank); resynchronise.
            self.reset(count_before)
        self._stamps.append(self._generation)
        return self.id_type(count_before, self._generation)

    def identifier_at(self, index: int):
        """Current identifier of an existing position."""
        if not 0 <= index < len(self._stamps):
            raise StaleIdentifierError(
                f"No {self._kind_name} at position {index} (count is {len(self._stamps)})"
            )
        return self.id_type(index, self._stamps[index])

    def check(self, identifier) -> int:
        """Validate an identifier and return its position.

        Raises:
            StaleIdentifierError: If the identifier is of the wrong kind, out of
                range, or its position was removed or shifted since it was issued.
        """
        if not isinstance(identifier, self.id_type):
            raise StaleIdentifierError(
                f"Expected {self.id_type.__name__}, got {type(identifier).__name__}"
            )
        index = identifier.index
        if not 0 <= index < len(self._stamps):
            raise StaleIdentifierError(
                f"{identifier!r} is out of range ({len(self._stamps)} {self._kind_name}s)"
            )
        if self._stamps[index] != identifier.generation:
            raise StaleIdentifierError(
                f"{identifier!r} is stale: position {index} shifted after a removal "
                f"(current generation {self._stamps[index]})"
            )
        return index

    def release(self, identifier) -> int:
        """Validate and drop an identifier's position; later positions shift.

        Returns:
            The removed position
        """
        index = self.check(identifier)
        del self._stamps[index]
        self._generation += 1
        for later in range(index, len(self._stamps)):
            self._stamps[later] = self._generation
        return index

    def reset(self, count: int) -> None:
        """Invalidate every outstanding identifier and track ``count`` positions."""
        self._generation += 1
        self._stamps = [self._generation] * count

    @property
    def _kind_name(self) -> str:
        return "column" if self.id_type is ColumnId else "row"
