"""Immutable, fully materialized query results.

A ``TabularResult`` is what a session hands back from ``query()``: every
row has already been read off the driver cursor and the cursor has been
closed, so callers never hold a live database resource.

Examples:
    >>> result = TabularResult.from_rows(["id", "name"], [(1, "Ada"), (2, "Lin")])
    >>> len(result)
    2
    >>> result[0]["name"]
    'Ada'
    >>> result.first().labels
    ('id', 'name')
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, overload


class Row(Mapping[str, Any]):
    """One result row: an ordered, read-only mapping of column label to value."""

    __slots__ = ("_data",)

    def __init__(self, data: Iterable[tuple[str, Any]] | Mapping[str, Any] = ()):
        self._data: dict[str, Any] = dict(data)

    @classmethod
    def from_values(cls, labels: Sequence[str], values: Sequence[Any]) -> Row:
        return cls(zip(labels, values, strict=True))

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(self._data)

    def value(self, label: str, default: Any = None) -> Any:
        """Value for ``label``, or ``default`` when the column is absent."""
        return self._data.get(label, default)

    def __getitem__(self, label: str) -> Any:
        return self._data[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Row({self._data!r})"


class TabularResult(Sequence[Row]):
    """An ordered, immutable sequence of :class:`Row` objects."""

    __slots__ = ("_rows", "_labels")

    def __init__(self, rows: Iterable[Row] = (), labels: Sequence[str] = ()):
        self._rows: tuple[Row, ...] = tuple(rows)
        self._labels: tuple[str, ...] = tuple(labels)

    @classmethod
    def from_rows(cls, labels: Sequence[str], rows: Iterable[Sequence[Any]]) -> TabularResult:
        """Build a result from column labels and raw driver row tuples."""
        labels = tuple(labels)
        return cls((Row.from_values(labels, row) for row in rows), labels)

    @property
    def labels(self) -> tuple[str, ...]:
        """Column labels in select order."""
        return self._labels

    def is_empty(self) -> bool:
        return not self._rows

    def first(self) -> Row | None:
        """First row, or None for an empty result."""
        return self._rows[0] if self._rows else None

    def column(self, label: str) -> list[Any]:
        """All values of one column, in row order."""
        return [row.value(label) for row in self._rows]

    def to_dicts(self) -> list[dict[str, Any]]:
        return [dict(row) for row in self._rows]

    @overload
    def __getitem__(self, index: int) -> Row: ...

    @overload
    def __getitem__(self, index: slice) -> TabularResult: ...

    def __getitem__(self, index: int | slice) -> Row | TabularResult:
        if isinstance(index, slice):
            return TabularResult(self._rows[index], self._labels)
        return self._rows[index]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TabularResult):
            return self._rows == other._rows
        return NotImplemented

    def __repr__(self) -> str:
        return f"TabularResult(rows={len(self._rows)}, labels={self._labels!r})"


__all__ = ["Row", "TabularResult"]
