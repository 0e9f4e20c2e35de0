"""Table and column descriptors, and the junction-table shape check."""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple

ID_SUFFIX = "_id"


@dataclass(frozen=True)
class ColumnInfo:
    """One row of ``PRAGMA table_info``, as reported by the engine."""

    cid: int
    name: str
    type: str
    not_null: bool
    default: Optional[Any]
    pk: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ColumnInfo":
        return cls(
            cid=row["cid"],
            name=row["name"],
            type=row["type"],
            not_null=row["notnull"] == 1,
            default=row["dflt_value"],
            pk=row["pk"],
        )

    @property
    def is_primary_key(self) -> bool:
        return self.pk > 0


@dataclass(frozen=True)
class ColumnDescriptor:
    """Expected shape of a column."""

    name: str
    type: str
    not_null: bool = False
    primary_key: bool = False


@dataclass(frozen=True)
class TableDescriptor:
    name: str
    columns: Tuple[ColumnDescriptor, ...] = field(default_factory=tuple)

    @property
    def column_names(self) -> List[str]:
        return [col.name for col in self.columns]


@dataclass(frozen=True)
class RelationshipTable:
    """A junction table linking two parent tables through their ``id``.

    Args:
        name: Physical table name.
        left: Referencing column and parent table, e.g. ("movie_id", "movies").
        right: Same for the second parent.
    """

    name: str
    left: Tuple[str, str]
    right: Tuple[str, str]

    @property
    def parents(self) -> Tuple[str, str]:
        return (self.left[1], self.right[1])

    @property
    def descriptor(self) -> TableDescriptor:
        cols = tuple(
            ColumnDescriptor(name, "integer", not_null=True, primary_key=True)
            for name, _ in (self.left, self.right)
        )
        return TableDescriptor(self.name, cols)


def check_relationship_columns(
    table: RelationshipTable, columns: Sequence[ColumnInfo]
) -> List[str]:
    """Compare introspected columns against the junction-table invariant.

    Exactly two integer columns named after the descriptor, in order. Every
    ``_id`` column must be NOT NULL and part of the primary key, and no
    other column may be either.

    Returns:
        Human-readable violations; empty when the table conforms.
    """
    problems: List[str] = []
    expected = table.descriptor.columns

    actual_shape = [(col.name, col.type.lower()) for col in columns]
    expected_shape = [(col.name, col.type) for col in expected]
    if actual_shape != expected_shape:
        problems.append(
            f"{table.name}: expected columns {expected_shape}, got {actual_shape}"
        )

    for col in columns:
        if col.name.endswith(ID_SUFFIX):
            if not col.is_primary_key:
                problems.append(f"{table.name}.{col.name} is not part of the primary key")
            if not col.not_null:
                problems.append(f"{table.name}.{col.name} allows NULL")
        else:
            if col.is_primary_key:
                problems.append(f"{table.name}.{col.name} must not be a primary key")
            if col.not_null:
                problems.append(f"{table.name}.{col.name} must not be NOT NULL")

    return problems
