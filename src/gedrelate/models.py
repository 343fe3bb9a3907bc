"""Data classes for family tree entities and relationship results."""

from dataclasses import dataclass, field, replace
from enum import IntEnum


@dataclass
class Person:
    id: str
    name: str = "Unknown"
    given_name: str | None = None
    surname: str | None = None
    sex: str | None = None
    birth_date_string: str | None = None
    birth_date: str | None = None  # ISO format YYYY-MM-DD or None
    birth_place: str | None = None
    death_date_string: str | None = None
    death_date: str | None = None  # ISO format YYYY-MM-DD or None
    death_place: str | None = None
    # IDs of other people, not the people themselves
    parents: list[str] = field(default_factory=list)
    children: list[str] = field(default_factory=list)
    spouses: list[str] = field(default_factory=list)

    def snapshot(self) -> "Person":
        """Copy without the family links, used for relationship paths."""
        return replace(self, parents=[], children=[], spouses=[])


@dataclass
class Union:
    id: str
    person1: Person | None = None
    person2: Person | None = None
    children: list[str] = field(default_factory=list)
    start_date: str | None = None
    end_date: str | None = None

    def partner_ids(self) -> list[str]:
        return [p.id for p in (self.person1, self.person2) if p is not None]


class RelationshipType(IntEnum):
    UNKNOWN = 0

    # consanguineous (by blood)
    SELF = 1
    SIBLING = 2
    CHILD = 3
    PARENT = 4
    AUNT_UNCLE = 5
    COUSIN = 6
    NIECE_NEPHEW = 7

    # affinal (by marriage), each is its blood counterpart + AFFINAL_OFFSET
    SPOUSE = 8
    SIBLING_IN_LAW = 9
    CHILD_IN_LAW = 10
    PARENT_IN_LAW = 11
    AUNT_UNCLE_IN_LAW = 12
    COUSIN_IN_LAW = 13
    NIECE_NEPHEW_IN_LAW = 14

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_affinal(self) -> bool:
        return self >= RelationshipType.SPOUSE

    @property
    def inverse(self) -> "RelationshipType":
        return _INVERSES.get(self, self)

    def to_affinal(self) -> "RelationshipType":
        if self.is_affinal:
            return self
        if self is RelationshipType.UNKNOWN:
            raise ValueError("unknown relationship has no affinal counterpart")
        return RelationshipType(self + AFFINAL_OFFSET)

    def __str__(self) -> str:
        return self.label


AFFINAL_OFFSET = RelationshipType.SPOUSE - RelationshipType.SELF

_LABELS = {
    RelationshipType.UNKNOWN: "unknown",
    RelationshipType.SELF: "self",
    RelationshipType.SIBLING: "sibling",
    RelationshipType.CHILD: "child",
    RelationshipType.PARENT: "parent",
    RelationshipType.AUNT_UNCLE: "aunt/uncle",
    RelationshipType.COUSIN: "cousin",
    RelationshipType.NIECE_NEPHEW: "niece/nephew",
    RelationshipType.SPOUSE: "spouse",
    RelationshipType.SIBLING_IN_LAW: "sibling in-law",
    RelationshipType.CHILD_IN_LAW: "child in-law",
    RelationshipType.PARENT_IN_LAW: "parent in-law",
    RelationshipType.AUNT_UNCLE_IN_LAW: "aunt/uncle in-law",
    RelationshipType.COUSIN_IN_LAW: "cousin in-law",
    RelationshipType.NIECE_NEPHEW_IN_LAW: "niece/nephew in-law",
}

_INVERSES = {
    RelationshipType.PARENT: RelationshipType.CHILD,
    RelationshipType.CHILD: RelationshipType.PARENT,
    RelationshipType.AUNT_UNCLE: RelationshipType.NIECE_NEPHEW,
    RelationshipType.NIECE_NEPHEW: RelationshipType.AUNT_UNCLE,
    RelationshipType.PARENT_IN_LAW: RelationshipType.CHILD_IN_LAW,
    RelationshipType.CHILD_IN_LAW: RelationshipType.PARENT_IN_LAW,
    RelationshipType.AUNT_UNCLE_IN_LAW: RelationshipType.NIECE_NEPHEW_IN_LAW,
    RelationshipType.NIECE_NEPHEW_IN_LAW: RelationshipType.AUNT_UNCLE_IN_LAW,
}


@dataclass(frozen=True)
class Lineage:
    type: RelationshipType
    generations_removed: int
    description: str


@dataclass
class Relationship:
    """How the person at source_id relates to the person at target_id.

    For a blood relationship, path runs from the source person to the common
    ancestor. For an affinal one, it runs from the source person to a member
    of the connecting union.
    """

    source_id: str
    target_id: str
    type: RelationshipType
    description: str
    generations_removed: int  # < 0: target is toward the ancestors
    path: list[Person] = field(default_factory=list)

    def path_ids(self) -> list[str]:
        return [p.id for p in self.path]


@dataclass
class MutualRelationship:
    r1: Relationship  # person1 -> person2
    r2: Relationship  # person2 -> person1
    common_person: Person | None = None
    union: Union | None = None

    def __post_init__(self):
        if (self.common_person is None) == (self.union is None):
            raise ValueError("exactly one of common_person or union must be set")

    @property
    def is_affinal(self) -> bool:
        return self.union is not None
