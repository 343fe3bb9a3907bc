"""Classify and describe blood relationships from two ancestral lines.

The classification follows the usual degree-of-cousinship arithmetic: the
number of generations from each person up to the common ancestor decides the
kind of relationship, and their difference decides how many times removed.
"""

from collections.abc import Sequence

from gedrelate.errors import LineageError
from gedrelate.models import Lineage, RelationshipType

# Beyond this many generations removed a cousin is just "distant".
MAX_COUSIN_REMOVAL = 20


def classify(line1: Sequence[str], line2: Sequence[str]) -> tuple[Lineage, Lineage]:
    """
    Classify the relationship between the first people of two ancestral lines.

    Both lines start at a query person and end at the same common ancestor.
    The first Lineage describes person 1 relative to person 2, the second the
    inverse.

    Raises:
        LineageError: The lines imply an impossible relationship.
    """
    generations_removed1 = len(line1) - len(line2)
    generations_removed2 = len(line2) - len(line1)

    # the first item of each line is the query person
    dist1 = len(line1) - 1
    dist2 = len(line2) - 1

    if dist1 == 0 and dist2 == 0 and line1[0] == line2[0]:
        type1 = type2 = RelationshipType.SELF
    elif dist1 == 0:
        type1, type2 = RelationshipType.PARENT, RelationshipType.CHILD
    elif dist2 == 0:
        type1, type2 = RelationshipType.CHILD, RelationshipType.PARENT
    elif dist1 == dist2:
        if dist1 == 1:
            type1 = type2 = RelationshipType.SIBLING
        else:
            type1 = type2 = RelationshipType.COUSIN
            dist1, dist2 = -dist1, -dist2
    elif dist1 == 1:
        type1, type2 = RelationshipType.AUNT_UNCLE, RelationshipType.NIECE_NEPHEW
    elif dist2 == 1:
        type1, type2 = RelationshipType.NIECE_NEPHEW, RelationshipType.AUNT_UNCLE
    else:
        type1 = type2 = RelationshipType.COUSIN
        dist1, dist2 = -dist1, -dist2

    try:
        desc1 = describe(type1, generations_removed1, dist1)
    except LineageError as e:
        raise LineageError(f"lineage 1: {e}") from e
    try:
        desc2 = describe(type2, generations_removed2, dist2)
    except LineageError as e:
        raise LineageError(f"lineage 2: {e}") from e

    return (
        Lineage(type1, generations_removed1, desc1),
        Lineage(type2, generations_removed2, desc2),
    )


def describe(
    rel_type: RelationshipType,
    generations_removed: int,
    generations_since_common_ancestor: int = 0,
) -> str:
    """
    Render a blood relationship as text, e.g. "great grand parent".

    For cousins, generations_since_common_ancestor is the negated number of
    generations between the describing person and the common ancestor.
    """
    label = rel_type.label

    if rel_type in (RelationshipType.SELF, RelationshipType.SIBLING):
        return label

    if rel_type in (RelationshipType.CHILD, RelationshipType.NIECE_NEPHEW):
        if generations_removed <= 0:
            raise LineageError(
                f"generations removed ({generations_removed}) must be > 0 for {label}"
            )
        return _grand_prefix(label, generations_removed)

    if rel_type == RelationshipType.PARENT:
        if generations_removed >= 0:
            raise LineageError(
                f"generations removed ({generations_removed}) must be < 0 for {label}"
            )
        return _grand_prefix(label, -generations_removed)

    if rel_type == RelationshipType.AUNT_UNCLE:
        if generations_removed >= 0:
            raise LineageError(
                f"generations removed ({generations_removed}) must be < 0 for {label}"
            )
        if generations_removed == -2:
            return "great " + label
        return _grand_prefix(label, -generations_removed)

    if rel_type == RelationshipType.COUSIN:
        # cousins share an ancestor at least 2 generations back
        if generations_since_common_ancestor > -2:
            raise LineageError(
                f"generations since common ancestor ({generations_since_common_ancestor}) "
                "must be < -1 for cousin"
            )
        n = -generations_since_common_ancestor - 1
        if generations_removed == 0:
            return f"{ordinal(n)} {label}"
        if abs(generations_removed) > MAX_COUSIN_REMOVAL:
            return f"distant {label}"
        if generations_removed > 0:
            # the younger cousin counts from further down
            n -= generations_removed
        return f"{ordinal(n)} {label} {abs(generations_removed)}x removed"

    raise LineageError(f"cannot describe {label!r} as a blood relationship")


def _grand_prefix(label: str, generations: int) -> str:
    if generations == 1:
        return label
    if generations == 2:
        return "grand " + label
    return "great " * (generations - 2) + "grand " + label


def ordinal(n: int) -> str:
    """1 -> '1st', 12 -> '12th', 22 -> '22nd'."""
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"
