"""Relationships by marriage.

An affinal relationship is found by substituting one person with each of
their spouses and asking for a blood relationship to the other person. The
blood relationship found that way is then turned around and relabelled as its
in-law counterpart. Only a single marriage is bridged; a spouse's sibling's
spouse, for example, is reported as unrelated.
"""

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from gedrelate.errors import LineageError, UnrelatedError
from gedrelate.index import PersonIndex
from gedrelate.lineage import describe
from gedrelate.models import MutualRelationship, Relationship, RelationshipType, Union

if TYPE_CHECKING:
    from gedrelate.relate import Relator

logger = logging.getLogger(__name__)

# In-law relationships that run through a sibling somewhere along the way.
SIBLING_LEVEL_TYPES = frozenset(
    {
        RelationshipType.SIBLING_IN_LAW,
        RelationshipType.AUNT_UNCLE_IN_LAW,
        RelationshipType.NIECE_NEPHEW_IN_LAW,
        RelationshipType.COUSIN_IN_LAW,
    }
)


@dataclass
class SpouseBridge:
    """A blood relationship between a person's spouse and someone else."""

    person_id: str
    spouse_id: str
    blood: MutualRelationship  # spouse -> other person
    union: Union


def affiliate(
    relator: "Relator", person1_id: str, person2_id: str
) -> tuple[Relationship, Relationship, Union]:
    """
    Relate two people by marriage.

    Only meant to be called once a blood relationship has been ruled out.

    Returns:
        The relationship from person 1 to person 2, its inverse, and the
        union that connects them.

    Raises:
        UnrelatedError: Neither a direct marriage nor a single marriage
            bridge connects the two people.
    """
    index = relator.index

    if index.are_spouses(person1_id, person2_id):
        return _spouses(index, person1_id, person2_id)

    # is one of person 1's spouses related to person 2?
    bridge = find_spouse_bridge(relator, person1_id, person2_id)
    if bridge is not None:
        other_rel, own_rel, union = bridge_relationships(index, bridge, person2_id)
        return own_rel, other_rel, union

    # is one of person 2's spouses related to person 1?
    bridge = find_spouse_bridge(relator, person2_id, person1_id)
    if bridge is not None:
        other_rel, own_rel, union = bridge_relationships(index, bridge, person1_id)
        return other_rel, own_rel, union

    raise UnrelatedError(person1_id, person2_id)


def _spouses(
    index: PersonIndex, person1_id: str, person2_id: str
) -> tuple[Relationship, Relationship, Union]:
    spouse = RelationshipType.SPOUSE
    person1 = index.snapshot(person1_id)
    person2 = index.snapshot(person2_id)

    r1 = Relationship(person1_id, person2_id, spouse, spouse.label, 0, [person1])
    r2 = Relationship(person2_id, person1_id, spouse, spouse.label, 0, [person2])
    union = index.union_of(person1_id, person2_id) or Union(
        id="", person1=person1, person2=person2
    )
    return r1, r2, union


def find_spouse_bridge(relator: "Relator", person_id: str, other_id: str) -> SpouseBridge | None:
    """Find the first spouse of person_id with a blood relation to other_id."""
    index = relator.index

    for spouse_id in sorted(index.spouse_ids_of(person_id)):
        if spouse_id not in index:
            logger.debug("skipping unknown spouse %s of %s", spouse_id, person_id)
            continue
        if not index.are_spouses(person_id, spouse_id):
            logger.debug("skipping one-sided spouse %s of %s", spouse_id, person_id)
            continue
        try:
            blood = relator.relate_by_blood(spouse_id, other_id)
        except UnrelatedError:
            continue

        logger.debug(
            "spouse %s of %s is a %s of %s",
            spouse_id,
            person_id,
            blood.r1.description,
            other_id,
        )
        union = index.union_of(spouse_id, person_id) or Union(
            id="",
            person1=index.snapshot(spouse_id),
            person2=index.snapshot(person_id),
        )
        return SpouseBridge(person_id=person_id, spouse_id=spouse_id, blood=blood, union=union)

    return None


def bridge_relationships(
    index: PersonIndex, bridge: SpouseBridge, other_id: str
) -> tuple[Relationship, Relationship, Union]:
    """
    Build the affinal relationships across a spouse bridge.

    Returns:
        The relationship from other_id to the bridging person, the one from
        the bridging person to other_id, and the union between the bridging
        person and their spouse.
    """
    blood = bridge.blood

    other_rel = to_affinal(invert_relationship(blood.r1))
    own_rel = to_affinal(invert_relationship(blood.r2))

    if other_rel.type in SIBLING_LEVEL_TYPES and other_id not in other_rel.path_ids():
        # Lead the path from other_id up to the person in common; read from
        # the blood path as it was before inversion.
        stop_ids = set(bridge.union.partner_ids())
        if blood.common_person is not None:
            stop_ids.add(blood.common_person.id)
        head_len = next(
            (i for i, person in enumerate(blood.r2.path) if person.id in stop_ids), 0
        )
        other_rel.path = blood.r2.path[:head_len] + other_rel.path

    spouse_ids = [
        person.id for person in other_rel.path if index.are_spouses(bridge.person_id, person.id)
    ]
    if len(spouse_ids) == 1 and spouse_ids[0] != bridge.person_id:
        own_rel.path = index.snapshots([bridge.person_id, spouse_ids[0]])

    logger.info(
        "related %s and %s through the marriage of %s and %s",
        bridge.person_id,
        other_id,
        bridge.person_id,
        bridge.spouse_id,
    )
    return other_rel, own_rel, bridge.union


def invert_relationship(rel: Relationship) -> Relationship:
    """
    Turn a blood relationship around: A's relationship to B becomes B's to A.

    The path is reversed, so it now leads from the common ancestor back down.
    """
    inverted_type = rel.type.inverse
    generations_removed = -rel.generations_removed
    path = list(reversed(rel.path))

    generations_since_common_ancestor = len(path) - 1
    if inverted_type == RelationshipType.COUSIN:
        # count from the new vantage point, which sits generations_removed
        # further from the ancestor
        generations_since_common_ancestor = -(
            generations_since_common_ancestor + generations_removed
        )

    try:
        description = describe(inverted_type, generations_removed, generations_since_common_ancestor)
    except LineageError:
        logger.error(
            "could not invert relationship: source=%s target=%s type=%s generations_removed=%d path=%s",
            rel.source_id,
            rel.target_id,
            rel.type.label,
            rel.generations_removed,
            rel.path_ids(),
        )
        raise

    return Relationship(
        source_id=rel.target_id,
        target_id=rel.source_id,
        type=inverted_type,
        description=description,
        generations_removed=generations_removed,
        path=path,
    )


def to_affinal(rel: Relationship) -> Relationship:
    """Relabel a blood relationship as its in-law counterpart."""
    if rel.type.is_affinal:
        logger.debug("relationship type %s is already affinal", rel.type.label)
        return rel

    affinal_type = rel.type.to_affinal()
    if rel.type == RelationshipType.SELF:
        description = affinal_type.label
    else:
        description = rel.description + " in-law"
    return replace(rel, type=affinal_type, description=description)
