"""Work out how two people in a population are related."""

import logging
from collections.abc import Iterable

from gedrelate.affinity import affiliate
from gedrelate.ancestry import MAX_GENERATIONS, find_ancestor_paths, resolve_common_ancestor
from gedrelate.errors import LineageError, PersonNotFoundError, UnrelatedError
from gedrelate.index import PersonIndex, build_index
from gedrelate.lineage import classify
from gedrelate.models import MutualRelationship, Person, Relationship, Union

logger = logging.getLogger(__name__)


class Relator:
    """
    Relates pairs of people in a fixed population.

    The index is built once and never modified afterwards, so one Relator can
    serve any number of queries, including concurrent ones.
    """

    def __init__(
        self,
        people: Iterable[Person],
        unions: Iterable[Union] = (),
        max_generations: int = MAX_GENERATIONS,
    ):
        self.index: PersonIndex = build_index(people, unions)
        self.max_generations = max_generations

    def relate(self, person1_id: str, person2_id: str) -> MutualRelationship:
        """
        Relate person 1 to person 2 by blood or, failing that, by marriage.

        Raises:
            PersonNotFoundError: Either ID is not in the population.
            UnrelatedError: No blood relation and no single marriage bridge.
        """
        for person_id in (person1_id, person2_id):
            if person_id not in self.index:
                raise PersonNotFoundError(person_id)

        try:
            return self.relate_by_blood(person1_id, person2_id)
        except UnrelatedError:
            logger.debug("no blood relation between %s and %s, trying marriage", person1_id, person2_id)

        try:
            r1, r2, union = affiliate(self, person1_id, person2_id)
        except UnrelatedError:
            raise UnrelatedError(person1_id, person2_id) from None

        r1.source_id, r1.target_id = person1_id, person2_id
        r2.source_id, r2.target_id = person2_id, person1_id
        return MutualRelationship(r1=r1, r2=r2, union=union)

    def relate_by_blood(self, person1_id: str, person2_id: str) -> MutualRelationship:
        """
        Relate two people through their nearest common ancestor.

        Raises:
            UnrelatedError: The two people share no ancestor.
            LineageError: The ancestral lines could not be classified.
        """
        if person1_id == person2_id:
            line1, line2 = [person1_id], [person2_id]
            ancestor_id = person1_id
        else:
            # shared by both walks, see find_ancestor_paths
            visited: set[str] = set()
            paths1 = find_ancestor_paths(
                self.index, person1_id, visited, self.max_generations, tag="p1"
            )
            paths2 = find_ancestor_paths(
                self.index, person2_id, visited, self.max_generations, tag="p2"
            )
            ancestor_id, line1, line2 = resolve_common_ancestor(paths1, paths2)

        ancestor = self.index.lookup(ancestor_id)
        logger.info("found most recent common ancestor %s (%s)", ancestor_id, ancestor.name)

        try:
            lineage1, lineage2 = classify(line1, line2)
        except LineageError:
            logger.error(
                "could not classify lineage: p1=%s p2=%s ancestor=%s line1=%s line2=%s",
                person1_id,
                person2_id,
                ancestor_id,
                line1,
                line2,
            )
            raise
        r1 = Relationship(
            source_id=person1_id,
            target_id=person2_id,
            type=lineage1.type,
            description=lineage1.description,
            generations_removed=lineage1.generations_removed,
            path=self.index.snapshots(line1),
        )
        r2 = Relationship(
            source_id=person2_id,
            target_id=person1_id,
            type=lineage2.type,
            description=lineage2.description,
            generations_removed=lineage2.generations_removed,
            path=self.index.snapshots(line2),
        )
        return MutualRelationship(r1=r1, r2=r2, common_person=ancestor.snapshot())


def new_relator(
    people: Iterable[Person],
    unions: Iterable[Union] = (),
    max_generations: int = MAX_GENERATIONS,
) -> Relator:
    return Relator(people, unions, max_generations=max_generations)
