"""Lookup structures built once from a flat list of people."""

from collections.abc import Iterable

from gedrelate.models import Person, Union

_EMPTY: frozenset[str] = frozenset()


class PersonIndex:
    """
    Read-only index over a population.

    Holds three lookups: person by ID, child ID -> parent IDs and
    person ID -> spouse IDs. Unions, when given, are kept so that results
    can name the actual marriage and group sheets can list families. Nothing
    is validated here; an
    unknown ID resolves to None or an empty set when queried.
    """

    def __init__(self, people: Iterable[Person], unions: Iterable[Union] = ()):
        self._people_by_id: dict[str, Person] = {}
        self._parent_ids: dict[str, frozenset[str]] = {}
        self._spouse_ids: dict[str, frozenset[str]] = {}
        self._unions_by_partners: dict[frozenset[str], Union] = {}
        self._unions: list[Union] = []

        for person in people:
            self._people_by_id[person.id] = person
            self._parent_ids[person.id] = frozenset(person.parents)
            self._spouse_ids[person.id] = frozenset(person.spouses)

        for union in unions:
            self._unions.append(union)
            partners = frozenset(union.partner_ids())
            # the first union recorded for a couple wins
            if len(partners) == 2 and partners not in self._unions_by_partners:
                self._unions_by_partners[partners] = union

    def __len__(self) -> int:
        return len(self._people_by_id)

    def __contains__(self, person_id: object) -> bool:
        return person_id in self._people_by_id

    def lookup(self, person_id: str) -> Person | None:
        return self._people_by_id.get(person_id)

    def parent_ids_of(self, person_id: str) -> frozenset[str]:
        return self._parent_ids.get(person_id, _EMPTY)

    def spouse_ids_of(self, person_id: str) -> frozenset[str]:
        return self._spouse_ids.get(person_id, _EMPTY)

    def are_spouses(self, person1_id: str, person2_id: str) -> bool:
        """True only when each person lists the other as a spouse."""
        return person2_id in self.spouse_ids_of(person1_id) and person1_id in self.spouse_ids_of(
            person2_id
        )

    def union_of(self, person1_id: str, person2_id: str) -> Union | None:
        return self._unions_by_partners.get(frozenset((person1_id, person2_id)))

    def unions_as_partner(self, person_id: str) -> list[Union]:
        return [u for u in self._unions if person_id in u.partner_ids()]

    def unions_as_child(self, person_id: str) -> list[Union]:
        return [u for u in self._unions if person_id in u.children]

    def snapshot(self, person_id: str) -> Person:
        person = self._people_by_id.get(person_id)
        if person is None:
            # only reachable with IDs that did not come from this index
            raise KeyError(person_id)
        return person.snapshot()

    def snapshots(self, person_ids: Iterable[str]) -> list[Person]:
        return [self.snapshot(person_id) for person_id in person_ids]


def build_index(people: Iterable[Person], unions: Iterable[Union] = ()) -> PersonIndex:
    return PersonIndex(people, unions)
