"""Family group sheets: one person with their parents, partners and children."""

import logging
from dataclasses import dataclass, field

from gedrelate.errors import PersonNotFoundError
from gedrelate.index import PersonIndex
from gedrelate.models import Person, Union

logger = logging.getLogger(__name__)


@dataclass
class SheetPerson:
    id: str
    name: str
    role: str = ""  # "parent" or "child" within a family
    birth_date: str | None = None
    birth_place: str | None = None
    death_date: str | None = None
    death_place: str | None = None


@dataclass
class SheetFamily:
    id: str  # empty when derived from person links rather than a FAM record
    parents: list[SheetPerson] = field(default_factory=list)
    children: list[SheetPerson] = field(default_factory=list)
    married: str | None = None
    divorced: str | None = None


@dataclass
class GroupSheet:
    person: SheetPerson
    families_as_child: list[SheetFamily] = field(default_factory=list)
    families_as_partner: list[SheetFamily] = field(default_factory=list)


def _sheet_person(person: Person, role: str = "") -> SheetPerson:
    return SheetPerson(
        id=person.id,
        name=person.name,
        role=role,
        # as written in the source, e.g. "ABT 1905"
        birth_date=person.birth_date_string or person.birth_date,
        birth_place=person.birth_place,
        death_date=person.death_date_string or person.death_date,
        death_place=person.death_place,
    )


def _sheet_people(index: PersonIndex, person_ids, role: str) -> list[SheetPerson]:
    out = []
    for person_id in person_ids:
        person = index.lookup(person_id)
        if person is None:
            logger.debug("skipping unknown %s %s", role, person_id)
            continue
        out.append(_sheet_person(person, role))
    return out


def _family_from_union(index: PersonIndex, union: Union) -> SheetFamily:
    return SheetFamily(
        id=union.id,
        parents=_sheet_people(index, union.partner_ids(), "parent"),
        children=_sheet_people(index, union.children, "child"),
        married=union.start_date,
        divorced=union.end_date,
    )


def _children_of_all(index: PersonIndex, parent_ids: list[str]) -> list[str]:
    """Children whose recorded parents are exactly parent_ids."""
    first = index.lookup(parent_ids[0])
    if first is None:
        return []
    wanted = frozenset(parent_ids)
    return [c for c in first.children if index.parent_ids_of(c) == wanted]


def _derived_family(index: PersonIndex, parent_ids: list[str]) -> SheetFamily:
    return SheetFamily(
        id="",
        parents=_sheet_people(index, parent_ids, "parent"),
        children=_sheet_people(index, _children_of_all(index, parent_ids), "child"),
    )


def build_group_sheet(index: PersonIndex, person_id: str) -> GroupSheet:
    """
    Collect the families a person belongs to.

    Families come from the union records when the population has them. A
    population loaded without unions (a bare JSON list of people) gets
    families derived from the parent and spouse links instead: one for the
    person's parents and one per mutual spouse. Children the person had
    with no recorded partner are grouped in a family of their own.

    Raises:
        PersonNotFoundError: person_id is not in the population.
    """
    person = index.lookup(person_id)
    if person is None:
        raise PersonNotFoundError(person_id)

    sheet = GroupSheet(person=_sheet_person(person))

    sheet.families_as_child = [
        _family_from_union(index, u) for u in index.unions_as_child(person_id)
    ]
    if not sheet.families_as_child and person.parents:
        sheet.families_as_child.append(_derived_family(index, person.parents))

    sheet.families_as_partner = [
        _family_from_union(index, u) for u in index.unions_as_partner(person_id)
    ]
    if not sheet.families_as_partner:
        for spouse_id in sorted(index.spouse_ids_of(person_id)):
            if index.are_spouses(person_id, spouse_id):
                sheet.families_as_partner.append(
                    _derived_family(index, [person_id, spouse_id])
                )

    listed = {c.id for fam in sheet.families_as_partner for c in fam.children}
    unlisted = [c for c in person.children if c not in listed and c in index]
    if unlisted:
        sheet.families_as_partner.append(
            SheetFamily(
                id="",
                parents=[_sheet_person(person, "parent")],
                children=_sheet_people(index, unlisted, "child"),
            )
        )

    return sheet
