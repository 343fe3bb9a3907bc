"""Plain-text rendering of relationship results and group sheets."""

from gedrelate.groupsheet import GroupSheet, SheetFamily, SheetPerson
from gedrelate.models import MutualRelationship, Person, Relationship


def format_person(person: Person) -> str:
    years = ""
    if person.birth_date or person.death_date:
        years = f" ({(person.birth_date or '?')[:4]}-{(person.death_date or '')[:4]})"
    return f"{person.name}{years} [{person.id}]"


def format_relationship(title: str, rel: Relationship) -> list[str]:
    lines = [
        title,
        f"  description:         {rel.description}",
        f"  type:                {rel.type.label}",
        f"  generations removed: {rel.generations_removed}",
        "  path:",
    ]
    lines.extend(f"    {i}. {format_person(p)}" for i, p in enumerate(rel.path, start=1))
    return lines


def format_mutual_relationship(
    mutual: MutualRelationship, person1: Person, person2: Person
) -> str:
    """
    Describe how person 1 relates to person 2 and the inverse.

    Ends with the common ancestor for a blood relationship, or the partners
    of the connecting union for a relationship by marriage.
    """
    lines = [f"person 1: {format_person(person1)}", f"person 2: {format_person(person2)}", ""]
    lines += format_relationship("relationship 1: from person 1 to person 2", mutual.r1)
    lines.append("")
    lines += format_relationship("relationship 2: from person 2 to person 1", mutual.r2)
    lines.append("")

    if mutual.common_person is not None:
        lines.append(f"common ancestor: {format_person(mutual.common_person)}")
    else:
        union = mutual.union
        dates = ""
        if union.start_date or union.end_date:
            dates = f" ({union.start_date or '?'} - {union.end_date or ''})"
        lines.append(f"union{f' {union.id}' if union.id else ''}{dates}:")
        for partner in (union.person1, union.person2):
            if partner is not None:
                lines.append(f"  {format_person(partner)}")

    return "\n".join(lines)


def _event(verb: str, date: str | None, place: str | None) -> str:
    text = f"{verb} {date or '?'}"
    return f"{text} in {place}" if place else text


def _format_sheet_person(person: SheetPerson) -> str:
    parts = [f"{person.role:<7} {person.name} [{person.id}]"]
    if person.birth_date or person.birth_place:
        parts.append(_event("born", person.birth_date, person.birth_place))
    if person.death_date or person.death_place:
        parts.append(_event("died", person.death_date, person.death_place))
    return ", ".join(parts)


def _format_family(family: SheetFamily) -> list[str]:
    lines = [f"  family {family.id or '(unrecorded)'}"]
    if family.married:
        lines.append(f"    parents married on: {family.married}")
    if family.divorced:
        lines.append(f"    parents divorced on: {family.divorced}")
    lines.extend(f"    {_format_sheet_person(p)}" for p in family.parents + family.children)
    return lines


def format_group_sheet(sheet: GroupSheet) -> str:
    """A person followed by the families they were born into and the ones they started."""
    person = sheet.person
    lines = ["person", f"  {person.name} [{person.id}]"]
    if person.birth_date or person.birth_place:
        lines.append(f"    born: {person.birth_date or '?'} {person.birth_place or ''}".rstrip())
    if person.death_date or person.death_place:
        lines.append(f"    died: {person.death_date or '?'} {person.death_place or ''}".rstrip())

    for title, families in (
        ("families as child", sheet.families_as_child),
        ("families as partner", sheet.families_as_partner),
    ):
        lines += ["", title]
        if not families:
            lines.append("  (none)")
        for family in families:
            lines += _format_family(family)

    return "\n".join(lines)
