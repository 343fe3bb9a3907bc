"""JSON conversion for populations and relationship results."""

import json
from dataclasses import asdict, fields
from pathlib import Path

from gedrelate.groupsheet import GroupSheet
from gedrelate.models import MutualRelationship, Person, Relationship, Union
from gedrelate.parsing import load_gedcom

_PERSON_FIELDS = {f.name for f in fields(Person)}


def person_to_dict(person: Person) -> dict:
    return asdict(person)


def person_from_dict(data: dict) -> Person:
    if "id" not in data:
        raise ValueError(f"person record without id: {data!r}")
    # unknown keys are dropped so newer exports still load
    person = Person(**{k: v for k, v in data.items() if k in _PERSON_FIELDS})
    for key in ("parents", "children", "spouses"):
        if getattr(person, key) is None:
            setattr(person, key, [])
    return person


def union_to_dict(union: Union) -> dict:
    return {
        "id": union.id,
        "person1": person_to_dict(union.person1) if union.person1 else None,
        "person2": person_to_dict(union.person2) if union.person2 else None,
        "children": list(union.children),
        "start_date": union.start_date,
        "end_date": union.end_date,
    }


def union_from_dict(data: dict) -> Union:
    return Union(
        id=data.get("id", ""),
        person1=person_from_dict(data["person1"]) if data.get("person1") else None,
        person2=person_from_dict(data["person2"]) if data.get("person2") else None,
        children=list(data.get("children") or []),
        start_date=data.get("start_date"),
        end_date=data.get("end_date"),
    )


def dump_population(people: list[Person], unions: list[Union]) -> dict:
    """The shape written by the parse command."""
    return {
        "people": [person_to_dict(p) for p in people],
        "unions": [union_to_dict(u) for u in unions],
    }


def load_population(data: dict | list) -> tuple[list[Person], list[Union]]:
    """Accept either a full parse export or a bare list of people."""
    if isinstance(data, list):
        return [person_from_dict(d) for d in data], []
    people = [person_from_dict(d) for d in data.get("people", [])]
    unions = [union_from_dict(d) for d in data.get("unions", [])]
    return people, unions


def load_people(filepath: Path) -> tuple[list[Person], list[Union]]:
    """Load a population from a .json export or a GEDCOM file."""
    if filepath.suffix.lower() == ".json":
        with open(filepath, encoding="utf-8") as f:
            return load_population(json.load(f))
    return load_gedcom(filepath)


def relationship_to_dict(rel: Relationship) -> dict:
    return {
        "source_id": rel.source_id,
        "target_id": rel.target_id,
        "type": rel.type.label,
        "description": rel.description,
        "generations_removed": rel.generations_removed,
        "path": [
            {
                "id": p.id,
                "name": p.name,
                "birth_date": p.birth_date,
                "death_date": p.death_date,
            }
            for p in rel.path
        ],
    }


def mutual_relationship_to_dict(mutual: MutualRelationship) -> dict:
    return {
        "relationship_1": relationship_to_dict(mutual.r1),
        "relationship_2": relationship_to_dict(mutual.r2),
        "common_person": person_to_dict(mutual.common_person) if mutual.common_person else None,
        "union": union_to_dict(mutual.union) if mutual.union else None,
    }


def group_sheet_to_dict(sheet: GroupSheet) -> dict:
    return asdict(sheet)
