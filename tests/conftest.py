"""Pytest fixtures shared by the relationship tests."""

from pathlib import Path

import pytest

from gedrelate.models import Person, Union
from gedrelate.relate import new_relator

DATA_DIR = Path(__file__).parent / "data"

# id -> (name, sex, parent ids)
KENNEDYS = {
    "@I44@": ("Patrick Joseph Kennedy", "M", ()),
    "@I45@": ("Mary Augusta Hickey", "F", ()),
    "@I60@": ("John Francis Fitzgerald", "M", ()),
    "@I61@": ("Mary Josephine Hannon", "F", ()),
    "@I1@": ("Joseph Patrick Kennedy", "M", ("@I44@", "@I45@")),
    "@I2@": ("Rose Elizabeth Fitzgerald", "F", ("@I60@", "@I61@")),
    "@I56@": ("Loretta Kennedy", "F", ("@I44@", "@I45@")),
    "@I0@": ("John Fitzgerald Kennedy", "M", ("@I1@", "@I2@")),
    "@I21@": ("Robert Francis Kennedy", "M", ("@I1@", "@I2@")),
    "@I8@": ("Eunice Mary Kennedy", "F", ("@I1@", "@I2@")),
    "@I52@": ("Jacqueline Lee Bouvier", "F", ("@I80@", "@I81@")),
    "@I80@": ("John Vernou Bouvier", "M", ()),
    "@I81@": ("Janet Norton Lee", "F", ()),
    "@I22@": ("Ethel Skakel", "F", ()),
    "@I9@": ("Robert Sargent Shriver", "M", ()),
    "@I54@": ("John Fitzgerald Kennedy Jr.", "M", ("@I0@", "@I52@")),
    "@I25@": ("Robert Francis Kennedy Jr.", "M", ("@I21@", "@I22@")),
    "@I24@": ("Joseph Patrick Kennedy II", "M", ("@I21@", "@I22@")),
    "@I11@": ("Maria Owings Shriver", "F", ("@I8@", "@I9@")),
    "@I10@": ("Arnold Schwarzenegger", "M", ()),
    "@I71@": ("Sheila Brewster Rauch", "F", ()),
    "@I70@": ("Joseph Patrick Kennedy III", "M", ("@I24@", "@I71@")),
    "@I72@": ("Katherine Schwarzenegger", "F", ("@I10@", "@I11@")),
}

KENNEDY_COUPLES = [
    ("@I44@", "@I45@"),
    ("@I60@", "@I61@"),
    ("@I1@", "@I2@"),
    ("@I80@", "@I81@"),
    ("@I0@", "@I52@"),
    ("@I21@", "@I22@"),
    ("@I8@", "@I9@"),
    ("@I10@", "@I11@"),
    ("@I24@", "@I71@"),
]


def make_people(table: dict, couples: list) -> list[Person]:
    """Build linked people from an id -> (name, sex, parents) table."""
    people = {
        pid: Person(id=pid, name=name, sex=sex, parents=list(parents))
        for pid, (name, sex, parents) in table.items()
    }
    for person in people.values():
        for parent_id in person.parents:
            people[parent_id].children.append(person.id)
    for a, b in couples:
        people[a].spouses.append(b)
        people[b].spouses.append(a)
    return list(people.values())


@pytest.fixture
def kennedys():
    """A few generations of the Kennedy family."""
    return make_people(KENNEDYS, KENNEDY_COUPLES)


@pytest.fixture
def kennedy_unions(kennedys):
    by_id = {p.id: p for p in kennedys}
    return [
        Union(
            id=f"@F{i}@",
            person1=by_id[a].snapshot(),
            person2=by_id[b].snapshot(),
            children=sorted(set(by_id[a].children) & set(by_id[b].children)),
        )
        for i, (a, b) in enumerate(KENNEDY_COUPLES, start=1)
    ]


@pytest.fixture
def relator(kennedys):
    """Relator over the Kennedys, without union records."""
    return new_relator(kennedys)


@pytest.fixture
def small_ged():
    return DATA_DIR / "kennedy_small.ged"
