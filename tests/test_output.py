"""Test text rendering and JSON conversion of results."""

import json

import pytest

from gedrelate.models import Person
from gedrelate.render import format_mutual_relationship, format_person
from gedrelate.serialize import (
    dump_population,
    load_population,
    mutual_relationship_to_dict,
    person_from_dict,
)


class TestRender:
    def test_format_person(self):
        assert format_person(Person(id="@I2@", name="Rose")) == "Rose [@I2@]"
        person = Person(id="@I0@", name="JFK", birth_date="1917-05-29", death_date="1963-11-22")
        assert format_person(person) == "JFK (1917-1963) [@I0@]"

    def test_blood(self, relator):
        mutual = relator.relate("@I0@", "@I21@")
        text = format_mutual_relationship(
            mutual, relator.index.lookup("@I0@"), relator.index.lookup("@I21@")
        )
        assert "description:         sibling" in text
        assert "common ancestor: Rose Elizabeth Fitzgerald [@I2@]" in text

    def test_affinal(self, relator):
        mutual = relator.relate("@I52@", "@I1@")
        text = format_mutual_relationship(
            mutual, relator.index.lookup("@I52@"), relator.index.lookup("@I1@")
        )
        assert "description:         child in-law" in text
        assert "description:         parent in-law" in text
        assert "union:" in text
        assert "common ancestor" not in text


class TestSerialize:
    def test_population(self, kennedys, kennedy_unions):
        data = json.loads(json.dumps(dump_population(kennedys, kennedy_unions)))
        people, unions = load_population(data)
        assert people == kennedys
        assert [u.id for u in unions] == [u.id for u in kennedy_unions]
        assert unions[4].partner_ids() == ["@I0@", "@I52@"]

    def test_bare_list(self):
        people, unions = load_population([{"id": "a", "name": "Ann", "extra": 1}])
        assert people == [Person(id="a", name="Ann")]
        assert unions == []

    def test_missing_id(self):
        with pytest.raises(ValueError):
            person_from_dict({"name": "Nobody"})

    def test_null_links(self):
        assert person_from_dict({"id": "a", "parents": None}).parents == []

    def test_mutual_relationship(self, relator):
        data = mutual_relationship_to_dict(relator.relate("@I54@", "@I70@"))
        assert data["relationship_1"]["description"] == "1st cousin 1x removed"
        assert data["relationship_1"]["type"] == "cousin"
        assert [p["id"] for p in data["relationship_2"]["path"]] == [
            "@I70@",
            "@I24@",
            "@I21@",
            "@I2@",
        ]
        assert data["common_person"]["id"] == "@I2@"
        assert data["union"] is None
        json.dumps(data)

        data = mutual_relationship_to_dict(relator.relate("@I0@", "@I52@"))
        assert data["common_person"] is None
        assert data["union"]["person1"]["id"] == "@I0@"
