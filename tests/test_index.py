"""Test the population index."""

import pytest

from gedrelate.index import build_index
from gedrelate.models import Person, Union


@pytest.fixture
def index():
    people = [
        Person(id="a", name="Ann", parents=["p"], spouses=["b"]),
        Person(id="b", name="Bob", spouses=["a"]),
        Person(id="c", name="Cy", spouses=["a"]),
        Person(id="p", name="Pat", children=["a"]),
    ]
    unions = [
        Union(id="F1", person1=people[0].snapshot(), person2=people[1].snapshot()),
        Union(id="F2", person1=people[1].snapshot(), person2=people[0].snapshot()),
        Union(id="F3", person1=people[3].snapshot()),
    ]
    return build_index(people, unions)


class TestPersonIndex:
    def test_lookup(self, index):
        assert len(index) == 4
        assert "a" in index
        assert "z" not in index
        assert index.lookup("b").name == "Bob"
        assert index.lookup("z") is None

    def test_parents(self, index):
        assert index.parent_ids_of("a") == frozenset({"p"})
        assert index.parent_ids_of("z") == frozenset()

    def test_spouses_must_be_mutual(self, index):
        assert index.are_spouses("a", "b")
        assert index.are_spouses("b", "a")
        # c claims a, a does not claim c
        assert not index.are_spouses("c", "a")
        assert index.spouse_ids_of("c") == frozenset({"a"})

    def test_union_of(self, index):
        assert index.union_of("b", "a").id == "F1"
        assert index.union_of("a", "c") is None

    def test_snapshot(self, index):
        snap = index.snapshot("a")
        assert snap.name == "Ann"
        assert snap.parents == [] and snap.spouses == []
        # the indexed person keeps its links
        assert index.lookup("a").parents == ["p"]
        with pytest.raises(KeyError):
            index.snapshot("z")
