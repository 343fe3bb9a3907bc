"""Test ancestor path search and common ancestor resolution."""

import pytest

from gedrelate.ancestry import AncestorPaths, find_ancestor_paths, resolve_common_ancestor
from gedrelate.errors import UnrelatedError
from gedrelate.index import build_index
from gedrelate.models import Person


class TestFindAncestorPaths:
    def test_records_start_and_ancestors(self, relator):
        paths = find_ancestor_paths(relator.index, "@I0@", set())
        assert paths["@I0@"] == [["@I0@"]]
        assert paths.shortest("@I1@") == ["@I0@", "@I1@"]
        assert paths.shortest("@I44@") == ["@I0@", "@I1@", "@I44@"]
        assert "@I52@" not in paths

    def test_marks_visited(self, relator):
        visited = set()
        find_ancestor_paths(relator.index, "@I21@", visited)
        assert visited == {"@I21@", "@I1@", "@I2@", "@I44@", "@I45@", "@I60@", "@I61@"}

    def test_pedigree_collapse_keeps_every_line(self):
        # cousins married, so g is reached twice from c
        people = [
            Person(id="c", parents=["f", "m"]),
            Person(id="f", parents=["g"]),
            Person(id="m", parents=["x"]),
            Person(id="x", parents=["g"]),
            Person(id="g"),
        ]
        paths = find_ancestor_paths(build_index(people), "c", set())
        assert paths["g"] == [["c", "f", "g"], ["c", "m", "x", "g"]]
        assert paths.shortest("g") == ["c", "f", "g"]

    def test_cycle_stops_at_max_generations(self):
        people = [Person(id="a", parents=["b"]), Person(id="b", parents=["a"])]
        paths = find_ancestor_paths(build_index(people), "a", set(), max_generations=5)
        assert paths.shortest("a") == ["a"]
        assert len(paths["a"]) == 3
        assert len(paths["b"]) == 2


class TestResolveCommonAncestor:
    def test_no_common_ancestor(self):
        p1 = AncestorPaths({"a": [["a"]]})
        p2 = AncestorPaths({"b": [["b"]]})
        with pytest.raises(UnrelatedError):
            resolve_common_ancestor(p1, p2)

    def test_nearest_wins(self):
        p1 = AncestorPaths({"p": [["a", "p"]], "g": [["a", "p", "g"]]})
        p2 = AncestorPaths({"p": [["b", "p"]], "g": [["b", "p", "g"]]})
        assert resolve_common_ancestor(p1, p2) == ("p", ["a", "p"], ["b", "p"])

    def test_tie_goes_to_greatest_id(self):
        p1 = AncestorPaths({"mother": [["a", "mother"]], "father": [["a", "father"]]})
        p2 = AncestorPaths({"mother": [["b", "mother"]], "father": [["b", "father"]]})
        chosen, _, _ = resolve_common_ancestor(p1, p2)
        assert chosen == "mother"

    def test_later_candidate_wins_on_either_side(self):
        p1 = AncestorPaths({"a1": [["a", "x", "a1"]], "b1": [["a", "b1"]]})
        p2 = AncestorPaths({"a1": [["b", "a1"]], "b1": [["b", "y", "z", "b1"]]})
        chosen, path1, path2 = resolve_common_ancestor(p1, p2)
        assert chosen == "b1"
        assert path1 == ["a", "b1"]
        assert path2 == ["b", "y", "z", "b1"]

    def test_shortest_of_unknown_id(self):
        assert AncestorPaths().shortest("nobody") is None
