"""Test lineage classification and relationship descriptions."""

import pytest

from gedrelate.affinity import invert_relationship, to_affinal
from gedrelate.errors import LineageError
from gedrelate.lineage import classify, describe, ordinal
from gedrelate.models import Relationship, RelationshipType

R = RelationshipType


class TestOrdinal:
    @pytest.mark.parametrize(
        "n, expected",
        [
            (1, "1st"),
            (2, "2nd"),
            (3, "3rd"),
            (4, "4th"),
            (11, "11th"),
            (12, "12th"),
            (13, "13th"),
            (21, "21st"),
            (22, "22nd"),
            (111, "111th"),
            (123, "123rd"),
        ],
    )
    def test_suffix(self, n, expected):
        assert ordinal(n) == expected


class TestDescribe:
    """Tests for describing blood relationships."""

    @pytest.mark.parametrize(
        "rel_type, removed, since, expected",
        [
            (R.SELF, 0, 0, "self"),
            (R.SIBLING, 0, 0, "sibling"),
            (R.CHILD, 1, 0, "child"),
            (R.CHILD, 2, 0, "grand child"),
            (R.CHILD, 3, 0, "great grand child"),
            (R.PARENT, -1, 0, "parent"),
            (R.PARENT, -4, 0, "great great grand parent"),
            (R.NIECE_NEPHEW, 1, 0, "niece/nephew"),
            (R.NIECE_NEPHEW, 2, 0, "grand niece/nephew"),
            (R.AUNT_UNCLE, -1, 0, "aunt/uncle"),
            (R.AUNT_UNCLE, -2, 0, "great aunt/uncle"),
            (R.AUNT_UNCLE, -3, 0, "great grand aunt/uncle"),
            (R.COUSIN, 0, -2, "1st cousin"),
            (R.COUSIN, 0, -4, "3rd cousin"),
            (R.COUSIN, -1, -2, "1st cousin 1x removed"),
            (R.COUSIN, 1, -3, "1st cousin 1x removed"),
            (R.COUSIN, 2, -4, "1st cousin 2x removed"),
            (R.COUSIN, 21, -30, "distant cousin"),
            (R.COUSIN, -21, -3, "distant cousin"),
        ],
    )
    def test_describe(self, rel_type, removed, since, expected):
        assert describe(rel_type, removed, since) == expected

    @pytest.mark.parametrize(
        "rel_type, removed, since",
        [
            (R.CHILD, 0, 0),
            (R.NIECE_NEPHEW, -1, 0),
            (R.PARENT, 1, 0),
            (R.AUNT_UNCLE, 0, 0),
            (R.COUSIN, 0, -1),
            (R.SPOUSE, 0, 0),
            (R.UNKNOWN, 0, 0),
        ],
    )
    def test_impossible(self, rel_type, removed, since):
        with pytest.raises(LineageError):
            describe(rel_type, removed, since)


class TestClassify:
    """Tests for classifying two ancestral lines."""

    def test_self(self):
        l1, l2 = classify(["a"], ["a"])
        assert l1.type == l2.type == R.SELF

    def test_parent(self):
        l1, l2 = classify(["p"], ["c", "p"])
        assert (l1.type, l1.generations_removed, l1.description) == (R.PARENT, -1, "parent")
        assert (l2.type, l2.generations_removed, l2.description) == (R.CHILD, 1, "child")

    def test_aunt(self):
        l1, l2 = classify(["a", "g"], ["n", "p", "g"])
        assert l1.type == R.AUNT_UNCLE
        assert l2.type == R.NIECE_NEPHEW

    def test_second_cousin_once_removed(self):
        l1, l2 = classify(["a", "b", "c", "g"], ["x", "y", "z", "w", "g"])
        assert l1.description == "2nd cousin 1x removed"
        assert l2.description == "2nd cousin 1x removed"
        assert l1.generations_removed == -1
        assert l2.generations_removed == 1


class TestInvert:
    """Tests for turning relationships around."""

    def test_invert_parent(self):
        rel = Relationship("c", "p", R.CHILD, "child", 1)
        inverted = invert_relationship(rel)
        assert inverted.type == R.PARENT
        assert inverted.description == "parent"
        assert inverted.generations_removed == -1
        assert (inverted.source_id, inverted.target_id) == ("p", "c")

    def test_invert_removed_cousin(self, relator):
        mutual = relator.relate("@I54@", "@I70@")
        inverted = invert_relationship(mutual.r1)
        assert inverted.description == "1st cousin 1x removed"
        assert inverted.generations_removed == 1
        assert inverted.path_ids() == ["@I2@", "@I0@", "@I54@"]

    def test_invert_unknown_raises(self):
        rel = Relationship("a", "b", R.UNKNOWN, "", 0)
        with pytest.raises(LineageError):
            invert_relationship(rel)

    def test_to_affinal(self):
        rel = Relationship("a", "b", R.COUSIN, "1st cousin", 0)
        affinal = to_affinal(rel)
        assert affinal.type == R.COUSIN_IN_LAW
        assert affinal.description == "1st cousin in-law"
        assert to_affinal(affinal) is affinal

    def test_self_becomes_spouse(self):
        affinal = to_affinal(Relationship("a", "a", R.SELF, "self", 0))
        assert affinal.type == R.SPOUSE
        assert affinal.description == "spouse"


class TestRelationshipType:
    def test_inverse(self):
        assert R.PARENT.inverse == R.CHILD
        assert R.NIECE_NEPHEW_IN_LAW.inverse == R.AUNT_UNCLE_IN_LAW
        assert R.COUSIN.inverse == R.COUSIN

    def test_to_affinal(self):
        assert R.SIBLING.to_affinal() == R.SIBLING_IN_LAW
        assert R.SPOUSE.to_affinal() == R.SPOUSE
        with pytest.raises(ValueError):
            R.UNKNOWN.to_affinal()

    def test_label(self):
        assert str(R.AUNT_UNCLE_IN_LAW) == "aunt/uncle in-law"
        assert not R.COUSIN.is_affinal
        assert R.SPOUSE.is_affinal
