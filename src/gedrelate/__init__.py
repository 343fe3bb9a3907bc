"""Kinship calculation over GEDCOM family trees."""

from gedrelate.errors import LineageError, PersonNotFoundError, RelateError, UnrelatedError
from gedrelate.models import (
    Lineage,
    MutualRelationship,
    Person,
    Relationship,
    RelationshipType,
    Union,
)
from gedrelate.relate import Relator, new_relator

__all__ = [
    "LineageError",
    "Lineage",
    "MutualRelationship",
    "Person",
    "PersonNotFoundError",
    "RelateError",
    "Relationship",
    "RelationshipType",
    "Relator",
    "Union",
    "UnrelatedError",
    "new_relator",
]
