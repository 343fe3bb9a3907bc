"""Errors raised while relating people."""


class RelateError(Exception):
    """Base class for relationship engine errors."""


class PersonNotFoundError(RelateError, LookupError):
    def __init__(self, person_id: str):
        super().__init__(f"person with id {person_id} not found")
        self.person_id = person_id


class UnrelatedError(RelateError):
    """No blood relation and no single marriage bridge between two people.

    This is an expected outcome rather than a bug, so callers usually catch it
    to print a friendly message.
    """

    def __init__(self, person1_id: str | None = None, person2_id: str | None = None):
        if person1_id is None or person2_id is None:
            message = "it appears that these people are unrelated"
        else:
            message = f"it appears that {person1_id} and {person2_id} are unrelated"
        super().__init__(message)
        self.person1_id = person1_id
        self.person2_id = person2_id


class LineageError(RelateError):
    """A lineage computation contradicted itself. Indicates an engine bug."""
