"""Ancestor path search and common ancestor resolution."""

import logging

from gedrelate.errors import UnrelatedError
from gedrelate.index import PersonIndex

logger = logging.getLogger(__name__)

# Guards against malformed input where someone is their own ancestor.
MAX_GENERATIONS = 100


class AncestorPaths(dict):
    """Every recorded path from a starting person, keyed by the ancestor ID.

    Each path is a list of IDs that starts at the starting person and ends at
    the key. An ancestor reached through several lines of descent keeps one
    path per line.
    """

    def add(self, person_id: str, path: list[str]) -> None:
        self.setdefault(person_id, []).append(path)

    def shortest(self, person_id: str) -> list[str] | None:
        """The first of the shortest paths recorded for person_id."""
        paths = self.get(person_id)
        if not paths:
            return None
        out = paths[0]
        for path in paths[1:]:
            if len(path) < len(out):
                out = path
        return out


def find_ancestor_paths(
    index: PersonIndex,
    start_id: str,
    visited: set[str],
    max_generations: int = MAX_GENERATIONS,
    tag: str = "",
) -> AncestorPaths:
    """
    Walk upward from start_id and record the path to every ancestor.

    The starting person counts as generation 0 and is recorded too, so a
    direct ancestor of the other query person shows up as a common ancestor.

    `visited` is shared with the other walk of the same query and is mutated
    in place. Do not hand each walk its own copy: the second walk relies on
    the marks left by the first to notice where the two ancestries converge.

    Args:
        index: The population to walk
        start_id: The person to start from
        visited: IDs already reached by any walk of this query
        max_generations: Depth at which a line is abandoned
        tag: Label for log messages, e.g. "p1"

    Returns:
        Paths to each reachable ancestor, keyed by ancestor ID
    """
    all_paths = AncestorPaths()

    def walk(person_id: str, generation: int, prev_path: list[str]) -> None:
        if generation >= max_generations:
            logger.debug("%s: stopped at %s after %d generations", tag, person_id, generation)
            return
        curr_path = prev_path + [person_id]

        if person_id in visited:
            logger.debug("%s: already visited %s, lines converge", tag, person_id)

        # sorted so that path order never depends on set iteration order
        for parent_id in sorted(index.parent_ids_of(person_id)):
            if parent_id not in index:
                logger.debug("%s: skipping unknown parent %s of %s", tag, parent_id, person_id)
                continue
            walk(parent_id, generation + 1, curr_path)

        all_paths.add(person_id, curr_path)
        visited.add(person_id)

    walk(start_id, 0, [])
    return all_paths


def resolve_common_ancestor(
    paths1: AncestorPaths, paths2: AncestorPaths
) -> tuple[str, list[str], list[str]]:
    """
    Pick the common ancestor of two walks and the shortest path to it from each side.

    Candidates are scanned in lexicographic ID order. The first one seeds the
    choice and each later candidate takes over when either of its paths is no
    longer than the current choice's path on that side. The outcome is stable
    for a given input, but the ID ordering has no genealogical meaning: among
    several equally near ancestors the one with the greatest ID wins.

    Raises:
        UnrelatedError: The walks share no ancestor.
    """
    common_ids = sorted(person_id for person_id in paths1 if person_id in paths2)
    logger.debug("common ancestor candidates: %s", common_ids)
    if not common_ids:
        raise UnrelatedError()

    chosen_id = common_ids[0]
    chosen1 = paths1.shortest(chosen_id)
    chosen2 = paths2.shortest(chosen_id)

    for common_id in common_ids[1:]:
        path1 = paths1.shortest(common_id)
        path2 = paths2.shortest(common_id)
        if len(path1) <= len(chosen1) or len(path2) <= len(chosen2):
            chosen_id, chosen1, chosen2 = common_id, path1, path2

    return chosen_id, chosen1, chosen2
