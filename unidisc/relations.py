"""Binary relations over identifiers, as frozensets of ordered pairs.

Every function here is pure: inputs are never modified and results are new
frozensets.
"""

from collections import defaultdict
from typing import FrozenSet, Iterable, Set, Tuple

from unidisc.config import DEFAULT_CLOSURE_MAX_ITERATIONS
from unidisc.logger import logger

Pair = Tuple[str, str]
Relation = FrozenSet[Pair]


def as_relation(pairs: Iterable[Pair]) -> Relation:
    return frozenset((a, b) for a, b in pairs)


def domain_of(relation: Iterable[Pair]) -> Set[str]:
    """Every element appearing on either side of a pair."""
    elements = set()
    for a, b in relation:
        elements.add(a)
        elements.add(b)
    return elements


def is_reflexive(relation: Iterable[Pair], domain: Iterable[str]) -> bool:
    R = as_relation(relation)
    return all((x, x) in R for x in domain)


def is_symmetric(relation: Iterable[Pair]) -> bool:
    R = as_relation(relation)
    return all((b, a) in R for a, b in R)


def is_antisymmetric(relation: Iterable[Pair]) -> bool:
    R = as_relation(relation)
    return not any(a != b and (b, a) in R for a, b in R)


def is_transitive(relation: Iterable[Pair]) -> bool:
    """Single pass check that (a,b), (b,c) in R implies (a,c) in R."""
    R = as_relation(relation)
    successors = _successors(R)
    for a, b in R:
        for c in successors.get(b, ()):
            if (a, c) not in R:
                return False
    return True


def is_partial_order(relation: Iterable[Pair], domain: Iterable[str]) -> bool:
    R = as_relation(relation)
    return is_reflexive(R, domain) and is_antisymmetric(R) and is_transitive(R)


def is_equivalence(relation: Iterable[Pair], domain: Iterable[str]) -> bool:
    R = as_relation(relation)
    return is_reflexive(R, domain) and is_symmetric(R) and is_transitive(R)


def compose(first: Iterable[Pair], second: Iterable[Pair]) -> Relation:
    """{(a, c) : (a, b) in first and (b, c) in second}."""
    successors = _successors(as_relation(second))
    return frozenset(
        (a, c) for a, b in as_relation(first) for c in successors.get(b, ())
    )


def inverse(relation: Iterable[Pair]) -> Relation:
    return frozenset((b, a) for a, b in relation)


def reflexive_closure(relation: Iterable[Pair], domain: Iterable[str]) -> Relation:
    return as_relation(relation) | frozenset((x, x) for x in domain)


def transitive_closure(
    relation: Iterable[Pair], max_iterations: int = DEFAULT_CLOSURE_MAX_ITERATIONS
) -> Tuple[Relation, bool]:
    """Join the relation with itself until nothing new appears.

    Each pass joins the pairs present at the start of the pass. Stops when a
    pass adds nothing, or after max_iterations passes.

    Returns:
        - closure: the accumulated relation
        - complete: False if the cap was reached before a fixed point, in
          which case closure may be missing pairs
    """
    current = as_relation(relation)
    iteration = 0

    while iteration < max_iterations:
        iteration += 1
        successors = _successors(current)
        new_pairs = {
            (a, c)
            for a, b in current
            for c in successors.get(b, ())
            if (a, c) not in current
        }
        if not new_pairs:
            logger.debug(f"Transitive closure reached a fixed point after {iteration} passes")
            return current, True
        current = current | new_pairs

    logger.warn(
        f"Transitive closure stopped at the {max_iterations} pass cap with {len(current)} pairs; result may be incomplete"
    )
    return current, False


def _successors(relation: Relation):
    successors = defaultdict(set)
    for a, b in relation:
        successors[a].add(b)
    return successors


## Catalog relations
def student_course_relation(catalog) -> Relation:
    """(student, course) for every enrolled course."""
    return frozenset(
        (sid, cid)
        for sid, student in catalog.get_all_students().items()
        for cid in student.enrolled
    )


def faculty_course_relation(catalog) -> Relation:
    """(faculty, course) for every assigned course."""
    return frozenset(
        (fid, cid)
        for fid, faculty in catalog.get_all_faculty().items()
        for cid in faculty.assigned
    )


def prerequisite_relation(catalog) -> Relation:
    """(course, prerequisite) for every direct prerequisite."""
    return frozenset(
        (cid, prereq)
        for cid, course in catalog.get_all_courses().items()
        for prereq in course.prerequisites
    )
