from typing import FrozenSet, Iterable, List, Tuple

from unidisc.graph import CourseGraph
from unidisc.logger import logger
from unidisc.models import EnumerationResult

# remaining, sequence so far (the completed courses), steps left
SearchState = Tuple[FrozenSet[str], Tuple[str, ...], int]


def eligible_courses(graph: CourseGraph, remaining: FrozenSet[str]) -> List[str]:
    """Remaining courses whose prerequisites in the set are all completed.

    A prerequisite inside the set is either still remaining or completed, so
    a course is eligible once none of its prerequisites remain.
    """
    return [
        course
        for course in sorted(remaining)
        if not graph.get_prerequisites(course) & remaining
    ]


def enumerate_sequences(
    graph: CourseGraph, course_ids: Iterable[str], max_length: int
) -> EnumerationResult:
    """Enumerate every valid course order, bounded by max_length steps.

    Depth first, branching over the eligible courses in ascending order. A
    branch ends when no courses remain or max_length steps were taken; each
    ending contributes its sequence, so depth-limited branches yield partial
    sequences and set ``truncated``. Courses missing from the graph are
    ignored.
    """
    members = frozenset(c for c in set(course_ids) if c in graph)
    result = EnumerationResult(course_ids=sorted(members))

    if not members:
        return result
    if max_length <= 0:
        logger.warn(f"max_length must be positive to enumerate sequences, got {max_length}")
        result.truncated = True
        return result

    stack: List[SearchState] = [(members, (), max_length)]
    dead_ends = 0

    while stack:
        remaining, sequence, steps_left = stack.pop()

        if not remaining or steps_left == 0:
            if remaining:
                result.truncated = True
            if sequence:
                result.sequences.append(list(sequence))
            continue

        eligible = eligible_courses(graph, remaining)
        if not eligible:
            dead_ends += 1
            continue

        # reversed so the smallest id is popped first
        for course in reversed(eligible):
            stack.append(
                (
                    remaining - {course},
                    sequence + (course,),
                    steps_left - 1,
                )
            )

    if dead_ends:
        logger.warn(
            f"{dead_ends} branches stalled with courses left; prerequisites in the set form a cycle"
        )
    if result.truncated:
        logger.warn(f"Sequence enumeration cut short by max_length={max_length}")
    logger.debug(f"Enumerated {len(result.sequences)} sequences for {len(members)} courses")

    return result
