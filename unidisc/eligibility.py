"""Admissibility of enrollments and course orderings for students."""

from typing import Dict, Iterable, List, Optional, Set, Tuple

from unidisc.graph import build_dependency_graph, topological_sort
from unidisc.logger import logger
from unidisc.models import ChainVerification, EligibilityResult


def check_eligibility(catalog, student_id: str, course_id: str) -> EligibilityResult:
    """Check whether a student may enroll in a course right now."""
    student = catalog.get_student(student_id)
    course = catalog.get_course(course_id)

    def result(eligible, missing=None, reason=None):
        return EligibilityResult(
            student_id=student_id,
            course_id=course_id,
            eligible=eligible,
            missing=missing or [],
            reason=reason,
        )

    if student is None or course is None:
        return result(False, reason="Invalid student or course ID")
    if course_id in student.enrolled:
        return result(False, reason="Student is already enrolled in this course")
    if course_id in student.completed:
        return result(False, reason="Student has already completed this course")

    missing = [p for p in course.sorted_prerequisites() if p not in student.completed]
    if missing:
        return result(False, missing, f"Missing prerequisites: {', '.join(missing)}")
    return result(True)


def available_courses(catalog, student_id: str) -> List[str]:
    """Courses the student has not taken whose prerequisites are all completed."""
    student = catalog.get_student(student_id)
    if student is None:
        logger.warn(f"Student not found: {student_id}")
        return []

    return [
        cid
        for cid, course in catalog.get_all_courses().items()
        if cid not in student.enrolled
        and cid not in student.completed
        and course.prerequisites <= student.completed
    ]


def verify_sequence(
    catalog, sequence: Iterable[str], completed: Iterable[str] = ()
) -> Tuple[bool, Optional[str]]:
    """Check that taking courses in this order never skips a prerequisite.

    Returns:
        - ok: True if the whole sequence is admissible
        - message: why the first offending position fails, None if ok
    """
    done = set(completed)
    for position, course_id in enumerate(sequence, 1):
        course = catalog.get_course(course_id)
        if course is None:
            return False, f"Position {position}: course {course_id} not found"
        for prereq in course.sorted_prerequisites():
            if prereq not in done:
                return False, f"Position {position}: {course_id} requires {prereq}"
        done.add(course_id)
    return True, None


def all_prerequisites(catalog, course_id: str) -> Set[str]:
    """Direct and indirect prerequisites of a course."""
    found = set()
    to_process = [course_id]
    visited = set()

    while to_process:
        current = to_process.pop()
        if current in visited:
            continue
        visited.add(current)

        course = catalog.get_course(current)
        if course is None:
            continue
        for prereq in course.prerequisites:
            found.add(prereq)
            to_process.append(prereq)

    return found


def prerequisite_levels(catalog, course_id: str) -> Dict[str, int]:
    """Level of every course in the chain, the target course included.

    Courses without prerequisites (or missing from the catalog) are level 0;
    any other course is one above its highest prerequisite. Empty when the
    course is unknown or its chain has a cycle.
    """
    if catalog.get_course(course_id) is None:
        return {}

    chain = all_prerequisites(catalog, course_id) | {course_id}
    graph = build_dependency_graph(catalog)
    order, ok = topological_sort(graph, chain, tie_break="lexicographic")
    if not ok:
        logger.warn(f"Cannot assign prerequisite levels for {course_id}: cycle in chain")
        return {}

    levels: Dict[str, int] = {}
    for cid in order:
        prereqs = graph.get_prerequisites(cid)
        levels[cid] = max((levels[p] + 1 for p in prereqs), default=0)
    return levels


def verify_prerequisite_chain(
    catalog, student_id: str, course_id: str
) -> ChainVerification:
    """Induction over prerequisite levels.

    Base case: every level 0 prerequisite is completed. Inductive step: with
    levels up to k completed, every level k+1 prerequisite is completed too.
    Holds when every step holds, so the student can take the course.
    """
    student = catalog.get_student(student_id)
    if student is None or catalog.get_course(course_id) is None:
        return ChainVerification(
            student_id=student_id,
            course_id=course_id,
            holds=False,
            reason="Invalid student or course ID",
        )

    levels = prerequisite_levels(catalog, course_id)
    if not levels:
        return ChainVerification(
            student_id=student_id,
            course_id=course_id,
            holds=False,
            reason="Prerequisite chain contains a cycle",
        )

    target_level = levels.pop(course_id)
    by_level: Dict[int, List[str]] = {}
    for cid in sorted(levels):
        by_level.setdefault(levels[cid], []).append(cid)

    for level in range(target_level):
        missing = [c for c in by_level.get(level, []) if c not in student.completed]
        if missing:
            step = "Base case" if level == 0 else f"Inductive step to level {level}"
            return ChainVerification(
                student_id=student_id,
                course_id=course_id,
                holds=False,
                levels=by_level,
                failed_level=level,
                missing=missing,
                reason=f"{step} fails: {', '.join(missing)} not completed",
            )

    return ChainVerification(
        student_id=student_id, course_id=course_id, holds=True, levels=by_level
    )


def verify_strong_induction(
    catalog, student_id: str, course_id: str
) -> Tuple[bool, List[str]]:
    """Every direct and indirect prerequisite must be completed.

    Returns:
        - ok: True if nothing is missing
        - missing: uncompleted prerequisites, ascending
    """
    student = catalog.get_student(student_id)
    if student is None or catalog.get_course(course_id) is None:
        return False, []

    missing = sorted(
        p for p in all_prerequisites(catalog, course_id) if p not in student.completed
    )
    return not missing, missing
