"""Catalog-wide consistency checks.

Each check returns a list of Violation records and never raises; an empty
list means the check passed.
"""

from collections import defaultdict
from typing import List, Optional

from unidisc.config import EngineConfig
from unidisc.logger import logger
from unidisc.models import Violation
from unidisc.relations import (
    compose,
    faculty_course_relation,
    inverse,
    prerequisite_relation,
    student_course_relation,
    transitive_closure,
)


def detect_missing_prerequisites(catalog) -> List[Violation]:
    """Enrolled courses whose prerequisite is neither completed nor enrolled."""
    violations = []
    for sid, student in catalog.get_all_students().items():
        for cid in sorted(student.enrolled):
            course = catalog.get_course(cid)
            if course is None:
                continue
            for prereq in course.sorted_prerequisites():
                if prereq not in student.completed and prereq not in student.enrolled:
                    violations.append(
                        Violation(
                            kind="missing_prerequisite",
                            subject=sid,
                            message=f"Student {sid} enrolled in {cid} without prerequisite {prereq}",
                        )
                    )
    return violations


def detect_concurrent_prerequisites(catalog) -> List[Violation]:
    """Students enrolled in a course and its prerequisite at the same time."""
    violations = []
    for sid, student in catalog.get_all_students().items():
        for cid in sorted(student.enrolled):
            course = catalog.get_course(cid)
            if course is None:
                continue
            for prereq in course.sorted_prerequisites():
                if prereq in student.enrolled:
                    violations.append(
                        Violation(
                            kind="concurrent_prerequisite",
                            subject=sid,
                            message=f"Student {sid} enrolled in {cid} and its prerequisite {prereq} simultaneously",
                        )
                    )
    return violations


def detect_transitive_violations(
    catalog, config: Optional[EngineConfig] = None
) -> List[Violation]:
    """Enrolled courses with an uncompleted direct or indirect prerequisite."""
    config = config or EngineConfig()
    closure, complete = transitive_closure(
        prerequisite_relation(catalog), config.closure_max_iterations
    )
    if not complete:
        logger.warn("Prerequisite closure is incomplete; transitive violations may be missed")

    requires = defaultdict(set)
    for course, prereq in closure:
        requires[course].add(prereq)

    violations = []
    for sid, student in catalog.get_all_students().items():
        for cid in sorted(student.enrolled):
            for prereq in sorted(requires.get(cid, ())):
                if prereq not in student.completed:
                    violations.append(
                        Violation(
                            kind="transitive_prerequisite",
                            subject=sid,
                            message=f"Student {sid} enrolled in {cid} without completing indirect prerequisite {prereq}",
                        )
                    )
    return violations


def detect_shared_prerequisite_overload(
    catalog, config: Optional[EngineConfig] = None
) -> List[Violation]:
    """Students enrolled in too many courses that depend on one prerequisite."""
    config = config or EngineConfig()
    dependents = defaultdict(set)
    for course, prereq in prerequisite_relation(catalog):
        dependents[prereq].add(course)

    violations = []
    for sid, student in catalog.get_all_students().items():
        for prereq in sorted(dependents):
            shared = sorted(dependents[prereq] & student.enrolled)
            if len(shared) > config.max_shared_prerequisite_courses:
                violations.append(
                    Violation(
                        kind="shared_prerequisite",
                        subject=sid,
                        message=f"Student {sid} enrolled in {len(shared)} courses requiring {prereq}: {', '.join(shared)}",
                    )
                )
    return violations


def detect_faculty_spread(
    catalog, config: Optional[EngineConfig] = None
) -> List[Violation]:
    """Students taught by too many different faculty (student -> course -> faculty)."""
    config = config or EngineConfig()
    student_faculty = compose(
        student_course_relation(catalog), inverse(faculty_course_relation(catalog))
    )

    faculty_by_student = defaultdict(set)
    for sid, fid in student_faculty:
        faculty_by_student[sid].add(fid)

    return [
        Violation(
            kind="faculty_spread",
            subject=sid,
            message=f"Student {sid} has courses from {len(faculty_by_student[sid])} different faculty",
        )
        for sid in sorted(faculty_by_student)
        if len(faculty_by_student[sid]) > config.max_faculty_per_student
    ]


def detect_student_overload(
    catalog, config: Optional[EngineConfig] = None
) -> List[Violation]:
    config = config or EngineConfig()
    return [
        Violation(
            kind="student_overload",
            subject=sid,
            message=f"Student {sid} overloaded: {student.credits} credits (max: {config.max_student_credits})",
        )
        for sid, student in catalog.get_all_students().items()
        if student.credits > config.max_student_credits
    ]


def detect_faculty_overload(catalog) -> List[Violation]:
    return [
        Violation(
            kind="faculty_overload",
            subject=fid,
            message=f"Faculty {fid} overloaded: {len(faculty.assigned)} courses (max: {faculty.max_courses})",
        )
        for fid, faculty in catalog.get_all_faculty().items()
        if len(faculty.assigned) > faculty.max_courses
    ]


def detect_prefix_conflicts(
    catalog, config: Optional[EngineConfig] = None
) -> List[Violation]:
    """Students enrolled in too many courses sharing a two-letter prefix."""
    config = config or EngineConfig()
    violations = []
    for sid, student in catalog.get_all_students().items():
        by_prefix = defaultdict(list)
        for cid in sorted(student.enrolled):
            if len(cid) >= 2:
                by_prefix[cid[:2]].append(cid)

        for prefix in sorted(by_prefix):
            if len(by_prefix[prefix]) > config.max_courses_per_prefix:
                violations.append(
                    Violation(
                        kind="prefix_conflict",
                        subject=sid,
                        message=f"Student {sid} enrolled in too many {prefix} courses: {len(by_prefix[prefix])}",
                    )
                )
    return violations


def run_all_checks(catalog, config: Optional[EngineConfig] = None) -> List[Violation]:
    config = config or EngineConfig()
    violations = []
    violations.extend(detect_prefix_conflicts(catalog, config))
    violations.extend(detect_missing_prerequisites(catalog))
    violations.extend(detect_concurrent_prerequisites(catalog))
    violations.extend(detect_transitive_violations(catalog, config))
    violations.extend(detect_shared_prerequisite_overload(catalog, config))
    violations.extend(detect_faculty_spread(catalog, config))
    violations.extend(detect_student_overload(catalog, config))
    violations.extend(detect_faculty_overload(catalog))

    if violations:
        logger.warn(f"Consistency check found {len(violations)} violations")
    else:
        logger.info("Consistency check found no violations")
    return violations
