from typing import Dict, List, Optional, Protocol

from unidisc.logger import logger
from unidisc.models import Course, Faculty, Lab, Room, Student


class CourseLookup(Protocol):
    """Read-only view of the catalog the graph components depend on."""

    def get_course(self, course_id: str) -> Optional[Course]: ...

    def get_all_courses(self) -> Dict[str, Course]: ...


class Catalog:
    """In-memory store of courses, students, faculty, rooms and labs.

    The engine only reads from it. Mutations go through the methods below so
    that student credit totals and enrolled/completed sets stay consistent.
    """

    def __init__(self):
        self._courses: Dict[str, Course] = {}
        self._students: Dict[str, Student] = {}
        self._faculty: Dict[str, Faculty] = {}
        self._rooms: Dict[str, Room] = {}
        self._labs: Dict[str, Lab] = {}

    ## Read
    def get_course(self, course_id: str) -> Optional[Course]:
        return self._courses.get(course_id)

    def get_all_courses(self) -> Dict[str, Course]:
        return {cid: self._courses[cid] for cid in sorted(self._courses)}

    def course_exists(self, course_id: str) -> bool:
        return course_id in self._courses

    def get_student(self, student_id: str) -> Optional[Student]:
        return self._students.get(student_id)

    def get_all_students(self) -> Dict[str, Student]:
        return {sid: self._students[sid] for sid in sorted(self._students)}

    def get_faculty(self, faculty_id: str) -> Optional[Faculty]:
        return self._faculty.get(faculty_id)

    def get_all_faculty(self) -> Dict[str, Faculty]:
        return {fid: self._faculty[fid] for fid in sorted(self._faculty)}

    def get_room(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def get_all_rooms(self) -> Dict[str, Room]:
        return {rid: self._rooms[rid] for rid in sorted(self._rooms)}

    def get_lab(self, lab_id: str) -> Optional[Lab]:
        return self._labs.get(lab_id)

    def get_all_labs(self) -> Dict[str, Lab]:
        return {lid: self._labs[lid] for lid in sorted(self._labs)}

    ## Write
    def add_course(self, course: Course) -> None:
        self._courses[course.id] = course

    def remove_course(self, course_id: str) -> bool:
        """Remove a course and every student and faculty reference to it.

        Students enrolled in the course are dropped from it and lose its
        credits.
        """
        course = self._courses.pop(course_id, None)
        if course is None:
            return False

        for student in self._students.values():
            if course_id in student.enrolled:
                student.enrolled.discard(course_id)
                student.credits -= course.credits
            student.completed.discard(course_id)
        for faculty in self._faculty.values():
            faculty.assigned.discard(course_id)
        for lab_id in [lid for lid, lab in self._labs.items() if lab.course_id == course_id]:
            del self._labs[lab_id]

        logger.debug(f"Removed course {course_id} and its references")
        return True

    def add_student(self, student: Student) -> None:
        self._students[student.id] = student

    def add_faculty(self, faculty: Faculty) -> None:
        self._faculty[faculty.id] = faculty

    def add_room(self, room: Room) -> None:
        self._rooms[room.id] = room

    def add_lab(self, lab: Lab) -> None:
        self._labs[lab.id] = lab

    def clear(self) -> None:
        self._courses.clear()
        self._students.clear()
        self._faculty.clear()
        self._rooms.clear()
        self._labs.clear()

    def _require(self, student_id: str, course_id: str):
        student = self._students.get(student_id)
        if student is None:
            raise ValueError(f"Unknown student: {student_id}")
        course = self._courses.get(course_id)
        if course is None:
            raise ValueError(f"Unknown course: {course_id}")
        return student, course

    def enroll_student(self, student_id: str, course_id: str) -> None:
        student, course = self._require(student_id, course_id)
        if course_id in student.completed:
            raise ValueError(f"Student {student_id} already completed {course_id}")
        if course_id in student.enrolled:
            return
        student.enrolled.add(course_id)
        student.credits += course.credits

    def complete_course(self, student_id: str, course_id: str) -> None:
        student, course = self._require(student_id, course_id)
        if course_id not in student.enrolled:
            raise ValueError(f"Student {student_id} is not enrolled in {course_id}")
        student.enrolled.discard(course_id)
        student.completed.add(course_id)
        student.credits -= course.credits

    def drop_course(self, student_id: str, course_id: str) -> None:
        student, course = self._require(student_id, course_id)
        if course_id not in student.enrolled:
            return
        student.enrolled.discard(course_id)
        student.credits -= course.credits

    def assign_course(self, faculty_id: str, course_id: str) -> None:
        faculty = self._faculty.get(faculty_id)
        if faculty is None:
            raise ValueError(f"Unknown faculty: {faculty_id}")
        if course_id not in self._courses:
            raise ValueError(f"Unknown course: {course_id}")
        faculty.assigned.add(course_id)

    def unassign_course(self, faculty_id: str, course_id: str) -> None:
        faculty = self._faculty.get(faculty_id)
        if faculty is None:
            raise ValueError(f"Unknown faculty: {faculty_id}")
        faculty.assigned.discard(course_id)

    def enroll_lab(self, lab_id: str, student_id: str) -> None:
        lab = self._labs.get(lab_id)
        if lab is None:
            raise ValueError(f"Unknown lab: {lab_id}")
        if student_id not in self._students:
            raise ValueError(f"Unknown student: {student_id}")
        if student_id in lab.enrolled:
            return
        if not lab.can_enroll():
            raise ValueError(f"Lab {lab_id} is full ({lab.capacity})")
        lab.enrolled.add(student_id)

    @classmethod
    def from_dict(cls, data: dict) -> "Catalog":
        """Build a catalog from ``{"courses": [...], "students": [...], ...}``.

        Student credit totals are recomputed from the enrolled courses.

        Raises:
            ValueError: if data or one of its sections has the wrong shape,
                or an entry fails model validation
        """
        if not isinstance(data, dict):
            raise ValueError("Catalog data must be a JSON object")
        catalog = cls()
        for item in _section(data, "courses"):
            catalog.add_course(Course.model_validate(item))
        for item in _section(data, "students"):
            student = Student.model_validate(item)
            student.credits = sum(
                catalog._courses[cid].credits
                for cid in student.enrolled
                if cid in catalog._courses
            )
            catalog.add_student(student)
        for item in _section(data, "faculty"):
            catalog.add_faculty(Faculty.model_validate(item))
        for item in _section(data, "rooms"):
            catalog.add_room(Room.model_validate(item))
        for item in _section(data, "labs"):
            catalog.add_lab(Lab.model_validate(item))

        logger.info(
            f"Loaded catalog with {len(catalog._courses)} courses, "
            f"{len(catalog._students)} students, {len(catalog._faculty)} faculty"
        )
        return catalog


def _section(data: dict, name: str) -> List[dict]:
    items = data.get(name, [])
    if not isinstance(items, list):
        raise ValueError(f"Catalog section '{name}' must be a list")
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"Catalog section '{name}' entry {i} must be an object")
    return items
