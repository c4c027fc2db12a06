"""Pytest fixtures for the unidisc engine tests."""

import pytest

from unidisc.catalog import Catalog
from unidisc.models import Course, Faculty, Room, Student


@pytest.fixture(autouse=True)
def monkeypatch_env(monkeypatch):
    """Silence the logger for every test."""
    monkeypatch.setenv("ENV", "test")
    return monkeypatch


@pytest.fixture
def make_catalog():
    """Build a catalog from {course_id: [prerequisite, ...]}."""

    def build(prerequisites, credits=3):
        catalog = Catalog()
        for code, prereqs in prerequisites.items():
            catalog.add_course(
                Course(id=code, name=code, credits=credits, prerequisites=set(prereqs))
            )
        return catalog

    return build


@pytest.fixture
def sample_catalog():
    catalog = Catalog()
    catalog.add_course(Course(id="CS101", name="Intro to Programming", credits=3))
    catalog.add_course(
        Course(id="CS102", name="Data Structures", credits=3, prerequisites={"CS101"})
    )
    catalog.add_course(
        Course(id="CS201", name="Algorithms", credits=4, prerequisites={"CS102"})
    )
    catalog.add_course(Course(id="MATH101", name="Calculus I", credits=3))
    catalog.add_course(
        Course(
            id="CS301",
            name="Theory of Computation",
            credits=3,
            prerequisites={"CS201", "MATH101"},
        )
    )

    catalog.add_student(Student(id="S1", name="Ada"))
    catalog.add_student(Student(id="S2", name="Alan"))
    catalog.enroll_student("S1", "CS101")
    catalog.complete_course("S1", "CS101")
    catalog.enroll_student("S1", "CS102")
    catalog.enroll_student("S2", "CS301")

    catalog.add_faculty(Faculty(id="F1", name="Grace"))
    catalog.assign_course("F1", "CS101")
    catalog.assign_course("F1", "CS102")
    catalog.add_room(Room(id="R1", capacity=40, kind="lecture"))

    return catalog
