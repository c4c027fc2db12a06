import pytest
from pydantic import ValidationError

from unidisc.catalog import Catalog
from unidisc.models import Course, Lab, Student


def test_sample_catalog_credits(sample_catalog):
    assert sample_catalog.get_student("S1").credits == 3
    assert sample_catalog.get_student("S1").completed == {"CS101"}
    assert sample_catalog.get_student("S2").credits == 3


def test_getters_are_sorted(sample_catalog):
    assert list(sample_catalog.get_all_courses()) == [
        "CS101",
        "CS102",
        "CS201",
        "CS301",
        "MATH101",
    ]
    assert sample_catalog.course_exists("CS101")
    assert not sample_catalog.course_exists("NOPE")
    assert sample_catalog.get_course("NOPE") is None


def test_enroll_is_idempotent(sample_catalog):
    sample_catalog.enroll_student("S2", "CS301")
    assert sample_catalog.get_student("S2").credits == 3


def test_enroll_completed_course_raises(sample_catalog):
    with pytest.raises(ValueError, match="already completed"):
        sample_catalog.enroll_student("S1", "CS101")


def test_enroll_unknown_ids_raise(sample_catalog):
    with pytest.raises(ValueError, match="Unknown student"):
        sample_catalog.enroll_student("NOBODY", "CS101")
    with pytest.raises(ValueError, match="Unknown course"):
        sample_catalog.enroll_student("S1", "NOPE")


def test_complete_requires_enrollment(sample_catalog):
    with pytest.raises(ValueError, match="not enrolled"):
        sample_catalog.complete_course("S1", "CS201")


def test_drop_course(sample_catalog):
    sample_catalog.drop_course("S1", "CS102")
    student = sample_catalog.get_student("S1")
    assert student.enrolled == set()
    assert student.credits == 0


def test_assign_and_unassign(sample_catalog):
    sample_catalog.unassign_course("F1", "CS101")
    assert sample_catalog.get_faculty("F1").assigned == {"CS102"}
    with pytest.raises(ValueError, match="Unknown course"):
        sample_catalog.assign_course("F1", "NOPE")


def test_lab_capacity(sample_catalog):
    sample_catalog.add_lab(Lab(id="L1", course_id="CS101", capacity=1))
    sample_catalog.enroll_lab("L1", "S1")

    with pytest.raises(ValueError, match="full"):
        sample_catalog.enroll_lab("L1", "S2")


def test_remove_and_clear(sample_catalog):
    assert sample_catalog.remove_course("CS301") is True
    assert sample_catalog.remove_course("CS301") is False

    sample_catalog.clear()
    assert sample_catalog.get_all_courses() == {}
    assert sample_catalog.get_all_students() == {}


def test_student_cannot_be_enrolled_and_completed():
    with pytest.raises(ValidationError):
        Student(id="S1", enrolled={"CS101"}, completed={"CS101"})


def test_negative_credits_rejected():
    with pytest.raises(ValidationError):
        Course(id="CS101", credits=-1)


def test_from_dict():
    catalog = Catalog.from_dict(
        {
            "courses": [
                {"id": "CS101", "credits": 3},
                {"id": "CS102", "credits": 4, "prerequisites": ["CS101"]},
            ],
            "students": [{"id": "S1", "enrolled": ["CS101", "CS102"], "credits": 99}],
            "faculty": [{"id": "F1", "assigned": ["CS101"]}],
            "rooms": [{"id": "R1", "capacity": 30}],
            "labs": [{"id": "L1", "course_id": "CS101", "capacity": 10}],
        }
    )

    assert catalog.get_course("CS102").prerequisites == {"CS101"}
    assert catalog.get_student("S1").credits == 7
    assert catalog.get_faculty("F1").assigned == {"CS101"}
    assert list(catalog.get_all_rooms()) == ["R1"]
    assert catalog.get_lab("L1").capacity == 10


def test_from_dict_rejects_non_object():
    with pytest.raises(ValueError, match="JSON object"):
        Catalog.from_dict(["CS101"])


def test_remove_course_releases_references(sample_catalog):
    sample_catalog.add_lab(Lab(id="L1", course_id="CS102", capacity=5))

    assert sample_catalog.remove_course("CS102") is True

    s1 = sample_catalog.get_student("S1")
    assert s1.enrolled == set()
    assert s1.credits == 0
    assert sample_catalog.get_faculty("F1").assigned == {"CS101"}
    assert sample_catalog.get_lab("L1") is None


def test_remove_course_clears_completed(sample_catalog):
    sample_catalog.remove_course("CS101")
    assert sample_catalog.get_student("S1").completed == set()
    assert sample_catalog.get_student("S1").credits == 3


def test_enroll_lab_again_when_full(sample_catalog):
    sample_catalog.add_lab(Lab(id="L1", course_id="CS101", capacity=1))
    sample_catalog.enroll_lab("L1", "S1")

    sample_catalog.enroll_lab("L1", "S1")

    assert sample_catalog.get_lab("L1").enrolled == {"S1"}


def test_from_dict_rejects_non_list_section():
    with pytest.raises(ValueError, match="'courses' must be a list"):
        Catalog.from_dict({"courses": None})


def test_from_dict_rejects_non_object_entry():
    with pytest.raises(ValueError, match="'students' entry 0 must be an object"):
        Catalog.from_dict({"students": ["S1"]})
