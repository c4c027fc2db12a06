from typing import Dict, Iterable, Optional

Mapping = Dict[str, str]


def is_injective(func: Mapping) -> bool:
    images = list(func.values())
    return len(images) == len(set(images))


def is_surjective(func: Mapping, codomain: Iterable[str]) -> bool:
    return set(func.values()) == set(codomain)


def is_bijective(func: Mapping, codomain: Iterable[str]) -> bool:
    return is_injective(func) and is_surjective(func, codomain)


def compose_functions(f: Mapping, g: Mapping) -> Mapping:
    """f after g: x -> f(g(x)), for every x where g(x) is in the domain of f."""
    return {x: f[y] for x, y in sorted(g.items()) if y in f}


def inverse_function(func: Mapping) -> Optional[Mapping]:
    """None when func is not injective (no inverse exists)."""
    if not is_injective(func):
        return None
    return {y: x for x, y in func.items()}


def student_course_mapping(catalog) -> Mapping:
    """Each student with enrollments mapped to their first enrolled course."""
    return {
        sid: min(student.enrolled)
        for sid, student in catalog.get_all_students().items()
        if student.enrolled
    }


def course_faculty_mapping(catalog) -> Mapping:
    """Each assigned course mapped to its faculty; later ids win on overlap."""
    mapping = {}
    for fid, faculty in catalog.get_all_faculty().items():
        for cid in sorted(faculty.assigned):
            mapping[cid] = fid
    return mapping
