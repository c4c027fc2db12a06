import heapq
from typing import Dict, Iterable, List, Literal, Optional, Set, Tuple

from unidisc.catalog import CourseLookup
from unidisc.logger import logger

TieBreak = Literal["lifo", "lexicographic"]


class CourseGraph:
    """Prerequisite graph. An edge runs from a prerequisite to its dependent."""

    def __init__(self):
        self.graph = {}  # course_code -> {'requires': set, 'dependents': set}

    def __contains__(self, course_code):
        return course_code in self.graph

    def __len__(self):
        return len(self.graph)

    def add_course(self, course_code):
        """Add a course to the graph."""
        if course_code not in self.graph:
            self.graph[course_code] = {"requires": set(), "dependents": set()}

    def add_requires(self, course_code, prereq_code):
        """Add an edge prereq_code -> course_code."""
        self.add_course(course_code)
        self.add_course(prereq_code)
        self.graph[course_code]["requires"].add(prereq_code)
        self.graph[prereq_code]["dependents"].add(course_code)

    def get_prerequisites(self, course_code) -> Set[str]:
        """Get all courses that must be completed before this course."""
        if course_code not in self.graph:
            return set()
        return self.graph[course_code]["requires"]

    def get_dependents(self, course_code) -> Set[str]:
        """Get all courses that list this course as a prerequisite."""
        if course_code not in self.graph:
            return set()
        return self.graph[course_code]["dependents"]

    def courses(self) -> List[str]:
        return sorted(self.graph)

    def edges(self) -> List[Tuple[str, str]]:
        """All (prerequisite, dependent) pairs, sorted."""
        return sorted(
            (prereq, course)
            for course, node in self.graph.items()
            for prereq in node["requires"]
        )


def build_dependency_graph(
    catalog: CourseLookup, course_ids: Optional[Iterable[str]] = None
) -> CourseGraph:
    """Build a fresh dependency graph from the catalog.

    With no course_ids every catalog course is a node, and so is every
    prerequisite it references (even one missing from the catalog). With
    course_ids the graph holds only those ids that exist in the catalog, and
    edges to prerequisites outside that set are left out.
    """
    graph = CourseGraph()

    if course_ids is None:
        for code, course in catalog.get_all_courses().items():
            graph.add_course(code)
            for prereq in course.sorted_prerequisites():
                graph.add_requires(code, prereq)
        logger.debug(f"Built full dependency graph with {len(graph)} courses")
        return graph

    included = set()
    for code in sorted(set(course_ids)):
        if catalog.get_course(code) is None:
            logger.debug(f"Course not found in catalog, excluding: {code}")
            continue
        included.add(code)

    for code in sorted(included):
        graph.add_course(code)
        for prereq in catalog.get_course(code).sorted_prerequisites():
            if prereq in included:
                graph.add_requires(code, prereq)

    logger.debug(f"Built dependency graph with {len(graph)} of {len(set(course_ids))} courses")
    return graph


def has_cycle(graph: CourseGraph, course_code: str) -> bool:
    """Return True if the prerequisite chain of course_code revisits itself.

    Walks prerequisite edges depth first with an explicit stack. Only a
    node still on the active path counts as a cycle; a node reached again
    through a different path does not.
    """
    if course_code not in graph:
        return False

    on_path = {course_code}
    explored = set()
    stack = [(course_code, iter(sorted(graph.get_prerequisites(course_code))))]

    while stack:
        course, prereqs = stack[-1]
        prereq = next(prereqs, None)

        if prereq is None:
            stack.pop()
            on_path.discard(course)
            explored.add(course)
            continue

        if prereq in on_path:
            logger.warn(f"Cycle detected in prerequisites involving {prereq}")
            return True

        if prereq in explored or prereq not in graph:
            continue

        on_path.add(prereq)
        stack.append((prereq, iter(sorted(graph.get_prerequisites(prereq)))))

    return False


def find_cyclic_courses(graph: CourseGraph) -> List[str]:
    """Courses whose prerequisite chain reaches a cycle, ascending."""
    cyclic = [course for course in graph.courses() if has_cycle(graph, course)]
    if cyclic:
        logger.warn(f"{len(cyclic)} courses have cyclic prerequisite chains")
    else:
        logger.info(f"Validated {len(graph)} prerequisite chains, no cycles")
    return cyclic


def topological_sort(
    graph: CourseGraph,
    course_ids: Optional[Iterable[str]] = None,
    tie_break: TieBreak = "lifo",
) -> Tuple[List[str], bool]:
    """Order courses so every prerequisite comes before its dependents.

    Kahn's algorithm over the edges inside the given set. With the default
    "lifo" tie-break, eligible courses are pushed in ascending order and the
    most recently pushed one is taken first. "lexicographic" always takes
    the smallest eligible id.

    Returns:
        - sorted_courses: the order found; truncated if a cycle blocks it
        - ok: False when the set is not acyclic
    """
    if course_ids is None:
        members = graph.courses()
    else:
        members = sorted(c for c in set(course_ids) if c in graph)
    member_set = set(members)

    in_degree: Dict[str, int] = {
        course: len(graph.get_prerequisites(course) & member_set) for course in members
    }

    ready = [course for course in members if in_degree[course] == 0]
    if tie_break == "lexicographic":
        heapq.heapify(ready)

    sorted_courses = []
    while ready:
        if tie_break == "lexicographic":
            course = heapq.heappop(ready)
        else:
            course = ready.pop()
        sorted_courses.append(course)

        for dependent in sorted(graph.get_dependents(course) & member_set):
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                if tie_break == "lexicographic":
                    heapq.heappush(ready, dependent)
                else:
                    ready.append(dependent)

    if len(sorted_courses) != len(members):
        blocked = sorted(c for c in members if in_degree[c] > 0)
        logger.warn(f"Circular dependency detected, unable to order: {blocked}")
        return sorted_courses, False

    return sorted_courses, True
