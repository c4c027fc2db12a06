from unidisc.engine import PrerequisiteEngine
from unidisc.graph import CourseGraph, build_dependency_graph, topological_sort


def test_topological_sort_linear_chain():
    graph = CourseGraph()
    graph.add_requires("CS102", "CS101")
    graph.add_requires("CS201", "CS102")

    sorted_courses, ok = topological_sort(graph, ["CS101", "CS102", "CS201"])

    assert ok
    assert sorted_courses == ["CS101", "CS102", "CS201"]


def test_topological_sort_cycle_detection():
    graph = CourseGraph()
    graph.add_requires("CS101", "CS102")
    graph.add_requires("CS102", "CS101")

    sorted_courses, ok = topological_sort(graph, ["CS101", "CS102"])

    assert not ok
    assert sorted_courses == []


def test_topological_sort_partial_order_before_cycle():
    graph = CourseGraph()
    graph.add_course("MATH101")
    graph.add_requires("CS101", "CS102")
    graph.add_requires("CS102", "CS101")

    sorted_courses, ok = topological_sort(graph)

    assert not ok
    assert sorted_courses == ["MATH101"]


def test_topological_sort_independent_courses_lifo():
    graph = CourseGraph()
    graph.add_course("CS101")
    graph.add_course("CS102")
    graph.add_course("MATH101")

    sorted_courses, ok = topological_sort(graph, ["CS101", "CS102", "MATH101"])

    assert ok
    assert sorted_courses == ["MATH101", "CS102", "CS101"]


def test_topological_sort_lifo_takes_latest_eligible():
    graph = CourseGraph()
    graph.add_requires("B", "A")
    graph.add_requires("C", "A")

    sorted_courses, ok = topological_sort(graph)

    assert ok
    assert sorted_courses == ["A", "C", "B"]


def test_topological_sort_lexicographic_tie_break():
    graph = CourseGraph()
    graph.add_requires("B", "A")
    graph.add_requires("C", "A")
    graph.add_course("AA")

    sorted_courses, ok = topological_sort(graph, tie_break="lexicographic")

    assert ok
    assert sorted_courses == ["A", "AA", "B", "C"]


def test_topological_sort_respects_every_edge(sample_catalog):
    graph = build_dependency_graph(sample_catalog)
    sorted_courses, ok = topological_sort(graph)

    assert ok
    position = {course: i for i, course in enumerate(sorted_courses)}
    for prereq, dependent in graph.edges():
        assert position[prereq] < position[dependent]


def test_topological_sort_ignores_edges_leaving_the_set(sample_catalog):
    engine = PrerequisiteEngine(sample_catalog)
    sorted_courses, ok = engine.topological_sort(["CS201", "CS301"])

    assert ok
    assert sorted_courses == ["CS201", "CS301"]


def test_engine_sort_drops_unknown_courses(sample_catalog):
    engine = PrerequisiteEngine(sample_catalog)
    sorted_courses, ok = engine.topological_sort(["CS101", "UNKNOWN"])

    assert ok
    assert sorted_courses == ["CS101"]
