from typing import Iterable, List, Optional, Tuple

from unidisc.catalog import CourseLookup
from unidisc.config import EngineConfig
from unidisc.graph import (
    TieBreak,
    build_dependency_graph,
    find_cyclic_courses,
    has_cycle,
    topological_sort,
)
from unidisc.models import EnumerationResult
from unidisc.sequences import enumerate_sequences


class PrerequisiteEngine:
    """Graph queries against an injected catalog.

    Each call builds its graph from the catalog as it is at that moment, so
    catalog changes between calls are always seen.
    """

    def __init__(self, catalog: CourseLookup, config: Optional[EngineConfig] = None):
        self.catalog = catalog
        self.config = config or EngineConfig()

    def has_cycle(self, course_id: str) -> bool:
        return has_cycle(build_dependency_graph(self.catalog), course_id)

    def find_cyclic_courses(self) -> List[str]:
        return find_cyclic_courses(build_dependency_graph(self.catalog))

    def topological_sort(
        self, course_ids: Iterable[str], tie_break: TieBreak = "lifo"
    ) -> Tuple[List[str], bool]:
        course_ids = list(course_ids)
        graph = build_dependency_graph(self.catalog, course_ids)
        return topological_sort(graph, course_ids, tie_break=tie_break)

    def enumerate_sequences(
        self, course_ids: Iterable[str], max_length: Optional[int] = None
    ) -> EnumerationResult:
        if max_length is None:
            max_length = self.config.default_max_sequence_length
        course_ids = list(course_ids)
        graph = build_dependency_graph(self.catalog, course_ids)
        return enumerate_sequences(graph, course_ids, max_length)
