"""Propositional forward-chaining over ground atoms.

Rules are IF antecedent THEN consequent pairs of atoms. Atoms match by
normalized string equality only; there are no variables.
"""

from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from unidisc.atoms import atom, normalize_atom
from unidisc.config import DEFAULT_INFERENCE_MAX_ITERATIONS
from unidisc.logger import logger
from unidisc.models import InferenceResult, Rule


class RuleEngine:
    def __init__(
        self,
        rules: Optional[Iterable[Rule]] = None,
        facts: Optional[Iterable[str]] = None,
        max_iterations: int = DEFAULT_INFERENCE_MAX_ITERATIONS,
    ):
        self._rules: List[Rule] = list(rules or [])
        self._facts = {normalize_atom(f) for f in facts or []}
        self.max_iterations = max_iterations

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    @property
    def facts(self) -> FrozenSet[str]:
        return frozenset(self._facts)

    def add_rule(
        self, rule_id: str, antecedent: str, consequent: str, category: str = "general"
    ) -> Rule:
        rule = Rule(
            id=rule_id, antecedent=antecedent, consequent=consequent, category=category
        )
        self._rules.append(rule)
        logger.debug(f"Added rule {rule.id}: IF {rule.antecedent} THEN {rule.consequent}")
        return rule

    def add_course_rule(self, course_id: str, prerequisite: str) -> Rule:
        """enrolled(course) -> must_complete(prerequisite)"""
        return self.add_rule(
            f"CR_{course_id}_{prerequisite}",
            atom("enrolled", course_id),
            atom("must_complete", prerequisite),
            "prerequisite",
        )

    def add_faculty_rule(self, faculty_id: str, course_id: str, room_id: str) -> Rule:
        """teaches(faculty, course) -> must_use_room(course, room)"""
        return self.add_rule(
            f"FR_{faculty_id}_{course_id}",
            atom("teaches", faculty_id, course_id),
            atom("must_use_room", course_id, room_id),
            "faculty",
        )

    def add_fact(self, fact: str) -> str:
        normalized = normalize_atom(fact)
        self._facts.add(normalized)
        return normalized

    def remove_fact(self, fact: str) -> bool:
        """Remove a fact. Facts derived from it earlier are kept."""
        normalized = normalize_atom(fact)
        if normalized not in self._facts:
            return False
        self._facts.discard(normalized)
        return True

    def has_fact(self, fact: str) -> bool:
        return normalize_atom(fact) in self._facts

    def rules_by_category(self) -> Dict[str, List[Rule]]:
        grouped = defaultdict(list)
        for rule in self._rules:
            grouped[rule.category].append(rule)
        return {category: grouped[category] for category in sorted(grouped)}

    def forward_chain(self) -> InferenceResult:
        """Fire rules until a pass derives nothing, or the pass cap is hit.

        Rules are scanned in insertion order and a derived fact is visible to
        the rules after it in the same pass, so the result depends on rule
        order. Derived facts are added to the fact base.
        """
        result = InferenceResult()
        changed = True

        while changed and result.iterations < self.max_iterations:
            changed = False
            result.iterations += 1

            for rule in self._rules:
                if rule.antecedent in self._facts and rule.consequent not in self._facts:
                    self._facts.add(rule.consequent)
                    result.derived.append(rule.consequent)
                    result.fired.append(rule.id)
                    changed = True
                    logger.debug(
                        f"Iteration {result.iterations}: applied rule {rule.id} -> derived {rule.consequent}"
                    )

        result.complete = not changed
        if not result.complete:
            logger.warn(
                f"Forward chaining stopped at the {self.max_iterations} pass cap; derived facts may be incomplete"
            )
        elif result.derived:
            logger.info(f"Derived {len(result.derived)} facts in {result.iterations} passes")
        else:
            logger.info("No new facts derived")

        return result


def populate_from_catalog(engine: RuleEngine, catalog) -> None:
    """Load prerequisite rules, faculty room rules and enrollment facts.

    Faculty rules bind each taught course to the first room in the catalog
    and are skipped when the catalog has no rooms.
    """
    for cid, course in catalog.get_all_courses().items():
        for prereq in course.sorted_prerequisites():
            engine.add_course_rule(cid, prereq)

    rooms = catalog.get_all_rooms()
    if rooms:
        room_id = next(iter(rooms))
        for fid, faculty in catalog.get_all_faculty().items():
            for cid in sorted(faculty.assigned):
                engine.add_faculty_rule(fid, cid, room_id)
                engine.add_fact(atom("teaches", fid, cid))

    for student in catalog.get_all_students().values():
        for cid in sorted(student.enrolled):
            engine.add_fact(atom("enrolled", cid))

    logger.info(f"Loaded {len(engine.rules)} rules and {len(engine.facts)} facts from catalog")
