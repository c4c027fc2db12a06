from __future__ import annotations

from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field, field_validator, model_validator

from unidisc.atoms import normalize_atom


class Course(BaseModel):
    id: str
    name: str = ""
    credits: int = Field(default=0, ge=0)
    prerequisites: Set[str] = Field(default_factory=set)

    def sorted_prerequisites(self) -> List[str]:
        return sorted(self.prerequisites)


class Student(BaseModel):
    id: str
    name: str = ""
    enrolled: Set[str] = Field(default_factory=set)
    completed: Set[str] = Field(default_factory=set)
    credits: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_disjoint(self) -> "Student":
        overlap = self.enrolled & self.completed
        if overlap:
            raise ValueError(
                f"Student {self.id} is both enrolled in and has completed: {sorted(overlap)}"
            )
        return self


class Faculty(BaseModel):
    id: str
    name: str = ""
    assigned: Set[str] = Field(default_factory=set)
    max_courses: int = Field(default=3, ge=0)

    def can_assign(self) -> bool:
        return len(self.assigned) < self.max_courses


class Room(BaseModel):
    id: str
    capacity: int = Field(default=0, ge=0)
    kind: str = ""


class Lab(BaseModel):
    id: str
    course_id: str
    capacity: int = Field(default=0, ge=0)
    enrolled: Set[str] = Field(default_factory=set)

    def can_enroll(self) -> bool:
        return len(self.enrolled) < self.capacity


class Rule(BaseModel):
    """IF antecedent THEN consequent, over normalized ground atoms."""

    id: str
    antecedent: str
    consequent: str
    category: str = "general"

    @field_validator("antecedent", "consequent")
    @classmethod
    def normalize(cls, value: str) -> str:
        return normalize_atom(value)


class EnumerationResult(BaseModel):
    course_ids: List[str]
    sequences: List[List[str]] = Field(default_factory=list)
    # at least one branch was cut short by the depth bound
    truncated: bool = False

    def complete_sequences(self) -> List[List[str]]:
        return [s for s in self.sequences if len(s) == len(self.course_ids)]


class InferenceResult(BaseModel):
    derived: List[str] = Field(default_factory=list)
    fired: List[str] = Field(default_factory=list)
    iterations: int = 0
    complete: bool = True


class EligibilityResult(BaseModel):
    student_id: str
    course_id: str
    eligible: bool
    missing: List[str] = Field(default_factory=list)
    reason: Optional[str] = None


class ChainVerification(BaseModel):
    """Outcome of a level-by-level induction over a course's prerequisite chain."""

    student_id: str
    course_id: str
    holds: bool
    levels: Dict[int, List[str]] = Field(default_factory=dict)
    failed_level: Optional[int] = None
    missing: List[str] = Field(default_factory=list)
    reason: Optional[str] = None


class Violation(BaseModel):
    kind: str
    subject: str
    message: str
