import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_CLOSURE_MAX_ITERATIONS = 100
DEFAULT_INFERENCE_MAX_ITERATIONS = 100
DEFAULT_MAX_SEQUENCE_LENGTH = 10


class EngineConfig(BaseModel):
    """Tunable bounds and thresholds for the engine and its checks."""

    closure_max_iterations: int = Field(default=DEFAULT_CLOSURE_MAX_ITERATIONS, gt=0)
    inference_max_iterations: int = Field(
        default=DEFAULT_INFERENCE_MAX_ITERATIONS, gt=0
    )
    default_max_sequence_length: int = Field(default=DEFAULT_MAX_SEQUENCE_LENGTH, gt=0)
    max_student_credits: int = Field(default=18, gt=0)
    max_courses_per_prefix: int = Field(default=3, gt=0)
    max_shared_prerequisite_courses: int = Field(default=2, gt=0)
    max_faculty_per_student: int = Field(default=3, gt=0)


# field name -> environment variable
ENV_VARS = {
    "closure_max_iterations": "UNIDISC_CLOSURE_MAX_ITERATIONS",
    "inference_max_iterations": "UNIDISC_INFERENCE_MAX_ITERATIONS",
    "default_max_sequence_length": "UNIDISC_MAX_SEQUENCE_LENGTH",
    "max_student_credits": "UNIDISC_MAX_STUDENT_CREDITS",
    "max_courses_per_prefix": "UNIDISC_MAX_COURSES_PER_PREFIX",
    "max_shared_prerequisite_courses": "UNIDISC_MAX_SHARED_PREREQUISITE_COURSES",
    "max_faculty_per_student": "UNIDISC_MAX_FACULTY_PER_STUDENT",
}


def load_config() -> EngineConfig:
    """Build an EngineConfig from the environment (and a .env file if present).

    Raises:
        ValueError: if a variable is set but is not a positive integer
    """
    load_dotenv()
    values = {}
    for field, var in ENV_VARS.items():
        raw = os.getenv(var)
        if raw is None or raw.strip() == "":
            continue
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"{var} must be an integer, got: {raw}")
        if value <= 0:
            raise ValueError(f"{var} must be a positive integer, got: {value}")
        values[field] = value

    return EngineConfig(**values)
