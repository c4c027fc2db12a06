from unidisc.catalog import Catalog
from unidisc.engine import PrerequisiteEngine
from unidisc.rules import RuleEngine

__all__ = ["Catalog", "PrerequisiteEngine", "RuleEngine"]
