"""Heuristic label rules and the engine that applies them."""

from cybertag.rules.engine import (
    HeuristicRule,
    LabelAction,
    LabelPredicate,
    RuleEngine,
    WordPredicate,
    compile_pattern,
)
from cybertag.rules.table import build_rule_table, default_rule_table

__all__ = [
    "HeuristicRule",
    "LabelAction",
    "LabelPredicate",
    "RuleEngine",
    "WordPredicate",
    "compile_pattern",
    "build_rule_table",
    "default_rule_table",
]
