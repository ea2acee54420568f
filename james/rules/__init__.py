from .base import Match, Rule, enumerate_matches, apply_rule, find_all_nodes, is_goal_reached
from .axioms import (
    EnfoldRule, ClarifyRule, RULES, get_rule, is_inversion_shell,
    ENFOLD_RULE_ID, CLARIFY_RULE_ID,
)
from .commands import EnfoldSelection, END, enfold_selection, resolve_span

__all__ = [
    "Match", "Rule", "enumerate_matches", "apply_rule", "find_all_nodes", "is_goal_reached",
    "EnfoldRule", "ClarifyRule", "RULES", "get_rule", "is_inversion_shell",
    "ENFOLD_RULE_ID", "CLARIFY_RULE_ID",
    "EnfoldSelection", "END", "enfold_selection", "resolve_span",
]
