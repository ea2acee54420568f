from .rewrite import (
    Ordering, NodeCountOrdering, RewriteRule, Equation, Redex, TermRewriteSystem,
    find_redexes, CLARIFY_RULES, CLARIFY_SYSTEM, MAX_REWRITE_STEPS,
    apply_rules, rewrite_form, rewrite_form_for_display, rewrite_to_form, rewrite_run,
)
from .resolve import HornClause, Program, solve, query, RESOURCE_LIMIT
from .axioms import (
    AXIOMS, encode_form, decode_form, format_term,
    transform_all, transform_one,
)

__all__ = [
    "Ordering", "NodeCountOrdering", "RewriteRule", "Equation", "Redex", "TermRewriteSystem",
    "find_redexes", "CLARIFY_RULES", "CLARIFY_SYSTEM", "MAX_REWRITE_STEPS",
    "apply_rules", "rewrite_form", "rewrite_form_for_display", "rewrite_to_form", "rewrite_run",
    "HornClause", "Program", "solve", "query", "RESOURCE_LIMIT",
    "AXIOMS", "encode_form", "decode_form", "format_term",
    "transform_all", "transform_one",
]
