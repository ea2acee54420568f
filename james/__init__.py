"""
James: a rewriting core for a boundary algebra.

Terms are trees of round, square and angle containers with atom and
variable leaves, grouped into ordered forests. Two axioms relate them:

    Enfold:   x  =  ( [ x ] )  =  [ ( x ) ]
    Clarify:  ( [ x ] )  =  [ ( x ) ]  =  x

Four pieces work on these terms:
    core.canonical     Euler-indexed trees, flattening, readable projection
    inference.rewrite  term rewrite system run as a bounded fixpoint loop
    rules              path-addressed Enfold/Clarify rules, span-enfold edits
    inference.axioms   backward-chaining search for all one-step rewrites

Usage:
    python -m james rewrite "( [ ( [ alpha ] ) ] )"
    python -m james search enfold "()"
    python -m james lesson enfold
"""

from .core.form import (
    Form, IdGenerator, complement,
    container, round, square, angle, atom, variable, forest, unit,
)
from .core.structure import (
    clone, clone_forest, structurally_equal, forests_equal,
    get_at_path, replace_at_path, visit,
)
from .core.canonical import (
    CanonicalNode, to_canonical, to_canonical_forest, from_canonical,
    flatten_forests, reindex, offset_trees, to_readable, form_to_readable, forest_to_readable,
)
from .core.errors import JamesError
from .inference.rewrite import (
    TermRewriteSystem, NodeCountOrdering, CLARIFY_SYSTEM,
    apply_rules, rewrite_form, rewrite_to_form, rewrite_run,
)
from .inference.axioms import transform_all, transform_one
from .rules import (
    EnfoldRule, ClarifyRule, RULES, get_rule, enumerate_matches, apply_rule,
    EnfoldSelection, END, enfold_selection,
)
from .notation import parse, parse_form, unparse
from .session import Session

__all__ = [
    "Form", "IdGenerator", "complement",
    "container", "round", "square", "angle", "atom", "variable", "forest", "unit",
    "clone", "clone_forest", "structurally_equal", "forests_equal",
    "get_at_path", "replace_at_path", "visit",
    "CanonicalNode", "to_canonical", "to_canonical_forest", "from_canonical",
    "flatten_forests", "reindex", "offset_trees",
    "to_readable", "form_to_readable", "forest_to_readable",
    "JamesError",
    "TermRewriteSystem", "NodeCountOrdering", "CLARIFY_SYSTEM",
    "apply_rules", "rewrite_form", "rewrite_to_form", "rewrite_run",
    "transform_all", "transform_one",
    "EnfoldRule", "ClarifyRule", "RULES", "get_rule", "enumerate_matches", "apply_rule",
    "EnfoldSelection", "END", "enfold_selection",
    "parse", "parse_form", "unparse",
    "Session",
]
