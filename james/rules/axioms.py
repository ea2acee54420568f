"""
Enfold and Clarify as structural rules.

Enfold (axiom.enfold) fits every node. Applying it wraps the node in an
inversion shell: an outer container of the rule's boundary holding an
inner container of the complementary boundary, which holds the node.

    x  ->  (  [ x ]  )        round outer
    x  ->  [  ( x )  ]        square outer
    x  ->  <  < x >  >        angle is its own complement

Clarify (axiom.clarify) fits a container whose only child is a container
of the complementary boundary with exactly one child: ( [ x ] ), [ ( x ) ]
and < < x > >. Applying it replaces the node by that innermost child, so
it undoes Enfold for every boundary. With the "search" strategy only the
round/square shells match, since those are the ones the axioms state.

Both rules decide *where* they apply themselves. *What* the rewritten
node looks like is computed either directly ("direct") or by asking the
axiom search ("search"), which is a declarative statement of the same
axioms. The search only decides the shape: the rewritten node is always
built from the original, so ids survive either way.
"""

from ..core.errors import MalformedResult, UnknownRule
from ..core.form import ANGLE, BOUNDARIES, ROUND, SQUARE, complement, shell
from ..core.structure import clone, replace_at_path, get_at_path, structurally_equal, visit
from ..inference.axioms import transform_all, transform_one
from .base import Match, Rule


ENFOLD_RULE_ID = "axiom.enfold"
CLARIFY_RULE_ID = "axiom.clarify"

STRATEGIES = ("direct", "search")


def is_inversion_shell(form, boundaries=BOUNDARIES) -> bool:
    """outer(inner(x)) with inner the complement of outer and a single x."""
    if form.kind not in boundaries or len(form.children) != 1:
        return False
    inner = form.children[0]
    return inner.kind == complement(form.kind) and len(inner.children) == 1


class EnfoldRule(Rule):
    id = ENFOLD_RULE_ID
    name = "Enfold"
    description = "Wrap a form in an inversion shell."

    def __init__(self, boundary: str = ROUND, strategy: str = "direct"):
        if boundary not in BOUNDARIES:
            raise ValueError(f"not a boundary: {boundary!r}")
        if strategy not in STRATEGIES:
            raise ValueError(f"unknown strategy: {strategy!r}")
        if strategy == "search" and boundary == ANGLE:
            raise ValueError("the enfold axioms have no angle shell to search for")
        self.boundary = boundary
        self.strategy = strategy

    def matches(self, forms) -> list:
        return [self.make_match(entry.path, repr(entry.node)) for entry in visit(forms)]

    def enfold(self, form):
        if self.strategy == "search":
            for candidate in transform_all("enfold", form):
                if candidate.kind == self.boundary:
                    # The search picks the shell; the node itself keeps its ids.
                    return shell(candidate.kind, [form], candidate.children[0].kind)
        return shell(self.boundary, [form])

    def apply(self, forms, match: Match) -> list:
        target = get_at_path(forms, match.path).node
        return replace_at_path(forms, match.path, self.enfold(target))


class ClarifyRule(Rule):
    id = CLARIFY_RULE_ID
    name = "Clarify"
    description = "Remove an inversion shell, keeping what it held."

    def __init__(self, strategy: str = "direct"):
        if strategy not in STRATEGIES:
            raise ValueError(f"unknown strategy: {strategy!r}")
        self.strategy = strategy
        # The axioms only know the round/square shells.
        self.shells = (ROUND, SQUARE) if strategy == "search" else BOUNDARIES

    def matches(self, forms) -> list:
        return [
            self.make_match(entry.path, repr(entry.node))
            for entry in visit(forms)
            if is_inversion_shell(entry.node, self.shells)
        ]

    def clarify(self, form):
        content = form.children[0].children[0]
        if self.strategy == "search":
            answer = transform_one("clarify", form)
            if not structurally_equal(answer, content):
                raise MalformedResult(answer, "clarify did not return the shell content")
        return clone(content)

    def apply(self, forms, match: Match) -> list:
        target = get_at_path(forms, match.path).node
        return replace_at_path(forms, match.path, self.clarify(target))


RULES = {
    ENFOLD_RULE_ID: EnfoldRule(),
    CLARIFY_RULE_ID: ClarifyRule(),
}


def get_rule(rule_id: str, boundary: str = None, strategy: str = "direct") -> Rule:
    """
    Look up a rule by id. Passing boundary/strategy builds a configured
    instance instead of the registered default.
    """
    if rule_id not in RULES:
        raise UnknownRule(rule_id)
    if rule_id == ENFOLD_RULE_ID and (boundary is not None or strategy != "direct"):
        return EnfoldRule(boundary or ROUND, strategy)
    if rule_id == CLARIFY_RULE_ID and strategy != "direct":
        return ClarifyRule(strategy)
    return RULES[rule_id]
