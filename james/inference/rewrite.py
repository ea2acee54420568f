"""
Term rewriting over canonical trees.

A TermRewriteSystem is a list of directed rules (lhs skeleton -> rhs
skeleton) plus a list of equations. Skeleton holes are "$"-labelled
leaves: a hole in the lhs captures a whole subtree, the rhs gets the
captured subtrees substituted back in.

Equations are carried as data only. Nothing applies them yet; the
engine's behaviour depends solely on the directed rules.

Which redex to fire is decided by an Ordering. The default counts nodes,
so the engine always prefers the rewrite that leaves the smallest tree.

The built-in system clarifies inversion shells:

    container:round(forest(container:square($A)))  ->  $A
    container:square(forest(container:round($A)))  ->  $A

$A binds the inner container's content forest, so a shell around any
number of siblings clarifies in one step. The result leaves a forest
inside a forest; flatten_forests() tidies that up for display.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..core.canonical import (
    CONTAINER_PREFIX, FOREST_LABEL, CanonicalNode,
    flatten_forests, from_canonical, node, prepare_for_display, replace_subtree,
    subtrees, to_canonical, to_canonical_forest, tree_size,
)
from ..core.engine import run_rewrite
from ..core.form import FOREST, ROUND, SQUARE, Form
from ..core.unification import instantiate, match_skeleton


MAX_REWRITE_STEPS = 8


# ── Orderings ───────────────────────────────────────────────────────────────

class Ordering:
    """Strict weak ordering over canonical trees. Must look at structure only."""

    def greater_than(self, a: CanonicalNode, b: CanonicalNode) -> bool:
        raise NotImplementedError

    def less_than(self, a: CanonicalNode, b: CanonicalNode) -> bool:
        return self.greater_than(b, a)

    def equivalent(self, a: CanonicalNode, b: CanonicalNode) -> bool:
        return not self.greater_than(a, b) and not self.greater_than(b, a)


class NodeCountOrdering(Ordering):
    def greater_than(self, a, b) -> bool:
        return tree_size(a) > tree_size(b)


ordering = NodeCountOrdering()


# ── Rules and systems ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class RewriteRule:
    name: str
    lhs: CanonicalNode
    rhs: CanonicalNode


@dataclass(frozen=True)
class Equation:
    name: str
    left: CanonicalNode
    right: CanonicalNode


@dataclass(frozen=True)
class Redex:
    """One place a rule fits, and what the whole tree becomes if it fires."""
    path: tuple
    rule: RewriteRule
    bindings: dict
    result: CanonicalNode


@dataclass
class TermRewriteSystem:
    rules: list = field(default_factory=list)
    equations: list = field(default_factory=list)

    def redexes(self, tree: CanonicalNode):
        return find_redexes(tree, self)


def find_redexes(tree: CanonicalNode, system: TermRewriteSystem) -> list:
    """
    Every (position, rule) where the rule's lhs fits the subtree.

    Pre-order position first, rule declaration order second. Each Redex
    carries the full rewritten tree so an ordering can compare results.
    """
    found = []
    for path, subtree in subtrees(tree):
        for rule in system.rules:
            bindings = match_skeleton(rule.lhs, subtree)
            if bindings is None:
                continue
            contractum = instantiate(rule.rhs, bindings)
            found.append(Redex(
                path=path,
                rule=rule,
                bindings=bindings,
                result=replace_subtree(tree, path, contractum),
            ))
    return found


def hole(name: str) -> CanonicalNode:
    return node(f"${name}")


def shell_skeleton(outer: str, inner: str, content: CanonicalNode) -> CanonicalNode:
    """outer(forest(inner(content))) with content standing for inner's whole forest."""
    return node(
        CONTAINER_PREFIX + outer,
        node(FOREST_LABEL, node(CONTAINER_PREFIX + inner, content)),
    )


CLARIFY_RULES = [
    RewriteRule(
        name="clarify_round_square",
        lhs=shell_skeleton(ROUND, SQUARE, hole("A")),
        rhs=hole("A"),
    ),
    RewriteRule(
        name="clarify_square_round",
        lhs=shell_skeleton(SQUARE, ROUND, hole("A")),
        rhs=hole("A"),
    ),
]

CLARIFY_SYSTEM = TermRewriteSystem(rules=list(CLARIFY_RULES), equations=[])


# ── Entry points ────────────────────────────────────────────────────────────

def apply_rules(tree: CanonicalNode, system: TermRewriteSystem = CLARIFY_SYSTEM,
                order: Optional[Ordering] = None, max_steps: int = MAX_REWRITE_STEPS,
                verbose: bool = False) -> CanonicalNode:
    """Rewrite toward a normal form; returns the (possibly partial) result tree."""
    state = run_rewrite(tree, system, order or ordering, max_steps, verbose=verbose)
    return state.tree


def _encode(form_or_forest) -> CanonicalNode:
    if isinstance(form_or_forest, Form):
        return to_canonical(form_or_forest)
    return to_canonical_forest(form_or_forest)


def rewrite_form(form_or_forest, max_steps: int = MAX_REWRITE_STEPS,
                 system: TermRewriteSystem = CLARIFY_SYSTEM,
                 order: Optional[Ordering] = None, verbose: bool = False) -> CanonicalNode:
    """Encode a Form (or a Forest) and rewrite it. Decode with from_canonical."""
    return apply_rules(_encode(form_or_forest), system, order, max_steps, verbose)


def rewrite_form_for_display(form_or_forest, max_steps: int = MAX_REWRITE_STEPS,
                             start_index: int = 1,
                             system: TermRewriteSystem = CLARIFY_SYSTEM,
                             order: Optional[Ordering] = None) -> CanonicalNode:
    return prepare_for_display(rewrite_form(form_or_forest, max_steps, system, order), start_index)


def rewrite_to_form(form_or_forest, max_steps: int = MAX_REWRITE_STEPS,
                    system: TermRewriteSystem = CLARIFY_SYSTEM,
                    order: Optional[Ordering] = None) -> Form:
    """
    Rewrite and decode back to a Form.

    The result is flattened first. A root forest holding a single form
    decodes to that form, so ( [ ( [ alpha ] ) ] ) comes back as alpha.
    """
    decoded = from_canonical(flatten_forests(rewrite_form(form_or_forest, max_steps, system, order)))
    if decoded.kind == FOREST and len(decoded.children) == 1:
        return decoded.children[0]
    return decoded


def rewrite_run(form_or_forest, max_steps: int = MAX_REWRITE_STEPS,
                system: TermRewriteSystem = CLARIFY_SYSTEM,
                order: Optional[Ordering] = None, verbose: bool = False):
    """Like rewrite_form, but returns the whole RewriteState (steps, history)."""
    return run_rewrite(_encode(form_or_forest), system, order or ordering, max_steps, verbose=verbose)
