"""
Robinson unification with occurs check, plus one-way skeleton matching.

Two kinds of pattern live in this system and both bottom out here.

Logic terms, used by the axiom search:
    Var("X")                   -> variable
    anything hashable else     -> constant: "round", "[]", 3
    tuple                      -> compound: ("form", "round", ("[]"))

Variables are Var instances rather than a naming convention, because
atom names inside encoded Forms are arbitrary strings ("A" is a perfectly
good atom). Substitutions are plain dicts: {Var("X"): ("s", "0")}.

Canonical skeletons, used by the term rewrite system: a CanonicalNode
whose "$"-labelled leaves are holes. Matching is one-way: holes bind
whole subtrees of the subject, every other node must agree in label and
arity, and a hole used twice must bind structurally equal subtrees.
"""

from dataclasses import dataclass
from typing import Optional

from .canonical import CanonicalNode, structure_key


@dataclass(frozen=True)
class Var:
    name: str

    def __repr__(self):
        return self.name


def is_variable(term) -> bool:
    return isinstance(term, Var)


def is_function(term) -> bool:
    """Compound terms are tuples: (functor, arg1, arg2, ...)."""
    return isinstance(term, tuple)


def occurs_in(var, term) -> bool:
    """Does variable var occur anywhere in term? Prevents infinite substitutions."""
    if var == term:
        return True
    if is_function(term):
        return any(occurs_in(var, arg) for arg in term[1:])
    return False


def apply_substitution(sub: dict, term):
    """Apply a substitution dict to a single term. Follows chains."""
    if is_variable(term):
        if term in sub:
            return apply_substitution(sub, sub[term])
        return term
    if is_function(term):
        return tuple([term[0]] + [apply_substitution(sub, arg) for arg in term[1:]])
    return term


def walk(sub: dict, term):
    """Resolve a variable to whatever it is bound to, one level deep at a time."""
    while is_variable(term) and term in sub:
        term = sub[term]
    return term


def unify_terms(t1, t2, sub=None):
    """
    Unify two terms under substitution sub.

    Returns the updated substitution dict, or None if unification fails.
    The input dict is never modified.
    """
    if sub is None:
        sub = {}

    t1 = walk(sub, t1)
    t2 = walk(sub, t2)

    if t1 == t2:
        return sub

    if is_variable(t1):
        if occurs_in(t1, apply_substitution(sub, t2)):
            return None
        sub = dict(sub)
        sub[t1] = t2
        return sub

    if is_variable(t2):
        if occurs_in(t2, apply_substitution(sub, t1)):
            return None
        sub = dict(sub)
        sub[t2] = t1
        return sub

    if is_function(t1) and is_function(t2):
        if len(t1) != len(t2) or t1[0] != t2[0]:
            return None
        for a1, a2 in zip(t1[1:], t2[1:]):
            sub = unify_terms(a1, a2, sub)
            if sub is None:
                return None
        return sub

    return None


def term_variables(term) -> list:
    """Variables of term in first-occurrence order."""
    found = []

    def collect(t):
        if is_variable(t):
            if t not in found:
                found.append(t)
        elif is_function(t):
            for arg in t[1:]:
                collect(arg)

    collect(term)
    return found


def standardize_apart(terms, suffix: str) -> tuple:
    """
    Rename every variable in terms by appending suffix.

    One shared renaming across all of them, so a clause's head and body
    keep their variables linked.
    """
    var_map = {}

    def rename(term):
        if is_variable(term):
            if term not in var_map:
                var_map[term] = Var(term.name + suffix)
            return var_map[term]
        if is_function(term):
            return tuple([term[0]] + [rename(arg) for arg in term[1:]])
        return term

    return tuple(rename(term) for term in terms)


# ── Skeleton matching over canonical trees ──────────────────────────────────

def match_skeleton(pattern: CanonicalNode, subject: CanonicalNode,
                   bindings: Optional[dict] = None) -> Optional[dict]:
    """
    Match a rewrite skeleton against a subject tree.

    Returns {hole label: bound subtree}, or None if the skeleton does not fit.
    """
    if bindings is None:
        bindings = {}

    if pattern.is_variable:
        bound = bindings.get(pattern.value)
        if bound is None:
            bindings = dict(bindings)
            bindings[pattern.value] = subject
            return bindings
        if structure_key(bound) == structure_key(subject):
            return bindings
        return None

    if pattern.value != subject.value or len(pattern.children) != len(subject.children):
        return None

    for p_child, s_child in zip(pattern.children, subject.children):
        bindings = match_skeleton(p_child, s_child, bindings)
        if bindings is None:
            return None
    return bindings


def instantiate(skeleton: CanonicalNode, bindings: dict) -> CanonicalNode:
    """Substitute bound subtrees into a skeleton. Unbound holes stay as they are."""
    if skeleton.is_variable:
        return bindings.get(skeleton.value, skeleton)
    return CanonicalNode(
        skeleton.index,
        skeleton.value,
        tuple(instantiate(child, bindings) for child in skeleton.children),
    )
