"""
Core data structures: Form, boundaries, identity tokens.

These are the atoms of the whole system. Nothing in here depends on
rewriting, search, or rules.

Kinds of Form:
    Containers: "round", "square", "angle"  -- a boundary holding a forest
    Leaves:     "atom" (named constant), "variable" (named hole)
    Grouping:   "forest"                    -- siblings with no boundary

A container's children ARE its content forest. A Forest is simply a
list of Forms; the "forest" kind reifies one as a node when a single
Form has to stand for a whole sibling sequence.

Equality is structural. Identity tokens only address a node inside one
forest during interactive selection and never take part in comparison.
"""

from dataclasses import dataclass, field
from typing import Optional


ROUND = "round"
SQUARE = "square"
ANGLE = "angle"
ATOM = "atom"
VARIABLE = "variable"
FOREST = "forest"

BOUNDARIES = (ROUND, SQUARE, ANGLE)
KINDS = BOUNDARIES + (ATOM, VARIABLE, FOREST)


def complement(boundary: str) -> str:
    """round <-> square; angle is its own complement."""
    if boundary == ROUND:
        return SQUARE
    if boundary == SQUARE:
        return ROUND
    if boundary == ANGLE:
        return ANGLE
    raise ValueError(f"not a boundary: {boundary!r}")


class IdGenerator:
    """
    Source of identity tokens: "f1", "f2", ...

    Passed explicitly to whatever constructs Forms. Two generators never
    share a counter, so a test that needs deterministic ids just makes
    its own (or calls reset()).
    """

    def __init__(self, prefix: str = "f", start: int = 1):
        self.prefix = prefix
        self.start = start
        self._next = start

    def next_id(self) -> str:
        token = f"{self.prefix}{self._next}"
        self._next += 1
        return token

    def reset(self):
        self._next = self.start


@dataclass
class Form:
    """A node of a term tree. See the module docstring for the kinds."""
    kind: str
    children: list = field(default_factory=list)
    name: Optional[str] = None
    id: Optional[str] = None

    @property
    def is_container(self) -> bool:
        return self.kind in BOUNDARIES

    @property
    def is_leaf(self) -> bool:
        return self.kind in (ATOM, VARIABLE)

    @property
    def holds_forest(self) -> bool:
        """Containers and forest nodes carry a sibling list."""
        return self.kind in BOUNDARIES or self.kind == FOREST

    def __eq__(self, other):
        return (isinstance(other, Form) and
                self.kind == other.kind and
                self.name == other.name and
                self.children == other.children)

    def __hash__(self):
        return hash((self.kind, self.name, tuple(self.children)))

    def __repr__(self):
        if self.kind == ATOM:
            return f"atom({self.name!r})"
        if self.kind == VARIABLE:
            return f"variable({self.name!r})"
        inner = ", ".join(repr(child) for child in self.children)
        return f"{self.kind}({inner})"


def _stamp(ids: Optional[IdGenerator]) -> Optional[str]:
    return ids.next_id() if ids is not None else None


def _copy_children(children) -> list:
    # Imported late: structure builds on this module.
    from .structure import clone
    return [clone(child) for child in children]


# ── Factories ───────────────────────────────────────────────────────────────

def container(boundary: str, children=(), ids: Optional[IdGenerator] = None) -> Form:
    if boundary not in BOUNDARIES:
        raise ValueError(f"not a boundary: {boundary!r}")
    return Form(boundary, _copy_children(children), id=_stamp(ids))


def round(*children: Form, ids: Optional[IdGenerator] = None) -> Form:
    return container(ROUND, children, ids)


def square(*children: Form, ids: Optional[IdGenerator] = None) -> Form:
    return container(SQUARE, children, ids)


def angle(*children: Form, ids: Optional[IdGenerator] = None) -> Form:
    return container(ANGLE, children, ids)


def atom(name: str, ids: Optional[IdGenerator] = None) -> Form:
    return Form(ATOM, [], name=name, id=_stamp(ids))


def variable(name: str, ids: Optional[IdGenerator] = None) -> Form:
    return Form(VARIABLE, [], name=name, id=_stamp(ids))


def forest(*children: Form, ids: Optional[IdGenerator] = None) -> Form:
    return Form(FOREST, _copy_children(children), id=_stamp(ids))


def unit(ids: Optional[IdGenerator] = None) -> Form:
    """The unit: an empty round container."""
    return round(ids=ids)


def shell(outer: str, content, inner: Optional[str] = None,
          ids: Optional[IdGenerator] = None) -> Form:
    """
    outer(inner(content...)) with inner defaulting to the complement of outer.

    This is the inversion shell that Enfold introduces and Clarify removes.
    """
    if inner is None:
        inner = complement(outer)
    return container(outer, [container(inner, content, ids)], ids)
