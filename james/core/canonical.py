"""
Canonical (Euler-indexed) trees.

The rewrite engine and every external renderer work on this shape rather
than on Forms. Each node carries a label and a globally unique index
assigned by a pre-order walk from a base index:

    forest                  a sibling sequence
    container:<boundary>    a boundary; its single child is a forest
    atom:<name>             a named constant
    $<name>                 a variable (also a hole in rewrite skeletons)

Re-deriving indices from the same structure and base always gives the
same assignment. Indices carry no meaning beyond that: decoding ignores
them, and structure_key() drops them for comparison.

Flattening (forest directly inside forest collapses one level) is a
separate, explicit step. Neither to_canonical nor from_canonical does it.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import MalformedTree
from .form import ATOM, BOUNDARIES, FOREST, VARIABLE, Form


FOREST_LABEL = "forest"
CONTAINER_PREFIX = "container:"
ATOM_PREFIX = "atom:"
VARIABLE_PREFIX = "$"

DISPLAY_STRIDE = 100


@dataclass(frozen=True)
class CanonicalNode:
    index: int
    value: str
    children: tuple = ()

    @property
    def is_variable(self) -> bool:
        return self.value.startswith(VARIABLE_PREFIX)

    def __repr__(self):
        if not self.children:
            return f"{self.value}#{self.index}"
        inner = ", ".join(repr(child) for child in self.children)
        return f"{self.value}#{self.index}({inner})"


class _Counter:
    def __init__(self, start: int):
        self.value = start

    def take(self) -> int:
        current = self.value
        self.value += 1
        return current


def label_of(form: Form) -> str:
    if form.kind in BOUNDARIES:
        return CONTAINER_PREFIX + form.kind
    if form.kind == ATOM:
        return ATOM_PREFIX + form.name
    if form.kind == VARIABLE:
        return VARIABLE_PREFIX + form.name
    if form.kind == FOREST:
        return FOREST_LABEL
    raise ValueError(f"unknown form kind: {form.kind!r}")


# ── Encoding ────────────────────────────────────────────────────────────────

def to_canonical(form: Form, base_index: int = 1) -> CanonicalNode:
    """Encode a Form, numbering nodes base_index, base_index+1, ... in pre-order."""
    return _encode(form, _Counter(base_index))


def to_canonical_forest(forms, base_index: int = 1) -> CanonicalNode:
    """Encode a Forest (list of Forms) under a root forest node."""
    counter = _Counter(base_index)
    index = counter.take()
    return CanonicalNode(index, FOREST_LABEL, tuple(_encode(f, counter) for f in forms))


def _encode(form: Form, counter: _Counter) -> CanonicalNode:
    index = counter.take()
    label = label_of(form)
    if form.kind in BOUNDARIES:
        forest_index = counter.take()
        content = tuple(_encode(child, counter) for child in form.children)
        return CanonicalNode(index, label, (CanonicalNode(forest_index, FOREST_LABEL, content),))
    return CanonicalNode(index, label, tuple(_encode(child, counter) for child in form.children))


def from_canonical(tree: CanonicalNode) -> Form:
    """
    Decode back to a Form. Indices are ignored; child order is positional.

    A container's forest child becomes the container's content. If a
    container's single child is something else (a rewrite substituted a
    bare node there), that node becomes the only content.
    """
    value = tree.value
    if value == FOREST_LABEL:
        return Form(FOREST, [from_canonical(child) for child in tree.children])

    if value.startswith(CONTAINER_PREFIX):
        boundary = value[len(CONTAINER_PREFIX):]
        if boundary not in BOUNDARIES:
            raise MalformedTree(value, "unknown boundary")
        if len(tree.children) != 1:
            raise MalformedTree(value, f"container needs exactly one child, has {len(tree.children)}")
        content = tree.children[0]
        if content.value == FOREST_LABEL:
            children = [from_canonical(child) for child in content.children]
        else:
            children = [from_canonical(content)]
        return Form(boundary, children)

    if value.startswith(ATOM_PREFIX):
        if tree.children:
            raise MalformedTree(value, "atoms have no children")
        return Form(ATOM, [], name=value[len(ATOM_PREFIX):])

    if value.startswith(VARIABLE_PREFIX):
        if tree.children:
            raise MalformedTree(value, "variables have no children")
        return Form(VARIABLE, [], name=value[len(VARIABLE_PREFIX):])

    raise MalformedTree(value, "unknown label")


# ── Normalisation ───────────────────────────────────────────────────────────

def flatten_forests(tree: CanonicalNode) -> CanonicalNode:
    """
    Splice every forest child of a forest parent into the parent's children.

    Bottom-up, so arbitrarily deep forest-of-forest chains collapse.
    Returns a new tree; indices of surviving nodes are kept as they were.
    """
    children = []
    for child in tree.children:
        flat = flatten_forests(child)
        if tree.value == FOREST_LABEL and flat.value == FOREST_LABEL:
            children.extend(flat.children)
        else:
            children.append(flat)
    return CanonicalNode(tree.index, tree.value, tuple(children))


def reindex(tree: CanonicalNode, start_index: int = 1) -> CanonicalNode:
    return _reindex(tree, _Counter(start_index))


def _reindex(tree: CanonicalNode, counter: _Counter) -> CanonicalNode:
    index = counter.take()
    return CanonicalNode(index, tree.value, tuple(_reindex(c, counter) for c in tree.children))


def prepare_for_display(tree: CanonicalNode, start_index: int = 1) -> CanonicalNode:
    return reindex(flatten_forests(tree), start_index)


def tree_size(tree: CanonicalNode) -> int:
    return 1 + sum(tree_size(child) for child in tree.children)


def subtrees(tree: CanonicalNode, path: tuple = ()):
    """Every (path, subtree) pair, pre-order, left to right."""
    yield path, tree
    for position, child in enumerate(tree.children):
        yield from subtrees(child, path + (position,))


def replace_subtree(tree: CanonicalNode, path, replacement: CanonicalNode) -> CanonicalNode:
    """New tree with replacement at path; nodes off the path are shared."""
    path = tuple(path)
    if not path:
        return replacement
    head, tail = path[0], path[1:]
    children = list(tree.children)
    children[head] = replace_subtree(children[head], tail, replacement)
    return CanonicalNode(tree.index, tree.value, tuple(children))


def offset_trees(entries, stride: int = DISPLAY_STRIDE) -> list:
    """
    Prepare several trees to be shown together with non-overlapping indices.

    entries: (name, tree) or (name, tree, start_index) tuples. Entry k
    starts at k * stride + 1 unless it names its own start. Returns a list
    of (name, display_tree).
    """
    prepared = []
    for offset, entry in enumerate(entries):
        name, tree = entry[0], entry[1]
        explicit = len(entry) > 2 and entry[2] is not None
        start = entry[2] if explicit else offset * stride + 1
        display = prepare_for_display(tree, start)
        if not explicit and tree_size(display) > stride:
            raise ValueError(
                f"tree {name!r} has {tree_size(display)} nodes, more than the stride of {stride}"
            )
        prepared.append((name, display))
    return prepared


# ── Flattened (Euler) sequences ─────────────────────────────────────────────

def make_euler_tree(tree: CanonicalNode) -> tuple:
    """Pre-order sequence of (index, value, arity)."""
    out = []

    def walk(node):
        out.append((node.index, node.value, len(node.children)))
        for child in node.children:
            walk(child)

    walk(tree)
    return tuple(out)


def tree_from_euler_tree(sequence) -> CanonicalNode:
    """Inverse of make_euler_tree. Raises MalformedTree on a truncated or padded sequence."""
    sequence = list(sequence)
    position = 0

    def build():
        nonlocal position
        if position >= len(sequence):
            raise MalformedTree("<end>", "sequence ended inside a node")
        index, value, arity = sequence[position]
        position += 1
        return CanonicalNode(index, value, tuple(build() for _ in range(arity)))

    root = build()
    if position != len(sequence):
        raise MalformedTree(str(sequence[position][1]), "trailing entries after the root")
    return root


def structure_key(tree: CanonicalNode) -> tuple:
    """Index-free flattened key: equal keys <=> structurally equal trees."""
    return tuple((value, arity) for _index, value, arity in make_euler_tree(tree))


# ── Readable projection ─────────────────────────────────────────────────────

def to_readable(tree: CanonicalNode):
    """
    Plain data for renderers and tests.

    forest -> list, container -> {"boundary", "children"}, atom -> str,
    variable -> {"variable": name}.
    """
    value = tree.value
    if value == FOREST_LABEL:
        return [to_readable(child) for child in tree.children]
    if value.startswith(CONTAINER_PREFIX):
        content = tree.children[0] if tree.children else None
        if content is None:
            children = []
        elif content.value == FOREST_LABEL:
            children = to_readable(content)
        else:
            children = [to_readable(content)]
        return {"boundary": value[len(CONTAINER_PREFIX):], "children": children}
    if value.startswith(ATOM_PREFIX):
        return value[len(ATOM_PREFIX):]
    if value.startswith(VARIABLE_PREFIX):
        return {"variable": value[len(VARIABLE_PREFIX):]}
    return {"value": value, "children": [to_readable(child) for child in tree.children]}


def form_to_readable(form: Form):
    return to_readable(prepare_for_display(to_canonical(form)))


def forest_to_readable(forms) -> list:
    return to_readable(prepare_for_display(to_canonical_forest(forms)))


def node(value: str, *children: CanonicalNode, index: Optional[int] = None) -> CanonicalNode:
    """Build a canonical tree by hand (rewrite skeletons); indices via reindex unless given."""
    tree = CanonicalNode(0 if index is None else index, value, tuple(children))
    return tree if index is not None else reindex(tree)
