"""
Structural helpers over Forms and Forests: cloning, equality, paths.

A FormPath is a tuple of indices descending from a forest root through
`children`. The empty path denotes the forest itself, so anything that
needs a *node* rejects it with EmptyPath.

Every edit here is copy-on-write: the ancestors along the path are
rebuilt, siblings off the path are reused as they are, and the input
is never touched.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from .errors import EmptyPath, PathOutOfBounds
from .form import Form, IdGenerator


@dataclass
class Lookup:
    """A node together with where it was found."""
    node: Form
    parent: Optional[Form]
    path: tuple

    @property
    def parent_path(self) -> Optional[tuple]:
        return self.path[:-1] if self.parent is not None else None


def clone(form: Form, ids: Optional[IdGenerator] = None) -> Form:
    """
    Deep copy. No child list is shared with the source.

    Identity tokens are preserved: cloning is for copy-on-write editing,
    not re-identification. Pass an IdGenerator to stamp fresh ids instead.
    """
    new_id = ids.next_id() if ids is not None else form.id
    return Form(
        kind=form.kind,
        children=[clone(child, ids) for child in form.children],
        name=form.name,
        id=new_id,
    )


def clone_forest(forms, ids: Optional[IdGenerator] = None) -> list:
    return [clone(form, ids) for form in forms]


def structurally_equal(a: Form, b: Form) -> bool:
    """Same kind, same name, children pairwise equal in order. Ids ignored."""
    if a.kind != b.kind or a.name != b.name:
        return False
    if len(a.children) != len(b.children):
        return False
    return all(structurally_equal(x, y) for x, y in zip(a.children, b.children))


def forests_equal(xs, ys) -> bool:
    if len(xs) != len(ys):
        return False
    return all(structurally_equal(x, y) for x, y in zip(xs, ys))


def get_at_path(forms, path) -> Lookup:
    """
    Resolve a path to a node.

    Raises EmptyPath for a zero-length path and PathOutOfBounds when an
    index is out of range for its level.
    """
    path = tuple(path)
    if not path:
        raise EmptyPath()

    parent = None
    level = forms
    for depth, index in enumerate(path):
        if index < 0 or index >= len(level):
            raise PathOutOfBounds(path, depth)
        node = level[index]
        if depth == len(path) - 1:
            return Lookup(node=node, parent=parent, path=path)
        parent = node
        level = node.children

    raise PathOutOfBounds(path, len(path))  # pragma: no cover - loop always returns


def update_at_path(forms, path, updater: Callable[[Form], Form]) -> list:
    """New forest with updater(node) in place of the node at path."""
    path = tuple(path)
    if not path:
        raise EmptyPath()
    return _update(list(forms), path, updater, path, 0)


def _update(level: list, remaining: tuple, updater, full_path: tuple, depth: int) -> list:
    head, tail = remaining[0], remaining[1:]
    if head < 0 or head >= len(level):
        raise PathOutOfBounds(full_path, depth)

    current = level[head]
    if tail:
        replacement = Form(
            kind=current.kind,
            children=_update(current.children, tail, updater, full_path, depth + 1),
            name=current.name,
            id=current.id,
        )
    else:
        replacement = updater(current)

    rebuilt = list(level)
    rebuilt[head] = replacement
    return rebuilt


def replace_at_path(forms, path, replacement: Form) -> list:
    return update_at_path(forms, path, lambda _current: replacement)


def visit(forms, base_path: tuple = (), parent: Optional[Form] = None) -> Iterator[Lookup]:
    """
    Depth-first, pre-order walk over every node with its path and parent.

    A generator: lazy, finite, and each call starts over.
    """
    for index, node in enumerate(forms):
        path = base_path + (index,)
        yield Lookup(node=node, parent=parent, path=path)
        if node.children:
            yield from visit(node.children, path, node)


def find_by_id(forms, form_id: str) -> Optional[Lookup]:
    """First node carrying form_id, or None."""
    for entry in visit(forms):
        if entry.node.id == form_id:
            return entry
    return None


def format_path(path) -> str:
    if len(path) == 0:
        return "root"
    return " › ".join(str(index) for index in path)


def ensure_ids(forms, ids: IdGenerator) -> list:
    """Forest in which every node carries an id. Subtrees that already do are reused."""
    return [_ensure(form, ids) for form in forms]


def _ensure(form: Form, ids: IdGenerator) -> Form:
    children = [_ensure(child, ids) for child in form.children]
    unchanged = all(new is old for new, old in zip(children, form.children))
    if form.id is not None and unchanged:
        return form
    return Form(
        kind=form.kind,
        children=children,
        name=form.name,
        id=form.id if form.id is not None else ids.next_id(),
    )
