"""
Span-enfold: the user-facing "wrap these siblings" edit.

Unlike the Enfold rule, which wraps exactly one node, this command works
on a run of siblings inside one forest. The selected span (or an empty
span at an insertion point) is replaced by a single new shell:

    a b c d   --select b c, round-->   a ( [ b c ] ) d

The target is addressed by a path from the root forest; the empty path
is the root itself, otherwise the node at the path must carry a sibling
list (a container or a forest node). Siblings are picked by identity
token, so every child of the target forest needs an id.

Only the targeted forest and its ancestors are rebuilt.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.errors import (
    MissingInsertionPoint, NonContiguousSelection, NotAForest,
    PathOutOfBounds, UnknownSiblingId,
)
from ..core.form import Form, IdGenerator, complement, container
from ..core.structure import clone_forest


class _End:
    def __repr__(self):
        return "END"


END = _End()
"""insert_before_id value meaning: insert after the last sibling."""


@dataclass(frozen=True)
class EnfoldSelection:
    """
    path:             where the target forest is
    selected_ids:     ids of the siblings to enclose (any order, must be contiguous)
    boundary:         outer boundary of the new shell
    inner_boundary:   inner boundary; defaults to the complement of boundary
    payload:          explicit content for the inner container instead of the span
    insert_before_id: with nothing selected, an id to insert before, or END
    """
    path: tuple
    selected_ids: tuple = ()
    boundary: str = "round"
    inner_boundary: Optional[str] = None
    payload: Optional[tuple] = None
    insert_before_id: object = None


def resolve_span(children, selection: EnfoldSelection) -> tuple:
    """(start, end) of the span to replace, validated against children."""
    index_of = {}
    for position, child in enumerate(children):
        if child.id is not None:
            index_of.setdefault(child.id, position)

    indices = []
    for form_id in selection.selected_ids:
        if form_id not in index_of:
            raise UnknownSiblingId(form_id)
        indices.append(index_of[form_id])
    indices.sort()

    for previous, current in zip(indices, indices[1:]):
        if current != previous + 1:
            raise NonContiguousSelection(indices)

    if indices:
        return indices[0], indices[-1] + 1

    if selection.insert_before_id is None:
        raise MissingInsertionPoint()
    if selection.insert_before_id is END:
        return len(children), len(children)
    if selection.insert_before_id not in index_of:
        raise UnknownSiblingId(selection.insert_before_id)
    start = index_of[selection.insert_before_id]
    return start, start


def _enfold_children(children, selection: EnfoldSelection, ids) -> list:
    start, end = resolve_span(children, selection)
    if selection.payload is not None:
        content = clone_forest(selection.payload)
    else:
        content = children[start:end]

    inner_boundary = selection.inner_boundary or complement(selection.boundary)
    outer = container(selection.boundary, [container(inner_boundary, content, ids)], ids)
    return list(children[:start]) + [outer] + list(children[end:])


def enfold_selection(forms, selection: EnfoldSelection,
                     ids: Optional[IdGenerator] = None) -> list:
    """
    New forest with the selected span enfolded. See the module docstring.

    Raises NotAForest, UnknownSiblingId, NonContiguousSelection,
    MissingInsertionPoint, or PathOutOfBounds; the input is never modified.
    """
    path = tuple(selection.path)
    return _descend(list(forms), path, 0, selection, ids)


def _descend(children, path, depth, selection, ids) -> list:
    if depth == len(path):
        return _enfold_children(children, selection, ids)

    index = path[depth]
    if index < 0 or index >= len(children):
        raise PathOutOfBounds(path, depth)

    current = children[index]
    if depth + 1 == len(path) and not current.holds_forest:
        raise NotAForest(path, current.kind)

    rebuilt = Form(
        kind=current.kind,
        children=_descend(current.children, path, depth + 1, selection, ids),
        name=current.name,
        id=current.id,
    )
    result = list(children)
    result[index] = rebuilt
    return result
