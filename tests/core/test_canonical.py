"""
Tests for the canonical (Euler-indexed) tree encoding.

Core claims:
    - containers encode as container:<b> over an explicit forest node
    - indices are a pre-order numbering from the base index, and stable
    - decoding inverts encoding (up to ids)
    - flattening collapses forest-in-forest at any depth and is idempotent
    - the readable projection is plain nested lists, dicts and strings
"""

from dataclasses import FrozenInstanceError

import pytest
from hypothesis import given
from hypothesis import strategies as st

from james.core.errors import MalformedTree
from james.core.form import Form, BOUNDARIES, IdGenerator, atom, variable, forest, round, square, angle
from james.core.canonical import (
    CanonicalNode, label_of,
    to_canonical, to_canonical_forest, from_canonical,
    flatten_forests, reindex, prepare_for_display, tree_size,
    subtrees, replace_subtree, offset_trees,
    make_euler_tree, tree_from_euler_tree, structure_key,
    to_readable, form_to_readable, forest_to_readable, node,
)


# ── Generators ──────────────────────────────────────────────────────────────

@st.composite
def forms(draw, max_depth=3):
    if max_depth == 0:
        return atom(draw(st.sampled_from("xyz")))
    choice = draw(st.integers(min_value=0, max_value=4))
    if choice == 0:
        return atom(draw(st.sampled_from("xyz")))
    if choice == 1:
        return variable(draw(st.sampled_from("pq")))
    kind = "forest" if choice == 2 else draw(st.sampled_from(BOUNDARIES))
    children = draw(st.lists(forms(max_depth=max_depth - 1), max_size=3))
    return Form(kind, children)


def indices(tree):
    return [index for index, _value, _arity in make_euler_tree(tree)]


def has_nested_forest(tree):
    for _path, sub in subtrees(tree):
        if sub.value == "forest" and any(c.value == "forest" for c in sub.children):
            return True
    return False


# ── Unit tests ───────────────────────────────────────────────────────────────

class TestLabels:
    def test_labels(self):
        assert label_of(round()) == "container:round"
        assert label_of(atom("alpha")) == "atom:alpha"
        assert label_of(variable("x")) == "$x"
        assert label_of(forest()) == "forest"


class TestEncoding:
    def test_container_gets_forest_layer(self):
        tree = to_canonical(round(atom("a")))
        assert structure_key(tree) == (
            ("container:round", 1), ("forest", 1), ("atom:a", 0),
        )

    def test_preorder_indices_from_base(self):
        tree = to_canonical(round(square(), atom("a")), base_index=10)
        assert indices(tree) == [10, 11, 12, 13, 14]
        assert tree.children[0].children[1].value == "atom:a"
        assert tree.children[0].children[1].index == 14

    def test_forest_root(self):
        tree = to_canonical_forest([round(), atom("a")])
        assert tree.value == "forest"
        assert tree.index == 1
        assert [c.value for c in tree.children] == ["container:round", "atom:a"]

    def test_empty_container_keeps_empty_forest(self):
        tree = to_canonical(angle())
        assert structure_key(tree) == (("container:angle", 1), ("forest", 0))

    def test_ids_do_not_affect_encoding(self):
        ids = IdGenerator()
        assert to_canonical(round(atom("a", ids=ids), ids=ids)) == to_canonical(round(atom("a")))


class TestDecoding:
    def test_roundtrip(self):
        form = round(square(atom("a"), variable("v")), angle())
        assert from_canonical(to_canonical(form)) == form

    def test_bare_content_becomes_single_child(self):
        tree = node("container:round", node("atom:a"))
        assert from_canonical(tree) == round(atom("a"))

    def test_unknown_boundary(self):
        with pytest.raises(MalformedTree):
            from_canonical(node("container:hexagon", node("forest")))

    def test_container_arity(self):
        with pytest.raises(MalformedTree):
            from_canonical(node("container:round", node("forest"), node("forest")))

    def test_atom_with_children(self):
        with pytest.raises(MalformedTree):
            from_canonical(node("atom:a", node("atom:b")))

    def test_variable_with_children(self):
        with pytest.raises(MalformedTree):
            from_canonical(node("$x", node("atom:b")))

    def test_unknown_label(self):
        with pytest.raises(MalformedTree) as info:
            from_canonical(node("blob"))
        assert info.value.value == "blob"


class TestFlatten:
    def test_forest_in_forest(self):
        tree = node("forest", node("forest", node("atom:a"), node("atom:b")), node("atom:c"))
        assert structure_key(flatten_forests(tree)) == (
            ("forest", 3), ("atom:a", 0), ("atom:b", 0), ("atom:c", 0),
        )

    def test_deep_chain(self):
        tree = node("forest", node("forest", node("forest", node("atom:alpha"))))
        assert structure_key(flatten_forests(tree)) == (("forest", 1), ("atom:alpha", 0))

    def test_inside_container(self):
        tree = to_canonical(round(forest(atom("a"), atom("b"))))
        flat = flatten_forests(tree)
        assert from_canonical(flat) == round(atom("a"), atom("b"))

    def test_forest_under_container_label_is_kept(self):
        tree = to_canonical(round())
        assert flatten_forests(tree) == tree

    def test_does_not_mutate(self):
        tree = node("forest", node("forest", node("atom:a")))
        before = make_euler_tree(tree)
        flatten_forests(tree)
        assert make_euler_tree(tree) == before

    def test_keeps_surviving_indices(self):
        tree = node("forest", node("forest", node("atom:a")))
        assert indices(flatten_forests(tree)) == [1, 3]


class TestReindex:
    def test_renumbers_from_start(self):
        tree = node("forest", node("forest", node("atom:a")))
        assert indices(reindex(flatten_forests(tree), 5)) == [5, 6]

    def test_prepare_for_display(self):
        tree = node("forest", node("forest", node("atom:a")))
        assert indices(prepare_for_display(tree, 101)) == [101, 102]

    def test_tree_size(self):
        assert tree_size(to_canonical(round(atom("a")))) == 3


class TestSubtrees:
    def test_preorder_paths(self):
        tree = to_canonical(round(atom("a")))
        assert [path for path, _ in subtrees(tree)] == [(), (0,), (0, 0)]

    def test_replace_subtree(self):
        tree = to_canonical(round(atom("a")))
        replaced = replace_subtree(tree, (0, 0), node("atom:b"))
        assert from_canonical(replaced) == round(atom("b"))

    def test_replace_root(self):
        replacement = node("atom:b")
        assert replace_subtree(node("atom:a"), (), replacement) is replacement


class TestOffsetTrees:
    def test_consecutive_blocks(self):
        small = to_canonical(round())
        shown = offset_trees([("before", small), ("after", small)])
        assert [name for name, _ in shown] == ["before", "after"]
        assert shown[0][1].index == 1
        assert shown[1][1].index == 101

    def test_overflow_rejected(self):
        with pytest.raises(ValueError):
            offset_trees([("big", to_canonical(round(atom("a"))))], stride=2)

    def test_explicit_start(self):
        shown = offset_trees([("big", to_canonical(round(atom("a"))), 7)], stride=2)
        assert shown[0][1].index == 7

    def test_default_start_still_checks_overflow(self):
        wide = node("forest", *[node(f"atom:a{i}") for i in range(150)])
        with pytest.raises(ValueError):
            offset_trees([("wide", wide, None), ("after", to_canonical(atom("b")))])


class TestEulerSequence:
    def test_make(self):
        assert make_euler_tree(node("forest", node("atom:a"))) == (
            (1, "forest", 1), (2, "atom:a", 0),
        )

    def test_inverse(self):
        tree = to_canonical(round(square(atom("a"))))
        assert tree_from_euler_tree(make_euler_tree(tree)) == tree

    def test_truncated(self):
        with pytest.raises(MalformedTree):
            tree_from_euler_tree([(1, "forest", 2), (2, "atom:a", 0)])

    def test_trailing(self):
        with pytest.raises(MalformedTree):
            tree_from_euler_tree([(1, "atom:a", 0), (2, "atom:b", 0)])

    def test_structure_key_ignores_indices(self):
        assert structure_key(to_canonical(round(), 1)) == structure_key(to_canonical(round(), 50))


class TestReadable:
    def test_forest_of_containers(self):
        assert forest_to_readable([round(square(atom("a")))]) == [
            {"boundary": "round", "children": [{"boundary": "square", "children": ["a"]}]},
        ]

    def test_variable(self):
        assert form_to_readable(variable("x")) == {"variable": "x"}

    def test_flattens_before_projection(self):
        assert forest_to_readable([forest(atom("a"), forest(atom("b")))]) == ["a", "b"]

    def test_bare_content(self):
        assert to_readable(node("container:round", node("atom:a"))) == {
            "boundary": "round", "children": ["a"],
        }


class TestCanonicalNode:
    def test_is_variable(self):
        assert node("$A").is_variable
        assert not node("atom:A").is_variable

    def test_repr(self):
        assert repr(node("forest", node("atom:a"))) == "forest#1(atom:a#2)"

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            CanonicalNode(1, "forest").value = "atom:a"


# ── Property-based tests ─────────────────────────────────────────────────────

class TestCanonicalProperties:

    @given(forms())
    def test_decode_inverts_encode(self, form):
        assert from_canonical(to_canonical(form)) == form

    @given(forms(), st.integers(min_value=1, max_value=500))
    def test_indices_are_consecutive_preorder(self, form, base):
        tree = to_canonical(form, base)
        assert indices(tree) == list(range(base, base + tree_size(tree)))

    @given(forms())
    def test_encoding_is_deterministic(self, form):
        assert to_canonical(form) == to_canonical(form)

    @given(st.lists(forms(), max_size=3))
    def test_flatten_leaves_no_nested_forest(self, forest_):
        assert not has_nested_forest(flatten_forests(to_canonical_forest(forest_)))

    @given(st.lists(forms(), max_size=3))
    def test_flatten_idempotent(self, forest_):
        once = flatten_forests(to_canonical_forest(forest_))
        assert flatten_forests(once) == once
