from .form import (
    ROUND, SQUARE, ANGLE, ATOM, VARIABLE, FOREST, BOUNDARIES,
    Form, IdGenerator, complement,
    container, round, square, angle, atom, variable, forest, unit, shell,
)
from .structure import (
    Lookup, clone, clone_forest, structurally_equal, forests_equal,
    get_at_path, update_at_path, replace_at_path, visit, find_by_id, format_path, ensure_ids,
)
from .canonical import (
    CanonicalNode, to_canonical, to_canonical_forest, from_canonical,
    flatten_forests, reindex, prepare_for_display, offset_trees,
    make_euler_tree, tree_from_euler_tree, structure_key,
    to_readable, form_to_readable, forest_to_readable, tree_size,
)
from .unification import (
    Var, is_variable, is_function, occurs_in,
    apply_substitution, unify_terms, standardize_apart,
    match_skeleton, instantiate,
)
from .state import RewriteState
from .engine import choose_redex, rewrite_step, run_rewrite
from .errors import (
    JamesError, PathError, PathOutOfBounds, EmptyPath,
    EditError, NotAForest, UnknownSiblingId, NonContiguousSelection, MissingInsertionPoint,
    RuleMismatch, UnknownRule,
    SearchError, MalformedResult, NoAnswer, SearchLimitExceeded,
    MalformedTree, ParseError,
)

__all__ = [
    "ROUND", "SQUARE", "ANGLE", "ATOM", "VARIABLE", "FOREST", "BOUNDARIES",
    "Form", "IdGenerator", "complement",
    "container", "round", "square", "angle", "atom", "variable", "forest", "unit", "shell",
    "Lookup", "clone", "clone_forest", "structurally_equal", "forests_equal",
    "get_at_path", "update_at_path", "replace_at_path", "visit", "find_by_id", "format_path", "ensure_ids",
    "CanonicalNode", "to_canonical", "to_canonical_forest", "from_canonical",
    "flatten_forests", "reindex", "prepare_for_display", "offset_trees",
    "make_euler_tree", "tree_from_euler_tree", "structure_key",
    "to_readable", "form_to_readable", "forest_to_readable", "tree_size",
    "Var", "is_variable", "is_function", "occurs_in",
    "apply_substitution", "unify_terms", "standardize_apart",
    "match_skeleton", "instantiate",
    "RewriteState", "choose_redex", "rewrite_step", "run_rewrite",
    "JamesError", "PathError", "PathOutOfBounds", "EmptyPath",
    "EditError", "NotAForest", "UnknownSiblingId", "NonContiguousSelection",
    "MissingInsertionPoint", "RuleMismatch", "UnknownRule",
    "SearchError", "MalformedResult", "NoAnswer", "SearchLimitExceeded",
    "MalformedTree", "ParseError",
]
