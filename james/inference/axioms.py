"""
The enfold/clarify axioms as a Horn-clause program.

    enfold(X, form(round,  [form(square, [X])])).
    enfold(X, form(square, [form(round,  [X])])).
    clarify(form(round,  [form(square, [X])]), X).
    clarify(form(square, [form(round,  [X])]), X).

Any X enfolds into either shell orientation; either orientation clarifies
back to X. Querying a predicate with a concrete Form and an open Result
variable returns *all* one-step rewrites, in fact order. That makes this
an independent oracle for the structural rules, and an alternative way
for them to compute "what does the rewritten node look like".

Encoding: every Form is form(Kind, Children). Kind is the boundary token
(round, square, angle), forest, atom(Name) or var(Name). Children is a
cons list (".", Head, Tail) ending in "[]".
"""

from ..core.errors import MalformedResult, NoAnswer
from ..core.form import ATOM, BOUNDARIES, FOREST, VARIABLE, ROUND, SQUARE, Form
from ..core.unification import Var, is_function, is_variable
from .resolve import RESOURCE_LIMIT, HornClause, Program, query


NIL = "[]"
CONS = "."
FORM = "form"


def cons_list(items) -> object:
    result = NIL
    for item in reversed(list(items)):
        result = (CONS, item, result)
    return result


def list_items(term) -> list:
    values = []
    cursor = term
    while is_function(cursor) and len(cursor) == 3 and cursor[0] == CONS:
        values.append(cursor[1])
        cursor = cursor[2]
    if cursor != NIL:
        raise MalformedResult(term, "list does not end in []")
    return values


def _shell(outer: str, inner: str, content) -> tuple:
    return (FORM, outer, cons_list([(FORM, inner, cons_list([content]))]))


def _axioms() -> Program:
    x = Var("X")
    result = Var("Result")
    return Program((
        HornClause(("enfold", x, _shell(ROUND, SQUARE, x)), label="enfold round-square"),
        HornClause(("enfold", x, _shell(SQUARE, ROUND, x)), label="enfold square-round"),
        HornClause(("clarify", _shell(ROUND, SQUARE, result), result), label="clarify round-square"),
        HornClause(("clarify", _shell(SQUARE, ROUND, result), result), label="clarify square-round"),
    ))


AXIOMS = _axioms()

PREDICATES = ("enfold", "clarify")


# ── Encoding ────────────────────────────────────────────────────────────────

def encode_form(form: Form) -> tuple:
    if form.kind in BOUNDARIES or form.kind == FOREST:
        kind = form.kind
    elif form.kind == ATOM:
        kind = ("atom", form.name)
    elif form.kind == VARIABLE:
        kind = ("var", form.name)
    else:
        raise ValueError(f"unknown form kind: {form.kind!r}")
    return (FORM, kind, cons_list(encode_form(child) for child in form.children))


def decode_form(term) -> Form:
    if not (is_function(term) and len(term) == 3 and term[0] == FORM):
        raise MalformedResult(term, "expected form/2")

    kind, children_term = term[1], term[2]
    children = [decode_form(child) for child in list_items(children_term)]

    if kind in BOUNDARIES or kind == FOREST:
        return Form(kind, children)
    if is_function(kind) and len(kind) == 2 and kind[0] in ("atom", "var"):
        if children:
            raise MalformedResult(term, "leaves have no children")
        name = kind[1]
        if not isinstance(name, str):
            raise MalformedResult(term, "leaf name is not a string")
        return Form(ATOM if kind[0] == "atom" else VARIABLE, [], name=name)
    raise MalformedResult(term, f"unknown kind {kind!r}")


def format_term(term) -> str:
    """Prolog-style text for a term: form(round, [form(square, [])])."""
    if is_variable(term):
        return term.name
    if is_function(term):
        if term[0] == CONS:
            return "[" + ", ".join(format_term(item) for item in list_items(term)) + "]"
        args = ", ".join(format_term(arg) for arg in term[1:])
        return f"{term[0]}({args})"
    if term == NIL:
        return "[]"
    return str(term)


def goal_text(predicate: str, form: Form) -> str:
    return f"{predicate}({format_term(encode_form(form))}, Result)."


# ── Queries ─────────────────────────────────────────────────────────────────

def transform_all(predicate: str, form: Form, program: Program = AXIOMS,
                  limit: int = RESOURCE_LIMIT) -> list:
    """
    Every Result with predicate(form, Result) provable, in clause order.

    enfold always gives exactly two results; clarify gives none unless
    form is an inversion shell.
    """
    if not program.defines(predicate, 2):
        raise ValueError(f"program does not define {predicate}/2")
    result = Var("Result")
    answers = query(program, (predicate, encode_form(form), result), result, limit)
    return [decode_form(answer) for answer in answers]


def transform_one(predicate: str, form: Form, program: Program = AXIOMS,
                  limit: int = RESOURCE_LIMIT) -> Form:
    results = transform_all(predicate, form, program, limit)
    if not results:
        raise NoAnswer(goal_text(predicate, form))
    return results[0]
