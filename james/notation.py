"""
Text notation for forms.

    ( ... )    round container
    [ ... ]    square container
    < ... >    angle container
    alpha      atom (letters, digits, underscore; not starting with a digit)
    $x         variable
    whitespace separates siblings

    parse("( [a b] ) c")   -> [round(square(atom a, atom b)), atom c]
    unparse([round()])     -> "()"

A forest node has no notation of its own; unparse splices its children.
"""

from .core.errors import ParseError
from .core.form import ANGLE, ATOM, FOREST, ROUND, SQUARE, VARIABLE, Form


OPENERS = {"(": ROUND, "[": SQUARE, "<": ANGLE}
CLOSERS = {ROUND: ")", SQUARE: "]", ANGLE: ">"}


def tokenize(text: str) -> list:
    """(kind, value, position) tokens; kind is "open", "close", "atom" or "var"."""
    tokens = []
    i = 0
    while i < len(text):
        char = text[i]
        if char.isspace():
            i += 1
            continue
        if char in OPENERS:
            tokens.append(("open", OPENERS[char], i))
            i += 1
            continue
        if char in ")]>":
            tokens.append(("close", char, i))
            i += 1
            continue
        if char == "$" or char.isalpha() or char == "_":
            start = i
            i += 1
            while i < len(text) and (text[i].isalnum() or text[i] == "_"):
                i += 1
            word = text[start:i]
            if word == "$":
                raise ParseError("variable needs a name after '$'", start)
            if word.startswith("$"):
                tokens.append(("var", word[1:], start))
            else:
                tokens.append(("atom", word, start))
            continue
        raise ParseError(f"unexpected character {char!r}", i)
    return tokens


def parse(text: str) -> list:
    """Parse a whole forest."""
    tokens = tokenize(text)
    forms, position = _parse_siblings(tokens, 0, closer=None)
    if position != len(tokens):
        raise ParseError(f"unexpected {tokens[position][1]!r}", tokens[position][2])
    return forms


def parse_form(text: str) -> Form:
    """Parse exactly one form."""
    forms = parse(text)
    if len(forms) != 1:
        raise ParseError(f"expected exactly one form, found {len(forms)}", 0)
    return forms[0]


def _parse_siblings(tokens, position, closer):
    forms = []
    while position < len(tokens):
        kind, value, at = tokens[position]
        if kind == "close":
            if closer is None or value != closer:
                raise ParseError(f"unexpected {value!r}", at)
            return forms, position
        if kind == "open":
            children, position = _parse_siblings(tokens, position + 1, CLOSERS[value])
            if position >= len(tokens):
                raise ParseError(f"missing {CLOSERS[value]!r}", at)
            forms.append(Form(value, children))
            position += 1
            continue
        if kind == "atom":
            forms.append(Form(ATOM, [], name=value))
        else:
            forms.append(Form(VARIABLE, [], name=value))
        position += 1
    return forms, position


def unparse(forms) -> str:
    """Text for a Form or a Forest. Inverse of parse up to whitespace."""
    if isinstance(forms, Form):
        return _unparse_one(forms)
    return " ".join(_unparse_one(form) for form in forms)


def _unparse_one(form: Form) -> str:
    if form.kind == ATOM:
        return form.name
    if form.kind == VARIABLE:
        return f"${form.name}"
    if form.kind == FOREST:
        return unparse(form.children)
    opener = next(o for o, b in OPENERS.items() if b == form.kind)
    return opener + unparse(form.children) + CLOSERS[form.kind]
