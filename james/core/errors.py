"""
Error kinds raised by the core.

Every error is structural and local: it is raised where the problem is
detected and carries the offending context as attributes so a caller
(the CLI, a UI) can turn it into a message. Nothing in the core catches
these. A rewrite run that stops on its step bound is not an error.
"""


class JamesError(Exception):
    """Base class for every error raised by the core."""


# ── Paths ───────────────────────────────────────────────────────────────────

class PathError(JamesError):
    pass


class PathOutOfBounds(PathError):
    def __init__(self, path, depth: int):
        self.path = tuple(path)
        self.depth = depth
        shown = ".".join(str(i) for i in self.path)
        super().__init__(f"path {shown} is out of bounds at depth {depth}")


class EmptyPath(PathError):
    def __init__(self):
        super().__init__("path must include at least one index to address a node")


# ── Edits ───────────────────────────────────────────────────────────────────

class EditError(JamesError):
    pass


class NotAForest(EditError):
    def __init__(self, path, kind: str):
        self.path = tuple(path)
        self.kind = kind
        super().__init__(f"expected a forest at {list(self.path)}, found {kind}")


class UnknownSiblingId(EditError):
    def __init__(self, form_id):
        self.form_id = form_id
        super().__init__(f"no sibling with id {form_id!r} in the targeted forest")


class NonContiguousSelection(EditError):
    def __init__(self, indices):
        self.indices = tuple(indices)
        super().__init__(
            f"selected siblings {list(self.indices)} do not form a contiguous span"
        )


class MissingInsertionPoint(EditError):
    def __init__(self):
        super().__init__(
            "an insertion point is required when no siblings are selected"
        )


# ── Rules ───────────────────────────────────────────────────────────────────

class RuleMismatch(JamesError):
    def __init__(self, expected: str, received: str):
        self.expected = expected
        self.received = received
        super().__init__(f"rule mismatch: expected {expected}, received {received}")


class UnknownRule(JamesError):
    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"unknown rule {rule_id!r}")


# ── Search ──────────────────────────────────────────────────────────────────

class SearchError(JamesError):
    pass


class MalformedResult(SearchError):
    def __init__(self, term, reason: str):
        self.term = term
        super().__init__(f"search returned a malformed term ({reason}): {term!r}")


class NoAnswer(SearchError):
    def __init__(self, goal: str):
        self.goal = goal
        super().__init__(f"no answer for goal: {goal}")


class SearchLimitExceeded(SearchError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"search exceeded its limit of {limit} resolution steps")


# ── Encodings ───────────────────────────────────────────────────────────────

class MalformedTree(JamesError):
    def __init__(self, value: str, reason: str):
        self.value = value
        super().__init__(f"cannot decode canonical node {value!r}: {reason}")


class ParseError(JamesError):
    def __init__(self, message: str, position: int):
        self.position = position
        super().__init__(f"parse error at position {position}: {message}")
