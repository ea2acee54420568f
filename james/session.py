"""
An editing session over one forest.

The session is the only stateful thing here, and all it holds is a
sequence of immutable snapshots: every rule application or span-enfold
produces a new forest via the pure core and pushes it. undo() pops.
Nodes a rule creates get ids from the session's generator as they
appear, so any sibling can be selected for a span-enfold later.
"""

from dataclasses import dataclass, field
from typing import Optional

from .core.canonical import forest_to_readable
from .core.errors import UnknownRule
from .core.form import IdGenerator
from .core.structure import clone_forest, ensure_ids
from .rules.axioms import RULES, get_rule
from .rules.base import Match, apply_rule, is_goal_reached
from .rules.commands import EnfoldSelection, enfold_selection


@dataclass
class Session:
    forms: list
    allowed_rule_ids: Optional[tuple] = None
    ids: IdGenerator = field(default_factory=IdGenerator)
    history: list = field(default_factory=list)
    snapshots: list = field(default_factory=list)

    def __post_init__(self):
        self.forms = ensure_ids(self.forms, self.ids)

    @classmethod
    def from_lesson(cls, lesson, ids: Optional[IdGenerator] = None) -> "Session":
        ids = ids or IdGenerator()
        return cls(
            forms=clone_forest(lesson.initial_forms, ids),
            allowed_rule_ids=tuple(lesson.allowed_rule_ids),
            ids=ids,
        )

    @property
    def step(self) -> int:
        return len(self.history)

    def _check_allowed(self, rule_id: str):
        if rule_id not in RULES:
            raise UnknownRule(rule_id)
        if self.allowed_rule_ids is not None and rule_id not in self.allowed_rule_ids:
            raise UnknownRule(rule_id)

    def available_matches(self) -> list:
        rule_ids = self.allowed_rule_ids if self.allowed_rule_ids is not None else tuple(RULES)
        found = []
        for rule_id in rule_ids:
            found.extend(RULES[rule_id].matches(self.forms))
        return found

    def apply(self, match: Match, boundary: str = None, strategy: str = "direct") -> list:
        self._check_allowed(match.rule_id)
        rule = get_rule(match.rule_id, boundary=boundary, strategy=strategy)
        result = apply_rule(self.forms, rule, match)
        self._push(result, {"rule": match.rule_id, "path": list(match.path)})
        return self.forms

    def enfold_span(self, selection: EnfoldSelection) -> list:
        result = enfold_selection(self.forms, selection, self.ids)
        self._push(result, {"rule": "command.enfold", "path": list(selection.path)})
        return self.forms

    def _push(self, result, entry):
        self.snapshots.append(self.forms)
        self.forms = ensure_ids(result, self.ids)
        entry["step"] = len(self.history) + 1
        self.history.append(entry)

    def undo(self) -> bool:
        if not self.snapshots:
            return False
        self.forms = self.snapshots.pop()
        self.history.pop()
        return True

    def is_goal_reached(self, goal) -> bool:
        return is_goal_reached(self.forms, goal)

    def to_dict(self):
        return {
            "forms": forest_to_readable(self.forms),
            "step": self.step,
            "history": list(self.history),
        }
