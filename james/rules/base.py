"""
The Rule contract and the helpers that drive it.

A Rule enumerates *every* place it can apply in a forest (a caller or a
UI picks one) and applies itself to a chosen Match. apply() is total for
a well-formed match and never touches the caller's forest: apply_rule()
hands each rule a private deep copy.
"""

from dataclasses import dataclass

from ..core.errors import RuleMismatch
from ..core.structure import clone_forest, forests_equal, format_path, visit


@dataclass(frozen=True)
class Match:
    rule_id: str
    path: tuple
    description: str = ""

    def __str__(self):
        return self.description or f"{self.rule_id} at {format_path(self.path)}"


class Rule:
    """Base class. Subclasses set id/name/description and implement both methods."""

    id = ""
    name = ""
    description = ""

    def matches(self, forms) -> list:
        raise NotImplementedError

    def apply(self, forms, match: Match) -> list:
        raise NotImplementedError

    def make_match(self, path, what: str = "") -> Match:
        where = format_path(path)
        text = f"{self.name} {what} at {where}" if what else f"{self.name} at {where}"
        return Match(rule_id=self.id, path=tuple(path), description=text)

    def __repr__(self):
        return f"{type(self).__name__}({self.id!r})"


def enumerate_matches(rule: Rule, forms) -> list:
    return rule.matches(forms)


def apply_rule(forms, rule: Rule, match: Match) -> list:
    """Apply rule at match on a private copy of forms. RuleMismatch if the match is not rule's."""
    if match.rule_id != rule.id:
        raise RuleMismatch(rule.id, match.rule_id)
    working_copy = clone_forest(forms)
    return rule.apply(working_copy, match)


def find_all_nodes(forms) -> list:
    return list(visit(forms))


def is_goal_reached(current, goal) -> bool:
    return forests_equal(current, goal)
