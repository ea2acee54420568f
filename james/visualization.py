"""
Plain-text reporting: forests, matches, rewrite runs.
"""

from .core.state import RewriteState
from .core.structure import format_path
from .notation import unparse


def print_forest(forms, title: str = "Forest"):
    print(f"\n{'='*60}")
    print(f"{title}: {unparse(forms) or '(void)'}")
    print(f"{'='*60}")


def print_matches(matches):
    if not matches:
        print("  (no matches)")
        return
    for i, match in enumerate(matches):
        print(f"  [{i}] {match.rule_id} at {format_path(match.path)}: {match.description}")


def print_rewrite_history(state: RewriteState):
    print(f"\n{'='*60}")
    print("Rewrite history:")
    print(f"{'='*60}")
    if not state.history:
        print("  (no rewrites)")
    for entry in state.history:
        where = format_path(entry["path"])
        print(f"  Step {entry['step']}: {entry['rule']} at {where} "
              f"({entry['size_before']} -> {entry['size_after']} nodes)")
    print(f"  Halted: {state.halt_reason or 'no'}")
