"""
RewriteState: the full record of one bounded rewrite run.

    tree:        the current canonical tree
    step:        how many rewrites have been applied
    halted:      no further step will be taken
    halt_reason: "fixpoint" or "step limit" (neither is an error)
    history:     one entry per applied rewrite
"""

from dataclasses import dataclass, field

from .canonical import CanonicalNode, to_readable, prepare_for_display


@dataclass
class RewriteState:
    tree: CanonicalNode
    step: int = 0
    halted: bool = False
    halt_reason: str = ""
    history: list = field(default_factory=list)

    @property
    def reached_fixpoint(self) -> bool:
        return self.halted and self.halt_reason == "fixpoint"

    def to_dict(self):
        return {
            "tree": to_readable(prepare_for_display(self.tree)),
            "step": self.step,
            "halted": self.halted,
            "halt_reason": self.halt_reason,
            "history": [
                {"step": entry["step"], "rule": entry["rule"], "path": list(entry["path"]),
                 "size_before": entry["size_before"], "size_after": entry["size_after"]}
                for entry in self.history
            ],
        }
