"""
Built-in lessons.

A lesson is a starting forest, a goal forest, and the rules a learner may
use to get from one to the other. Reaching the goal is checked
structurally, so identity tokens never matter.
"""

from dataclasses import dataclass, field

from ..core.form import round, square, atom
from ..rules.axioms import CLARIFY_RULE_ID, ENFOLD_RULE_ID


@dataclass
class Lesson:
    id: str
    title: str
    description: str
    goal_summary: str
    initial_forms: list
    goal_forms: list
    allowed_rule_ids: tuple = (ENFOLD_RULE_ID, CLARIFY_RULE_ID)
    hints: list = field(default_factory=list)


def make_intro_lesson() -> Lesson:
    return Lesson(
        id="lesson.intro.enfold",
        title="Enfold the Unit",
        description=(
            "Practice the inversion axiom by wrapping the unit form with a "
            "round container holding a square frame."
        ),
        goal_summary="Transform a single round unit into an enfolded round-square pair.",
        initial_forms=[round()],
        goal_forms=[round(square(round()))],
        hints=[
            "Select the lone round form to see where Enfold can apply.",
            "Enfold introduces a square boundary inside a round one.",
            "If you overshoot, use Clarify to reverse the step.",
        ],
    )


def make_clarify_lesson() -> Lesson:
    return Lesson(
        id="lesson.intro.clarify",
        title="Clarify the Shell",
        description=(
            "Two nested inversion shells hide an atom. Remove them one at a "
            "time until only the atom is left."
        ),
        goal_summary="Reduce ( [ ( [ alpha ] ) ] ) to alpha.",
        initial_forms=[round(square(round(square(atom("alpha")))))],
        goal_forms=[atom("alpha")],
        allowed_rule_ids=(CLARIFY_RULE_ID,),
        hints=[
            "Clarify applies wherever a round form holds exactly one square form.",
            "Either the outer or the inner shell can go first.",
        ],
    )
