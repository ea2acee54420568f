"""
Lesson registry.

Each entry builds a fresh Lesson, so sessions never share forests:
    make_lesson:  () -> Lesson
    description:  str
"""

from .lessons import Lesson, make_intro_lesson, make_clarify_lesson


LESSONS = {
    "enfold": {
        "make_lesson": make_intro_lesson,
        "description": "Enfold the unit into a round-square shell",
    },
    "clarify": {
        "make_lesson": make_clarify_lesson,
        "description": "Clarify two nested shells down to an atom",
    },
}


def get_lesson(name: str) -> Lesson:
    if name not in LESSONS:
        raise KeyError(f"unknown lesson {name!r}; choose from {sorted(LESSONS)}")
    return LESSONS[name]["make_lesson"]()


__all__ = ["Lesson", "LESSONS", "get_lesson", "make_intro_lesson", "make_clarify_lesson"]
