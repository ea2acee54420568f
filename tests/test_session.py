"""
Tests for lessons and editing sessions.

Core claims:
    - a session never edits a forest in place; undo restores the exact
      previous snapshot
    - rules outside the lesson's allowed set are refused
    - both built-in lessons can be solved with their own rules
"""

import pytest

from james.core.errors import UnknownRule
from james.core.form import IdGenerator, atom, round, square
from james.domains import LESSONS, get_lesson
from james.domains.lessons import make_intro_lesson
from james.rules import CLARIFY_RULE_ID, ENFOLD_RULE_ID, END, EnfoldSelection, Match
from james.session import Session


class TestLessons:
    def test_registry(self):
        assert set(LESSONS) == {"enfold", "clarify"}

    def test_intro_lesson(self):
        lesson = get_lesson("enfold")
        assert lesson.id == "lesson.intro.enfold"
        assert lesson.title == "Enfold the Unit"
        assert lesson.initial_forms == [round()]
        assert lesson.goal_forms == [round(square(round()))]
        assert set(lesson.allowed_rule_ids) == {ENFOLD_RULE_ID, CLARIFY_RULE_ID}
        assert lesson.hints

    def test_fresh_lesson_each_time(self):
        assert get_lesson("enfold").initial_forms is not get_lesson("enfold").initial_forms

    def test_unknown_lesson(self):
        with pytest.raises(KeyError):
            get_lesson("pervade")


class TestSession:
    def test_every_node_gets_an_id(self):
        session = Session(forms=[round(atom("a")), square()])
        assert [f.id for f in session.forms] == ["f2", "f3"]
        assert session.forms[0].children[0].id == "f1"

    def test_from_lesson_stamps_ids(self):
        session = Session.from_lesson(make_intro_lesson())
        assert session.forms[0].id == "f1"
        assert session.allowed_rule_ids == (ENFOLD_RULE_ID, CLARIFY_RULE_ID)

    def test_apply_enfold_reaches_goal(self):
        lesson = make_intro_lesson()
        session = Session.from_lesson(lesson)
        session.apply(Match(ENFOLD_RULE_ID, (0,)))
        assert session.is_goal_reached(lesson.goal_forms)
        assert session.step == 1
        assert session.history == [{"rule": ENFOLD_RULE_ID, "path": [0], "step": 1}]

    def test_new_nodes_get_ids(self):
        session = Session.from_lesson(make_intro_lesson())
        session.apply(Match(ENFOLD_RULE_ID, (0,)))
        outer = session.forms[0]
        assert outer.id is not None
        assert outer.children[0].id is not None
        assert outer.children[0].children[0].id == "f1"

    def test_apply_with_boundary(self):
        session = Session(forms=[atom("a")])
        session.apply(Match(ENFOLD_RULE_ID, (0,)), boundary="square")
        assert session.forms == [square(round(atom("a")))]

    def test_apply_with_search(self):
        session = Session(forms=[round(square(atom("a")))])
        session.apply(Match(CLARIFY_RULE_ID, (0,)), strategy="search")
        assert session.forms == [atom("a")]
        assert session.forms[0].id == "f1"

    def test_enfold_by_search_keeps_ids(self):
        session = Session(forms=[atom("a")])
        session.apply(Match(ENFOLD_RULE_ID, (0,)), strategy="search")
        assert session.forms == [round(square(atom("a")))]
        assert session.forms[0].children[0].children[0].id == "f1"

    def test_undo(self):
        session = Session.from_lesson(make_intro_lesson())
        before = session.forms
        session.apply(Match(ENFOLD_RULE_ID, (0,)))
        assert session.undo()
        assert session.forms is before
        assert session.step == 0

    def test_undo_with_nothing_to_undo(self):
        assert not Session(forms=[round()]).undo()

    def test_snapshots_are_not_edited(self):
        session = Session.from_lesson(make_intro_lesson())
        before = session.forms
        session.apply(Match(ENFOLD_RULE_ID, (0,)))
        assert before == [round()]

    def test_disallowed_rule(self):
        session = Session.from_lesson(get_lesson("clarify"))
        with pytest.raises(UnknownRule):
            session.apply(Match(ENFOLD_RULE_ID, (0,)))

    def test_unknown_rule(self):
        with pytest.raises(UnknownRule):
            Session(forms=[round()]).apply(Match("axiom.pervade", (0,)))

    def test_available_matches_respect_allowed_rules(self):
        session = Session.from_lesson(get_lesson("clarify"))
        assert {m.rule_id for m in session.available_matches()} == {CLARIFY_RULE_ID}
        assert [m.path for m in session.available_matches()] == [(0,), (0, 0), (0, 0, 0)]

    def test_enfold_span(self):
        session = Session(forms=[round(), round(), round()])
        ids = [f.id for f in session.forms]
        session.enfold_span(EnfoldSelection((), tuple(ids)))
        assert session.forms == [round(square(round(), round(), round()))]
        assert session.history[-1]["rule"] == "command.enfold"

    def test_enfold_span_on_rule_output(self):
        session = Session(forms=[atom("a"), atom("b")])
        session.apply(Match(ENFOLD_RULE_ID, (0,)))
        shell_id = session.forms[0].id
        session.enfold_span(EnfoldSelection((), (shell_id,), boundary="square"))
        assert session.forms == [square(round(round(square(atom("a"))))), atom("b")]

    def test_insert_at_end(self):
        session = Session(forms=[atom("a")], ids=IdGenerator(prefix="n"))
        session.enfold_span(EnfoldSelection((), insert_before_id=END))
        assert session.forms == [atom("a"), round(square())]
        assert session.forms[1].id.startswith("n")

    def test_to_dict(self):
        session = Session.from_lesson(make_intro_lesson())
        session.apply(Match(ENFOLD_RULE_ID, (0,)))
        assert session.to_dict() == {
            "forms": [{"boundary": "round", "children": [
                {"boundary": "square", "children": [{"boundary": "round", "children": []}]},
            ]}],
            "step": 1,
            "history": [{"rule": ENFOLD_RULE_ID, "path": [0], "step": 1}],
        }


class TestSolvingLessons:
    @pytest.mark.parametrize("name", sorted(LESSONS))
    def test_greedy_play_reaches_goal(self, name):
        lesson = get_lesson(name)
        session = Session.from_lesson(lesson)
        for _ in range(10):
            if session.is_goal_reached(lesson.goal_forms):
                break
            session.apply(session.available_matches()[0])
        assert session.is_goal_reached(lesson.goal_forms)
