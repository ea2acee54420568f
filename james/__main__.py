"""
CLI entry point. Run as: python -m james <command> ...

    python -m james rewrite "( [ ( [ alpha ] ) ] )"
    python -m james matches "() []" --rule axiom.clarify
    python -m james apply "()" --rule axiom.enfold --index 0 --boundary square
    python -m james search clarify "( [ a ] )"
    python -m james lesson enfold
"""

import argparse
import json
import sys

from .core.canonical import flatten_forests, from_canonical, to_readable
from .core.errors import JamesError
from .core.form import BOUNDARIES
from .domains import LESSONS, get_lesson
from .inference.axioms import PREDICATES, transform_all
from .inference.rewrite import MAX_REWRITE_STEPS, rewrite_run
from .notation import parse, parse_form, unparse
from .rules.axioms import RULES, get_rule
from .rules.base import apply_rule
from .session import Session
from .visualization import print_forest, print_matches, print_rewrite_history


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="james", description="Boundary algebra rewriting")
    parser.add_argument("--quiet", action="store_true", help="Less output")
    commands = parser.add_subparsers(dest="command", required=True)

    rewrite = commands.add_parser("rewrite", help="Clarify a forest toward its normal form")
    rewrite.add_argument("text")
    rewrite.add_argument("--steps", type=int, default=MAX_REWRITE_STEPS, help="Max rewrite steps")
    rewrite.add_argument("--json", action="store_true", help="Print the readable projection")

    matches = commands.add_parser("matches", help="List where rules apply")
    matches.add_argument("text")
    matches.add_argument("--rule", choices=sorted(RULES), default=None)

    apply = commands.add_parser("apply", help="Apply one rule match")
    apply.add_argument("text")
    apply.add_argument("--rule", choices=sorted(RULES), required=True)
    apply.add_argument("--index", type=int, default=0, help="Which match to apply")
    apply.add_argument("--boundary", choices=BOUNDARIES, default=None)
    apply.add_argument("--strategy", choices=("direct", "search"), default="direct")

    search = commands.add_parser("search", help="All one-step axiom rewrites of a form")
    search.add_argument("predicate", choices=PREDICATES)
    search.add_argument("text")

    lesson = commands.add_parser("lesson", help="Play a lesson greedily to its goal")
    lesson.add_argument("name", nargs="?", default="enfold", choices=sorted(LESSONS))
    lesson.add_argument("--list", action="store_true", help="List lessons and exit")
    lesson.add_argument("--steps", type=int, default=10, help="Max steps")
    return parser


def cmd_rewrite(args) -> int:
    forms = parse(args.text)
    state = rewrite_run(forms, max_steps=args.steps, verbose=not args.quiet)
    result = from_canonical(flatten_forests(state.tree))
    if not args.quiet:
        print_rewrite_history(state)
    if args.json:
        print(json.dumps(to_readable(flatten_forests(state.tree))))
    else:
        print(unparse(result))
    return 0


def cmd_matches(args) -> int:
    forms = parse(args.text)
    rule_ids = [args.rule] if args.rule else sorted(RULES)
    for rule_id in rule_ids:
        print(f"{rule_id}:")
        print_matches(RULES[rule_id].matches(forms))
    return 0


def cmd_apply(args) -> int:
    forms = parse(args.text)
    rule = get_rule(args.rule, boundary=args.boundary, strategy=args.strategy)
    found = rule.matches(forms)
    if not 0 <= args.index < len(found):
        print(f"No match {args.index}: {args.rule} has {len(found)} match(es)", file=sys.stderr)
        return 1
    result = apply_rule(forms, rule, found[args.index])
    if not args.quiet:
        print_forest(forms, "Before")
        print_forest(result, "After")
    print(unparse(result))
    return 0


def cmd_search(args) -> int:
    results = transform_all(args.predicate, parse_form(args.text))
    if not results:
        print("(no results)")
    for result in results:
        print(unparse(result))
    return 0


def cmd_lesson(args) -> int:
    if args.list:
        for name, entry in sorted(LESSONS.items()):
            print(f"  {name:10s} {entry['description']}")
        return 0

    lesson = get_lesson(args.name)
    session = Session.from_lesson(lesson)
    print(f"{lesson.title}: {lesson.goal_summary}")
    if not args.quiet:
        for hint in lesson.hints:
            print(f"  hint: {hint}")
        print_forest(session.forms, "Start")

    for _ in range(args.steps):
        if session.is_goal_reached(lesson.goal_forms):
            break
        available = session.available_matches()
        if not available:
            break
        session.apply(available[0])
        if not args.quiet:
            print(f"  Step {session.step}: {available[0]}")

    reached = session.is_goal_reached(lesson.goal_forms)
    print(unparse(session.forms))
    print("Goal reached." if reached else "Goal not reached.")
    return 0 if reached else 1


COMMANDS = {
    "rewrite": cmd_rewrite,
    "matches": cmd_matches,
    "apply": cmd_apply,
    "search": cmd_search,
    "lesson": cmd_lesson,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return COMMANDS[args.command](args)
    except JamesError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
