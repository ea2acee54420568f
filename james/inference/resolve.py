"""
Backward chaining over Horn clauses.

A Program is an ordered list of HornClause(head, body). Facts have an
empty body. Solving a goal list is plain SLD resolution: take the first
goal, try every clause whose head unifies with it in declaration order,
replace the goal by that clause's body, and recurse. Every clause use is
standardized apart first so its variables cannot capture the caller's.

Answers come out lazily as substitutions, in the order a depth-first
search finds them. A search that needs more than `limit` resolution
steps raises SearchLimitExceeded instead of running on.

This is deliberately not a general logic runtime: no cut, no negation,
no builtins. It is enough for the axiom facts and for any extra Horn
clauses a caller wants to plug in.
"""

from dataclasses import dataclass, field

from ..core.errors import SearchLimitExceeded
from ..core.unification import apply_substitution, standardize_apart, unify_terms


RESOURCE_LIMIT = 10_000


@dataclass(frozen=True)
class HornClause:
    head: tuple
    body: tuple = ()
    label: str = ""

    @property
    def is_fact(self) -> bool:
        return not self.body

    @property
    def indicator(self) -> str:
        return f"{self.head[0]}/{len(self.head) - 1}"


@dataclass(frozen=True)
class Program:
    clauses: tuple = field(default_factory=tuple)

    def extend(self, *clauses: HornClause) -> "Program":
        """A new program with extra clauses appended."""
        return Program(self.clauses + tuple(clauses))

    def defines(self, functor: str, arity: int) -> bool:
        return any(c.head[0] == functor and len(c.head) - 1 == arity for c in self.clauses)


class _Budget:
    def __init__(self, limit: int):
        self.limit = limit
        self.used = 0

    def spend(self):
        self.used += 1
        if self.used > self.limit:
            raise SearchLimitExceeded(self.limit)


def solve(program: Program, goals, limit: int = RESOURCE_LIMIT, sub=None):
    """
    Yield every substitution that proves all goals, depth-first.

    Args:
        program: the clause database
        goals:   a sequence of goal terms, proved left to right
        limit:   maximum number of resolution steps over the whole search
        sub:     starting substitution
    """
    budget = _Budget(limit)
    renamings = 0

    # Each frame: goals still to prove, substitution so far, and the next
    # clause to try for the first goal. Popping the newest frame first
    # keeps the search depth-first without recursing.
    stack = [(tuple(goals), {} if sub is None else dict(sub), 0)]
    while stack:
        pending, current, start = stack.pop()
        if not pending:
            yield current
            continue

        goal, rest = pending[0], pending[1:]
        for position in range(start, len(program.clauses)):
            clause = program.clauses[position]
            budget.spend()
            renamings += 1
            renamed = standardize_apart((clause.head,) + clause.body, f"_{renamings}")
            head, body = renamed[0], renamed[1:]

            new_sub = unify_terms(goal, head, current)
            if new_sub is None:
                continue
            stack.append((pending, current, position + 1))
            stack.append((body + rest, new_sub, 0))
            break


def query(program: Program, goal, var, limit: int = RESOURCE_LIMIT) -> list:
    """All bindings of var across every proof of goal, fully substituted."""
    return [apply_substitution(answer, var) for answer in solve(program, (goal,), limit)]
