"""
The bounded rewrite loop.

One step: collect every redex the system offers for the current tree,
throw away the ones the ordering ranks as growing the tree, and apply the
one whose result the ordering prefers. Ties go to the earliest pre-order
position, then to rule declaration order, which is the order the system
hands redexes over in.

The loop stops at a fixpoint (nothing applies) or after max_steps.
Running out of steps is not an error: the partially rewritten tree is
returned, so rule sets that are not confluent or not terminating are
tolerated.

The system is pluggable: anything with redexes(tree) yielding objects
that carry .path, .rule (with .name) and .result works here.
"""

from typing import Callable, Optional

from .canonical import CanonicalNode, tree_size
from .state import RewriteState


def choose_redex(tree: CanonicalNode, redexes, ordering):
    """The redex whose result the ordering prefers; None if none is acceptable."""
    best = None
    for redex in redexes:
        if ordering.greater_than(redex.result, tree):
            continue
        if best is None or ordering.greater_than(best.result, redex.result):
            best = redex
    return best


def rewrite_step(state: RewriteState, system, ordering, verbose: bool = False) -> RewriteState:
    """Apply one rewrite to state.tree, or halt the state at a fixpoint."""
    if state.halted:
        return state

    chosen = choose_redex(state.tree, system.redexes(state.tree), ordering)
    if chosen is None:
        state.halted = True
        state.halt_reason = "fixpoint"
        if verbose:
            print(f"  [fixpoint] after {state.step} step(s)")
        return state

    state.step += 1
    entry = {
        "step": state.step,
        "rule": chosen.rule.name,
        "path": tuple(chosen.path),
        "size_before": tree_size(state.tree),
        "size_after": tree_size(chosen.result),
    }
    state.history.append(entry)
    state.tree = chosen.result

    if verbose:
        where = ".".join(str(i) for i in chosen.path) or "root"
        print(f"--- Step {state.step}: {chosen.rule.name} at {where} "
              f"({entry['size_before']} -> {entry['size_after']} nodes)")
    return state


def run_rewrite(
    tree: CanonicalNode,
    system,
    ordering,
    max_steps: int,
    stop_fn: Optional[Callable] = None,
    verbose: bool = False,
) -> RewriteState:
    """
    Rewrite until a fixpoint, stop condition, or max_steps.

    Args:
        tree:      starting canonical tree
        system:    redex source, normally a TermRewriteSystem
        ordering:  ordering.greater_than(a, b) -> bool
        max_steps: step bound; hitting it halts with "step limit"
        stop_fn:   stop_fn(state) -> bool; halt early if True
        verbose:   print one line per step
    """
    state = RewriteState(tree=tree)
    for _ in range(max_steps):
        if stop_fn and stop_fn(state):
            state.halted = True
            state.halt_reason = "stop condition met"
            return state
        state = rewrite_step(state, system, ordering, verbose=verbose)
        if state.halted:
            return state

    # One more look: a run that lands on a fixpoint exactly at the bound
    # still reports it as a fixpoint.
    state.halted = True
    if choose_redex(state.tree, system.redexes(state.tree), ordering) is None:
        state.halt_reason = "fixpoint"
    else:
        state.halt_reason = "step limit"
    if verbose:
        print(f"  [{state.halt_reason}] after {state.step} step(s)")
    return state