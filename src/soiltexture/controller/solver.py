"""
Composition Constraint Solver
=============================
Keeps the three fractions on the simplex while some of them are pinned.

All functions are pure: they take the current composition and lock set and
return a new composition, or ``None`` when the edit must be ignored. The
reducer in `soiltexture.controller.reducer` decides what "ignored" means for
each event.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from soiltexture.config import MAX_LOCKS
from soiltexture.model.composition import Axis, Composition, LockState

logger = logging.getLogger(__name__)


def _check_locks(locked: Iterable[Axis]) -> LockState:
    locks = frozenset(locked)
    if len(locks) > MAX_LOCKS:
        raise ValueError(f"At most {MAX_LOCKS} axes can be locked, got {len(locks)}.")
    return locks


def solve(composition: Composition, locked: Iterable[Axis]) -> Composition:
    """
    Complete a composition so it sums to 1, keeping the locked axes.

    - 2 locks: the free axis becomes max(0, 1 - sum of the locked values).
    - 1 or 0 locks: the free axes share 1 - sum(locked) in proportion to
      their current values (negatives count as 0). When all free values are
      0 they share it equally.

    Args:
        composition: Values of the locked axes are taken as given.
        locked: Axes to keep (at most two).

    Returns:
        A composition whose locked components equal the input's.

    Raises:
        ValueError: If more than two axes are locked.
    """
    locks = _check_locks(locked)
    free = [axis for axis in Axis if axis not in locks]
    values = list(composition)

    pinned = sum(values[axis] for axis in locks)
    remaining = max(0.0, 1.0 - pinned)

    if len(free) == 1:
        values[free[0]] = remaining
        return Composition.from_sequence(values)

    weights = [max(0.0, values[axis]) for axis in free]
    total = sum(weights)
    for axis, weight in zip(free, weights):
        values[axis] = remaining * weight / total if total > 0.0 else remaining / len(free)
    return Composition.from_sequence(values)


def apply_locks(raw: Composition, current: Composition, locked: Iterable[Axis]) -> Optional[Composition]:
    """
    Reconcile a pointer reading with the lock state.

    Args:
        raw: Clamped composition read from the pointer position.
        current: The committed composition (source of the locked values).
        locked: The locked axes.

    Returns:
        The composition to commit, or None when the pointer event must be
        ignored (two locks, or both free readings at or below zero).
    """
    locks = _check_locks(locked)
    if not locks:
        return raw
    if len(locks) == MAX_LOCKS:
        return None

    (locked_axis,) = locks
    free = locked_axis.others()
    if all(raw[axis] <= 0.0 for axis in free):
        logger.debug("Pointer reading leaves no room for the free axes; ignored.")
        return None

    pinned = raw.with_value(locked_axis, current[locked_axis])
    return solve(pinned, locks)


def redistribute(
    current: Composition,
    axis: Axis,
    percent: float,
    locked: Iterable[Axis],
) -> Optional[Composition]:
    """
    Set one axis to `percent` and rebalance the other two.

    With no other lock the two others keep their ratio (equal split if both
    are 0). With one other lock the locked value is kept and the last free
    axis takes the rest. A request that would push the total above 1 is
    capped at 100 - locked, so the free axis floors at 0.

    Returns:
        The new composition, or None when `axis` is locked or fully
        determined by two other locks.
    """
    locks = _check_locks(locked)
    if axis in locks:
        return None

    other_locks = [other for other in axis.others() if other in locks]
    if len(other_locks) == MAX_LOCKS:
        return None

    value = min(1.0, max(0.0, percent / 100.0))
    if other_locks:
        value = min(value, max(0.0, 1.0 - current[other_locks[0]]))

    return solve(current.with_value(axis, value), locks | {axis})
