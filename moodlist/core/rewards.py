"""Daily task streak and reward balance bookkeeping.

Plain functions over small immutable records; storage and sync of the
per-user state is left to the caller.
"""

from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Optional, Tuple

from .errors import InsufficientBalance

BASE_REWARD = 10
STREAK_BONUS_STEP = 5
STREAK_BONUS_CAP = 5


@dataclass(frozen=True)
class RewardState:
    balance: int = 0
    current_streak: int = 0
    last_completion_date: Optional[date] = None


@dataclass(frozen=True)
class StreakUpdate:
    current_streak: int
    bonus: int
    incremented: bool


@dataclass(frozen=True)
class TaskReward:
    base: int
    bonus: int

    @property
    def total(self) -> int:
        return self.base + self.bonus


@dataclass(frozen=True)
class TaskState:
    """
    Per-task check state.

    last_completion_date survives an uncheck, which is what stops a task from
    paying out twice on the same day.
    """

    completed: bool = False
    last_completion_date: Optional[date] = None


def streak_bonus(streak: int) -> int:
    return STREAK_BONUS_STEP * min(streak, STREAK_BONUS_CAP)


def calculate_streak_update(
    current_streak: int,
    last_completion_date: Optional[date],
    today: date,
    yesterday: Optional[date] = None,
) -> StreakUpdate:
    """
    Compute the streak after a completion on `today`.

    - already completed today : streak unchanged, no bonus
    - last completion yesterday: streak + 1, bonus 5 * min(streak, 5)
    - anything else            : streak restarts at 1, no bonus
    """
    if yesterday is None:
        yesterday = today - timedelta(days=1)

    if last_completion_date == today:
        return StreakUpdate(current_streak, 0, False)

    if last_completion_date == yesterday:
        streak = current_streak + 1
        return StreakUpdate(streak, streak_bonus(streak), True)

    return StreakUpdate(1, 0, False)


def complete_task(
    task: TaskState,
    state: RewardState,
    today: date,
    yesterday: Optional[date] = None,
) -> Tuple[TaskState, RewardState, TaskReward]:
    """
    Check a task on `today`.

    A task already completed earlier today (then unchecked) is checked again
    without any reward and without touching the streak.
    """
    checked = TaskState(completed=True, last_completion_date=today)
    if task.last_completion_date == today:
        return checked, state, TaskReward(base=0, bonus=0)

    update = calculate_streak_update(
        state.current_streak,
        state.last_completion_date,
        today,
        yesterday,
    )
    reward = TaskReward(base=BASE_REWARD, bonus=update.bonus)
    new_state = RewardState(
        balance=state.balance + reward.total,
        current_streak=update.current_streak,
        last_completion_date=today,
    )
    return checked, new_state, reward


def uncheck_task(task: TaskState) -> TaskState:
    # No refund; the completion date is kept.
    return replace(task, completed=False)


def toggle_task(
    task: TaskState,
    state: RewardState,
    today: date,
    yesterday: Optional[date] = None,
) -> Tuple[TaskState, RewardState, Optional[TaskReward]]:
    """
    Flip a task's checkbox.

    Only a task completed today can be unchecked; a task still marked done
    from an earlier day counts as a fresh completion. The reward is None when
    the toggle was an uncheck.
    """
    if task.completed and task.last_completion_date == today:
        return uncheck_task(task), state, None
    return complete_task(task, state, today, yesterday)


def redeem(state: RewardState, cost: int) -> RewardState:
    if cost < 0:
        raise ValueError("cost must be non-negative")
    if cost > state.balance:
        raise InsufficientBalance(state.balance, cost)
    return replace(state, balance=state.balance - cost)
