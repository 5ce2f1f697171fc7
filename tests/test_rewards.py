from datetime import date

import pytest

from moodlist.core import InsufficientBalance
from moodlist.core.rewards import (
    BASE_REWARD,
    RewardState,
    TaskState,
    calculate_streak_update,
    complete_task,
    redeem,
    streak_bonus,
    toggle_task,
    uncheck_task,
)

TODAY = date(2025, 5, 10)
YESTERDAY = date(2025, 5, 9)


def test_streak_bonus_is_capped() -> None:
    assert [streak_bonus(s) for s in (1, 2, 5, 6, 30)] == [5, 10, 25, 25, 25]


def test_completion_after_yesterday_extends_streak_with_bonus() -> None:
    update = calculate_streak_update(3, YESTERDAY, TODAY)

    assert update.current_streak == 4
    assert update.bonus == 20
    assert update.incremented is True


def test_second_completion_same_day_changes_nothing() -> None:
    update = calculate_streak_update(3, TODAY, TODAY)

    assert update.current_streak == 3
    assert update.bonus == 0
    assert update.incremented is False


@pytest.mark.parametrize("last", [None, date(2025, 5, 1)])
def test_missed_day_or_new_user_restarts_streak(last) -> None:
    update = calculate_streak_update(7, last, TODAY)

    assert update.current_streak == 1
    assert update.bonus == 0


def test_complete_task_credits_base_plus_bonus() -> None:
    state = RewardState(balance=40, current_streak=1, last_completion_date=YESTERDAY)

    task, new_state, reward = complete_task(TaskState(), state, TODAY)

    assert task == TaskState(completed=True, last_completion_date=TODAY)
    assert reward.base == BASE_REWARD
    assert reward.bonus == 10
    assert new_state.balance == 40 + BASE_REWARD + 10
    assert new_state.current_streak == 2
    assert new_state.last_completion_date == TODAY


def test_uncheck_keeps_completion_date_and_balance() -> None:
    task = TaskState(completed=True, last_completion_date=TODAY)

    assert uncheck_task(task) == TaskState(completed=False, last_completion_date=TODAY)


def test_check_uncheck_recheck_same_day_pays_once() -> None:
    task, state = TaskState(), RewardState()

    task, state, first = toggle_task(task, state, TODAY)
    task, state, unchecked = toggle_task(task, state, TODAY)
    task, state, second = toggle_task(task, state, TODAY)

    assert first.total == BASE_REWARD
    assert unchecked is None
    assert second.total == 0
    assert task.completed is True
    assert state.balance == BASE_REWARD
    assert state.current_streak == 1


def test_task_done_on_earlier_day_counts_as_new_completion() -> None:
    task = TaskState(completed=True, last_completion_date=YESTERDAY)
    state = RewardState(balance=0, current_streak=1, last_completion_date=YESTERDAY)

    task, state, reward = toggle_task(task, state, TODAY)

    assert reward.total == BASE_REWARD + 10
    assert task.last_completion_date == TODAY
    assert state.current_streak == 2


def test_redeem_spends_balance() -> None:
    assert redeem(RewardState(balance=120), 100).balance == 20

    with pytest.raises(InsufficientBalance):
        redeem(RewardState(balance=49), 50)
