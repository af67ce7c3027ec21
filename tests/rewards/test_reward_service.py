import threading
from datetime import datetime

import pytest

from conftest import END_OF_JANUARY, seed_qualifying_month
from workers_management.core.enums import RewardStatus, RewardType
from workers_management.core.exceptions import WorkerNotFound


def test_qualifying_worker_gets_one_reward_and_one_notification(reward_service, attendance, habits, rewards, notifier):
    seed_qualifying_month(attendance, habits, 1)

    result = reward_service.check_and_process_reward(1, now=END_OF_JANUARY)

    assert result.qualifies is True
    assert result.period == "2024-01"
    assert result.reward is not None
    assert result.reward.reward_type == RewardType.GIFT_VOUCHER
    assert result.reward.status == RewardStatus.PENDING
    assert len(rewards.rows) == 1
    assert len(notifier.attempts) == 1


def test_one_fasting_day_short_means_no_reward(reward_service, attendance, habits, rewards, notifier):
    seed_qualifying_month(attendance, habits, 1, fasting=7)

    result = reward_service.check_and_process_reward(1, now=END_OF_JANUARY)

    assert result.qualifies is False
    assert result.shortfalls == {"fasting": 1}
    assert result.reward is None
    assert rewards.rows == []
    assert notifier.attempts == []


def test_second_run_in_same_month_does_not_issue_again(reward_service, attendance, habits, rewards, notifier):
    seed_qualifying_month(attendance, habits, 1)

    first = reward_service.check_and_process_reward(1, now=END_OF_JANUARY)
    second = reward_service.check_and_process_reward(1, now=END_OF_JANUARY)

    assert second.reward == first.reward
    assert first.newly_issued is True
    assert second.newly_issued is False
    assert len(rewards.rows) == 1
    assert len(notifier.attempts) == 1


def test_evaluate_is_read_only_and_repeatable(reward_service, attendance, habits, rewards, notifier):
    seed_qualifying_month(attendance, habits, 1)

    first = reward_service.evaluate(1, now=END_OF_JANUARY)
    second = reward_service.evaluate(1, now=END_OF_JANUARY)

    assert first == second
    assert first.qualifies is True
    assert rewards.rows == []
    assert notifier.attempts == []


def test_events_from_other_months_do_not_count(reward_service, attendance, habits):
    seed_qualifying_month(attendance, habits, 1)

    result = reward_service.evaluate(1, now=datetime(2024, 2, 15, 12, 0))

    assert result.period == "2024-02"
    assert result.counts.total_attendance == 0
    assert result.qualifies is False


def test_evaluate_unknown_worker(reward_service):
    with pytest.raises(WorkerNotFound):
        reward_service.evaluate(7, now=END_OF_JANUARY)


def test_rewards_listing_messages(reward_service, attendance, habits):
    assert reward_service.get_rewards_for_worker(1).message == "The worker has no rewards at this time."

    seed_qualifying_month(attendance, habits, 1)
    reward_service.check_and_process_reward(1, now=END_OF_JANUARY)
    listing = reward_service.get_rewards_for_worker(1)

    assert listing.message == "Rewards retrieved successfully."
    assert [r.period for r in listing.rewards] == ["2024-01"]


def test_cancelled_evaluation_does_not_issue(reward_service, attendance, habits, rewards, notifier):
    seed_qualifying_month(attendance, habits, 1)
    cancelled = threading.Event()
    cancelled.set()

    result = reward_service.check_and_process_reward(1, now=END_OF_JANUARY, cancelled=cancelled)

    assert result.qualifies is True
    assert result.reward is None
    assert result.newly_issued is False
    assert rewards.rows == []
    assert notifier.attempts == []
