"""
Unit tests for alert deduplication.

Tests cover:
- Token-overlap similarity normalized by the shorter message
- Suppression by a similar open alert
- Suppression by a similar alert resolved within the last hour
- No suppression across metrics or directions
"""

from datetime import datetime, timedelta, timezone

import pytest

from hivewatch.schemas import AlertOut
from hivewatch.services.dedup import (
    is_similar,
    message_similarity,
    resolved_within_window,
    should_create,
    suppression_reason,
)
from hivewatch.services.evaluator import AlertCondition, Direction, MetricType, Severity

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def alert(message, metric_type="temperature", resolved_at=None, alert_id=1):
    return AlertOut(
        id=alert_id,
        user_id="user-1",
        hive_id="H1",
        metric_type=metric_type,
        message=message,
        severity="high",
        created_at=NOW - timedelta(hours=3),
        resolved_at=resolved_at,
    )


@pytest.fixture
def high_temperature():
    return AlertCondition(
        hive_id="H1",
        metric=MetricType.TEMPERATURE,
        message="Temperature is too high (37.9°C)",
        severity=Severity.HIGH,
        direction=Direction.ABOVE_MAX,
    )


class TestMessageSimilarity:
    def test_same_condition_different_value(self):
        score = message_similarity("Temperature is too high (38.2°C)", "Temperature is too high (37.9°C)")
        assert score == pytest.approx(0.8)

    def test_case_insensitive(self):
        assert message_similarity("TEMPERATURE IS TOO HIGH", "temperature is too high") == 1.0

    def test_normalized_by_shorter_message(self):
        # all three tokens of the short message appear in the long one
        assert message_similarity("temperature too high", "Temperature is too high (38.2°C) again today") == 1.0
        assert message_similarity("Temperature is too high (38.2°C) again today", "temperature too high") == 1.0

    def test_opposite_directions_are_not_similar(self):
        score = message_similarity("Temperature is too high (38.0°C)", "Temperature is too low (30.0°C)")
        assert score == pytest.approx(0.6)
        assert not is_similar("Temperature is too high (38.0°C)", "Temperature is too low (30.0°C)")

    def test_threshold_is_inclusive(self):
        # 7 of 10 tokens shared
        first = "a b c d e f g h i j"
        second = "a b c d e f g x y z"
        assert message_similarity(first, second) == pytest.approx(0.7)
        assert is_similar(first, second)

    def test_empty_messages(self):
        assert message_similarity("", "Temperature is too high") == 0.0
        assert message_similarity("   ", "") == 0.0


class TestResolvedWindow:
    @pytest.mark.parametrize(
        "age, expected",
        [
            (timedelta(minutes=10), True),
            (timedelta(minutes=59, seconds=59), True),
            (timedelta(minutes=60), False),
            (timedelta(minutes=61), False),
            (timedelta(0), True),
            (-timedelta(minutes=1), False),
        ],
    )
    def test_window_bounds(self, age, expected):
        assert resolved_within_window(alert("x", resolved_at=NOW - age), NOW) is expected

    def test_naive_timestamps_are_read_as_utc(self):
        resolved = (NOW - timedelta(minutes=10)).replace(tzinfo=None)
        assert resolved_within_window(alert("x", resolved_at=resolved), NOW)

    def test_open_alert_is_not_in_window(self):
        assert not resolved_within_window(alert("x"), NOW)


class TestShouldCreate:
    def test_no_history_creates(self, high_temperature):
        assert should_create(high_temperature, [], [], NOW)

    def test_similar_open_alert_suppresses(self, high_temperature):
        existing = alert("Temperature is too high (38.2°C)")

        assert not should_create(high_temperature, [existing], [], NOW)
        assert suppression_reason(high_temperature, [existing], [], NOW) == "similar open alert 1"

    def test_recently_resolved_alert_suppresses(self, high_temperature):
        resolved = alert("Temperature is too high (38.2°C)", resolved_at=NOW - timedelta(minutes=10))
        assert not should_create(high_temperature, [], [resolved], NOW)

    def test_alert_resolved_over_an_hour_ago_does_not_suppress(self, high_temperature):
        resolved = alert("Temperature is too high (38.2°C)", resolved_at=NOW - timedelta(minutes=61))
        assert should_create(high_temperature, [], [resolved], NOW)

    def test_other_metric_never_suppresses(self):
        condition = AlertCondition(
            hive_id="H1",
            metric=MetricType.HUMIDITY,
            message="Humidity is too low (30.0%)",
            severity=Severity.MEDIUM,
            direction=Direction.BELOW_MIN,
        )
        open_temperature = alert("Temperature is too high (38.2°C)")
        resolved_temperature = alert("Temperature is too high (38.2°C)", resolved_at=NOW - timedelta(minutes=5))

        assert should_create(condition, [open_temperature], [resolved_temperature], NOW)

    def test_same_metric_but_unrelated_message_creates(self, high_temperature):
        low = alert("Temperature is too low (30.1°C)")
        assert should_create(high_temperature, [low], [], NOW)
