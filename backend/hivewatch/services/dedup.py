"""Decides whether a detected condition becomes a new alert.

Alert messages embed the measured value ("Temperature is too high (38.2°C)"),
so two alerts for the same underlying condition almost never match exactly.
Messages are compared by token overlap instead: the fraction of the shorter
message's tokens found in the longer one. A candidate is suppressed when a
similar alert is still open, or was resolved within the last hour.
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta

from hivewatch.schemas.alert import AlertOut
from hivewatch.services.evaluator import AlertCondition
from hivewatch.utils.timestamps import as_utc

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.70
RESOLVED_WINDOW = timedelta(minutes=60)


def tokenize(message: str) -> list[str]:
    return message.lower().split()


def message_similarity(first: str, second: str) -> float:
    first_tokens = tokenize(first)
    second_tokens = tokenize(second)

    if len(first_tokens) <= len(second_tokens):
        shorter, longer = first_tokens, second_tokens
    else:
        shorter, longer = second_tokens, first_tokens

    if not shorter:
        return 0.0

    longer_set = set(longer)
    matched = sum(1 for token in shorter if token in longer_set)
    return matched / len(shorter)


def is_similar(first: str, second: str) -> bool:
    return message_similarity(first, second) >= SIMILARITY_THRESHOLD


def resolved_within_window(alert: AlertOut, now: datetime) -> bool:
    if alert.resolved_at is None:
        return False
    resolved_at = as_utc(alert.resolved_at)
    now = as_utc(now)
    return now - RESOLVED_WINDOW < resolved_at <= now


def suppression_reason(
    condition: AlertCondition,
    open_alerts: Iterable[AlertOut],
    resolved_alerts: Iterable[AlertOut],
    now: datetime,
) -> str | None:
    metric_type = condition.metric.value

    for alert in open_alerts:
        if alert.metric_type == metric_type and alert.resolved_at is None and is_similar(alert.message, condition.message):
            return f"similar open alert {alert.id}"

    for alert in resolved_alerts:
        if (
            alert.metric_type == metric_type
            and resolved_within_window(alert, now)
            and is_similar(alert.message, condition.message)
        ):
            return f"similar alert {alert.id} resolved at {alert.resolved_at.isoformat()}"

    return None


def should_create(
    condition: AlertCondition,
    open_alerts: Iterable[AlertOut],
    resolved_alerts: Iterable[AlertOut],
    now: datetime,
) -> bool:
    reason = suppression_reason(condition, open_alerts, resolved_alerts, now)
    if reason is not None:
        logger.debug("Suppressed %s alert for hive %s: %s", condition.metric.value, condition.hive_id, reason)
        return False
    return True
