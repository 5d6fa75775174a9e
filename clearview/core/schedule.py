"""
Index schedule - decides whether a startup check should rebuild the catalog.
"""

import datetime
import logging

from ..constants import (
    SCHEDULE_INTERVAL,
    SCHEDULE_ON_STARTUP,
    UNIT_DAYS,
    UNIT_WEEKS,
)

logger = logging.getLogger(__name__)


def utc_now():
    return datetime.datetime.now(datetime.timezone.utc)


def interval_timedelta(value, unit):
    try:
        value = int(value)
    except (TypeError, ValueError):
        value = 24
    if unit == UNIT_DAYS:
        return datetime.timedelta(days=value)
    if unit == UNIT_WEEKS:
        return datetime.timedelta(days=value * 7)
    return datetime.timedelta(hours=value)


def parse_timestamp(value):
    """ISO 时间戳 -> aware datetime (UTC)；无效返回 None"""
    if not value:
        return None
    try:
        ts = datetime.datetime.fromisoformat(str(value))
    except ValueError:
        logger.warning(f"无效的索引时间戳: {value}")
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=datetime.timezone.utc)
    return ts


def should_rebuild(indexing_settings, cache_available, now=None):
    if not cache_available:
        return True

    schedule = indexing_settings.get("schedule", SCHEDULE_ON_STARTUP)
    if schedule == SCHEDULE_ON_STARTUP:
        return True
    if schedule == SCHEDULE_INTERVAL:
        last = parse_timestamp(indexing_settings.get("last_indexed_utc"))
        if last is None:
            return True
        now = now or utc_now()
        interval = interval_timedelta(
            indexing_settings.get("interval_value"), indexing_settings.get("interval_unit")
        )
        return now - last > interval
    # SCHEDULE_MANUAL
    return False


def mark_indexed(indexing_settings, now=None):
    indexing_settings["last_indexed_utc"] = (now or utc_now()).isoformat()
    return indexing_settings


__all__ = ["interval_timedelta", "should_rebuild", "mark_indexed", "parse_timestamp"]
