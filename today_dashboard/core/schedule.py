#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Today Dashboard - Schedule
Определение, выпадает ли задача с недельным расписанием на "сегодня"
"""

from datetime import datetime, timedelta
from typing import Optional

from today_dashboard.core.models import RepeatSchedule

def effective_day(now: datetime, day_start_hour: int) -> datetime:
    """
    Момент, по которому определяется "сегодня": now минус day_start_hour часов.

    Время берется локальное для хоста. Aware datetime переводится в локальную
    зону, naive считается локальным.
    """
    if now.tzinfo is not None:
        now = now.astimezone()
    return now - timedelta(hours=day_start_hour)

def is_due_today(
    schedule: Optional[RepeatSchedule],
    now: datetime,
    day_start_hour: int,
) -> bool:
    """Задача без расписания показывается всегда"""
    if schedule is None:
        return True
    return schedule.is_scheduled_on(effective_day(now, day_start_hour).weekday())
