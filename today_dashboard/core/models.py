#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Today Dashboard - Models
Модели задач и ответов удаленного сервиса (Habitica API v3)
"""

from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

class ScoreDirection(str, Enum):
    """Направление отметки задачи. Дашборд отмечает только вверх."""
    UP = "up"

# Индекс date.weekday() (понедельник = 0) -> флаг расписания
WEEKDAY_FLAGS = ("m", "t", "w", "th", "f", "s", "su")

class RepeatSchedule(BaseModel):
    """Недельное расписание повтора: по одному флагу на каждый день недели"""

    model_config = ConfigDict(frozen=True)

    su: bool
    m: bool
    t: bool
    w: bool
    th: bool
    f: bool
    s: bool

    def is_scheduled_on(self, weekday: int) -> bool:
        """Флаг для дня недели в нумерации date.weekday()"""
        return getattr(self, WEEKDAY_FLAGS[weekday])

class Task(BaseModel):
    """Задача в том виде, в каком ее отдает удаленный сервис"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    text: str
    completed: bool = False
    repeat: Optional[RepeatSchedule] = None

    user_id: Optional[str] = Field(default=None, alias="userId")
    task_type: Optional[str] = Field(default=None, alias="type")
    notes: str = ""
    value: float = 0.0
    priority: float = 1.0
    attribute: Optional[str] = None

    @property
    def is_scheduled(self) -> bool:
        return self.repeat is not None

class TaskListResponse(BaseModel):
    """Ответ GET /tasks/user"""
    success: bool
    data: List[Task]

class Preferences(BaseModel):
    day_start: int = Field(alias="dayStart")

class User(BaseModel):
    preferences: Preferences

class UserResponse(BaseModel):
    """Ответ GET /user?userFields=preferences"""
    data: User
