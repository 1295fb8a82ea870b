#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Today Dashboard - Remote Task Client
Клиент удаленного сервиса задач (Habitica API v3) поверх aiohttp

Каждый вызов - один сетевой запрос без повторов. Любой неуспешный статус,
некорректное тело ответа, сетевая ошибка или таймаут превращаются в UpstreamError.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List

import aiohttp
from pydantic import ValidationError

from today_dashboard.core.models import ScoreDirection, Task, TaskListResponse, UserResponse
from today_dashboard.core.schedule import is_due_today
from today_dashboard.exceptions import UpstreamError

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class RemoteCredentials:
    """Учетные данные удаленного сервиса, отправляются с каждым запросом"""
    api_key: str
    user_id: str
    client_id: str = "test-app"

    def headers(self) -> Dict[str, str]:
        return {
            "x-client": self.client_id,
            "x-api-user": self.user_id,
            "x-api-key": self.api_key,
        }

def create_http_session(timeout_seconds: float) -> aiohttp.ClientSession:
    """Сессия aiohttp с общим ограничением времени на запрос"""
    timeout = aiohttp.ClientTimeout(total=timeout_seconds)
    return aiohttp.ClientSession(timeout=timeout)

class RemoteTaskClient:
    """Тонкая обертка над HTTP API удаленного сервиса задач"""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        credentials: RemoteCredentials,
        base_url: str = "https://habitica.com/api/v3",
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.session = session
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.clock = clock

    # === НИЗКОУРОВНЕВЫЕ ЗАПРОСЫ ===

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        expect_json: bool = True,
        **kwargs,
    ) -> Any:
        """Выполнить запрос и вернуть JSON тела; статус отличный от 200 - ошибка"""
        url = f"{self.base_url}{path}"
        headers = self.credentials.headers()
        headers.update(kwargs.pop("headers", {}))

        try:
            async with self.session.request(method, url, headers=headers, **kwargs) as response:
                if response.status != 200:
                    raise UpstreamError(
                        f"unexpected status from {method} {path}",
                        operation=operation,
                        status=response.status,
                    )
                if not expect_json:
                    return None
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise UpstreamError(
                        f"response body is not JSON: {e}",
                        operation=operation,
                        status=response.status,
                    ) from e
        # ServerTimeoutError наследует и TimeoutError, и ClientError
        except asyncio.TimeoutError as e:
            raise UpstreamError("request timed out", operation=operation) from e
        except aiohttp.ClientError as e:
            raise UpstreamError(f"request failed: {e}", operation=operation) from e

    # === ПУБЛИЧНЫЕ ОПЕРАЦИИ ===

    async def fetch_day_start_hour(self) -> int:
        """Час начала нового дня из настроек пользователя"""
        operation = "fetch_day_start_hour"
        payload = await self._request(
            "GET", "/user", operation,
            params={"userFields": "preferences"},
        )
        try:
            return UserResponse.model_validate(payload).data.preferences.day_start
        except ValidationError as e:
            raise UpstreamError(f"malformed user response: {e}", operation=operation) from e

    async def fetch_all_tasks(self) -> List[Task]:
        """Все задачи пользователя в порядке, заданном удаленным сервисом"""
        operation = "fetch_all_tasks"
        payload = await self._request("GET", "/tasks/user", operation)
        try:
            tasks_response = TaskListResponse.model_validate(payload)
        except ValidationError as e:
            raise UpstreamError(f"malformed task list: {e}", operation=operation) from e

        if not tasks_response.success:
            raise UpstreamError("task list reported success=false", operation=operation)

        logger.debug(f"Получено задач: {len(tasks_response.data)}")
        return tasks_response.data

    async def fetch_due_tasks(self) -> List[Task]:
        """Задачи, которые выпадают на сегодня с учетом часа начала дня"""
        day_start_hour, tasks = await asyncio.gather(
            self.fetch_day_start_hour(),
            self.fetch_all_tasks(),
        )
        now = self.clock()
        due = [task for task in tasks if is_due_today(task.repeat, now, day_start_hour)]
        logger.info(f"📋 Задач на сегодня: {len(due)} из {len(tasks)} (dayStart={day_start_hour})")
        return due

    async def mark_task_done(self, task_id: str) -> None:
        """Отметить задачу выполненной (score up)"""
        direction = ScoreDirection.UP
        await self._request(
            "POST", f"/tasks/{task_id}/score/{direction.value}", "mark_task_done",
            expect_json=False,
            headers={"Content-Length": "0"},
        )
        logger.info(f"✅ Задача {task_id} отмечена ({direction.value})")
