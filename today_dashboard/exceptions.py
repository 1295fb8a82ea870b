#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Today Dashboard - Exceptions
Исключения дашборда: ошибки удаленного сервиса, авторизации и конфигурации
"""

from typing import List, Optional

# ===== EXCEPTIONS =====

class DashboardError(Exception):
    """Базовое исключение дашборда"""
    pass

class UpstreamError(DashboardError):
    """Ошибка удаленного сервиса задач (статус, формат ответа, сеть, таймаут)"""

    def __init__(self, message: str, operation: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.status = status

    def __str__(self) -> str:
        if self.status is not None:
            return f"{self.operation}: {self.message} (HTTP {self.status})"
        return f"{self.operation}: {self.message}"

class AuthFailure(DashboardError):
    """Нет сессии или неверные учетные данные - всегда редирект на /login"""

    def __init__(self, reason: str = "unauthorized", redirect_to: str = "/login"):
        super().__init__(reason)
        self.reason = reason
        self.redirect_to = redirect_to

class ConfigMissing(DashboardError):
    """Не заданы обязательные параметры конфигурации"""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required configuration: {', '.join(self.missing)}")
