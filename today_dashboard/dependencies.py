#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Today Dashboard - Dependencies
Провайдеры зависимостей и шлюз сессии для FastAPI приложения
"""

import logging

from fastapi import Depends, Request

from today_dashboard.auth import AuthDecision, authorize
from today_dashboard.config import DashboardSettings
from today_dashboard.core.remote_client import RemoteTaskClient
from today_dashboard.exceptions import AuthFailure

logger = logging.getLogger(__name__)

# ===== ПРОВАЙДЕРЫ ЗАВИСИМОСТЕЙ =====

def get_settings(request: Request) -> DashboardSettings:
    """Настройки, переданные в create_app"""
    return request.app.state.settings

def get_task_client(request: Request) -> RemoteTaskClient:
    """Клиент удаленного сервиса, созданный в lifespan"""
    return request.app.state.task_client

# ===== АВТОРИЗАЦИЯ =====

async def require_session(
    request: Request,
    settings: DashboardSettings = Depends(get_settings),
) -> None:
    """Требовать действующую cookie сессии, иначе редирект на /login"""
    decision = authorize(request.cookies, settings.AUTHZ_TOKEN, settings.SESSION_COOKIE_NAME)
    if decision is not AuthDecision.ADMIT:
        logger.info(f"🔒 Нет сессии: {request.method} {request.url.path}")
        raise AuthFailure("missing or invalid session cookie")
