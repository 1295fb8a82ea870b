#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Today Dashboard - Login API
Вход на дашборд: проверка формы и выдача cookie сессии
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse

from today_dashboard.auth import login
from today_dashboard.config import DashboardSettings
from today_dashboard.dependencies import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

# "Постоянная" cookie: 20 лет
PERMANENT_COOKIE_MAX_AGE = 20 * 365 * 24 * 60 * 60

@router.post("/api/login")
async def api_login(
    request: Request,
    username: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    settings: DashboardSettings = Depends(get_settings),
):
    """Проверить логин и пароль, при успехе выставить cookie и вернуть на главную"""
    result = login(
        request.cookies.get(settings.SESSION_COOKIE_NAME),
        username,
        password,
        settings,
    )

    response = RedirectResponse(url=result.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

    if not result.admitted:
        logger.warning(f"⚠️ Неудачная попытка входа: {username!r}")
        return response

    if result.set_cookie:
        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=settings.AUTHZ_TOKEN,
            max_age=PERMANENT_COOKIE_MAX_AGE,
            path="/",
            secure=True,
            httponly=True,
        )
        logger.info("🔑 Вход выполнен, cookie сессии выдана")

    return response
