#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Today Dashboard - Auth
Проверка cookie сессии и вход по статическим логину и паролю

Сессия одна на процесс: значение cookie сравнивается с AUTHZ_TOKEN.
Логин и пароль сравниваются в открытом виде, без хеширования и без
ограничения числа попыток.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from today_dashboard.config import DashboardSettings

LOGIN_PAGE = "/login"
HOME_PAGE = "/"

class AuthDecision(Enum):
    """Решение шлюза сессии"""
    ADMIT = "admit"
    REDIRECT_TO_LOGIN = "redirect_to_login"

@dataclass(frozen=True)
class LoginResult:
    """Результат попытки входа"""
    admitted: bool
    redirect_to: str
    set_cookie: bool = False

def is_valid_session(cookie_value: Optional[str], configured_token: str) -> bool:
    """Точное совпадение непустого значения cookie с токеном"""
    return bool(cookie_value) and cookie_value == configured_token

def authorize(
    cookies: Mapping[str, str],
    configured_token: str,
    cookie_name: str = "authz",
) -> AuthDecision:
    """Пропустить запрос или отправить на страницу входа"""
    if is_valid_session(cookies.get(cookie_name), configured_token):
        return AuthDecision.ADMIT
    return AuthDecision.REDIRECT_TO_LOGIN

def login(
    submitted_cookie: Optional[str],
    submitted_username: Optional[str],
    submitted_password: Optional[str],
    settings: DashboardSettings,
) -> LoginResult:
    """
    Проверка входа.

    С уже действующей cookie вход успешен без проверки логина и пароля,
    новая cookie при этом не выставляется.
    """
    if is_valid_session(submitted_cookie, settings.AUTHZ_TOKEN):
        return LoginResult(admitted=True, redirect_to=HOME_PAGE)

    if submitted_username != settings.SITE_USERNAME or submitted_password != settings.SITE_PASSWORD:
        return LoginResult(admitted=False, redirect_to=LOGIN_PAGE)

    return LoginResult(admitted=True, redirect_to=HOME_PAGE, set_cookie=True)
