#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Today Dashboard - Configuration
Настройки дашборда из переменных окружения и .env

Версия: 1.0.0
"""

import logging
from pathlib import Path
from typing import List

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from today_dashboard.exceptions import ConfigMissing

# Переменные окружения, без которых процесс не стартует
REQUIRED_SETTINGS: List[str] = [
    "HABITICA_API_KEY",
    "HABITICA_USER_ID",
    "SITE_USERNAME",
    "SITE_PASSWORD",
    "AUTHZ_TOKEN",
]

class DashboardSettings(BaseSettings):
    """Настройки дашборда. Создаются один раз при запуске и не меняются."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        frozen=True,
        extra="ignore",
    )

    # ===== УДАЛЕННЫЙ СЕРВИС (HABITICA) =====

    HABITICA_API_KEY: str = Field(
        description="API ключ Habitica (x-api-key)"
    )

    HABITICA_USER_ID: str = Field(
        description="ID пользователя Habitica (x-api-user)"
    )

    HABITICA_CLIENT_ID: str = Field(
        default="test-app",
        description="Идентификатор клиента (x-client)"
    )

    HABITICA_BASE_URL: str = Field(
        default="https://habitica.com/api/v3",
        description="Базовый URL API v3"
    )

    REMOTE_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        description="Общий таймаут одного запроса к удаленному сервису"
    )

    # ===== АВТОРИЗАЦИЯ =====

    SITE_USERNAME: str = Field(
        description="Логин для входа на дашборд"
    )

    SITE_PASSWORD: str = Field(
        description="Пароль для входа на дашборд (сравнивается в открытом виде)"
    )

    AUTHZ_TOKEN: str = Field(
        description="Статический токен сессии, значение cookie"
    )

    SESSION_COOKIE_NAME: str = Field(
        default="authz",
        description="Имя cookie сессии"
    )

    # ===== СЕТЕВЫЕ НАСТРОЙКИ =====

    HOST: str = Field(
        default="0.0.0.0",
        description="Хост для запуска дашборда"
    )

    PORT: int = Field(
        default=3002,
        description="Порт для запуска дашборда"
    )

    DEBUG: bool = Field(
        default=False,
        description="Режим отладки"
    )

    # ===== ЛОГИРОВАНИЕ =====

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Уровень логирования (DEBUG/INFO/WARNING/ERROR/CRITICAL)"
    )

    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Формат логов"
    )

    LOG_DATE_FORMAT: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Формат даты в логах"
    )

    LOGS_DIR: Path = Field(
        default=Path("logs"),
        description="Директория логов"
    )

    # ===== ВАЛИДАТОРЫ =====

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Валидация уровня логирования"""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Валидация порта"""
        if not 1 <= v <= 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("HABITICA_BASE_URL")
    @classmethod
    def strip_base_url(cls, v: str) -> str:
        return v.rstrip("/")

    # ===== МЕТОДЫ КОНФИГУРАЦИИ =====

    def get_full_url(self, path: str = "") -> str:
        """Получить полный URL дашборда"""
        return f"http://{self.HOST}:{self.PORT}/{path.lstrip('/')}"

    def setup_logging(self) -> None:
        """Настройка логирования"""
        self.LOGS_DIR.mkdir(parents=True, exist_ok=True)

        logging.basicConfig(
            level=getattr(logging, self.LOG_LEVEL),
            format=self.LOG_FORMAT,
            datefmt=self.LOG_DATE_FORMAT,
            handlers=[
                logging.StreamHandler(),
                logging.FileHandler(
                    self.LOGS_DIR / "dashboard.log",
                    encoding="utf-8"
                )
            ],
            force=True,
        )

        # Настройка логгеров внешних библиотек
        if not self.DEBUG:
            logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
            logging.getLogger("aiohttp.access").setLevel(logging.WARNING)

def load_settings(**overrides) -> DashboardSettings:
    """
    Загрузить настройки из окружения.

    Пустые или отсутствующие обязательные параметры превращаются в ConfigMissing,
    остальные ошибки валидации пробрасываются как есть.
    """
    try:
        settings = DashboardSettings(**overrides)
    except ValidationError as e:
        missing = [
            str(err["loc"][0]) for err in e.errors()
            if err["type"] == "missing" and err["loc"]
        ]
        if missing:
            raise ConfigMissing(missing) from e
        raise

    empty = [name for name in REQUIRED_SETTINGS if not getattr(settings, name).strip()]
    if empty:
        raise ConfigMissing(empty)

    return settings
