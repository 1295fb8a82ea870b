#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Today Dashboard - FastAPI Application
Веб-дашборд задач на сегодня с отметкой выполнения в один клик

Версия: 1.0.0
"""

import argparse
import logging
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from today_dashboard import __version__
from today_dashboard.api import auth, tasks
from today_dashboard.config import DashboardSettings, load_settings
from today_dashboard.core.remote_client import RemoteCredentials, RemoteTaskClient, create_http_session
from today_dashboard.dependencies import get_task_client, require_session
from today_dashboard.exceptions import AuthFailure, ConfigMissing, UpstreamError

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).parent
static_dir = PACKAGE_DIR / "static"
templates_dir = PACKAGE_DIR / "templates"

templates = Jinja2Templates(directory=str(templates_dir))

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения: одна HTTP сессия на процесс"""
    settings: DashboardSettings = app.state.settings

    logger.info("🚀 Запуск Today Dashboard...")
    session = create_http_session(settings.REMOTE_TIMEOUT_SECONDS)
    app.state.task_client = RemoteTaskClient(
        session,
        RemoteCredentials(
            api_key=settings.HABITICA_API_KEY,
            user_id=settings.HABITICA_USER_ID,
            client_id=settings.HABITICA_CLIENT_ID,
        ),
        base_url=settings.HABITICA_BASE_URL,
    )
    logger.info(f"🌐 Dashboard доступен на: {settings.get_full_url()}")

    yield

    logger.info("🛑 Остановка Dashboard...")
    await session.close()
    logger.info("✅ Ресурсы очищены")

def create_app(settings: Optional[DashboardSettings] = None) -> FastAPI:
    """Фабрика для создания приложения"""
    settings = settings or load_settings()

    app = FastAPI(
        title="Today Dashboard",
        description="Задачи на сегодня из Habitica",
        version=__version__,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.start_time = time.time()

    # ===== MIDDLEWARE =====

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Middleware для логирования запросов"""
        start_time = time.time()
        client_ip = request.headers.get(
            "X-Forwarded-For",
            request.client.host if request.client else "unknown",
        )

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} "
            f"- {response.status_code} "
            f"- {process_time:.3f}s "
            f"- {client_ip}"
        )
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response

    # ===== СТАТИЧЕСКИЕ ФАЙЛЫ =====

    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    # ===== ПОДКЛЮЧЕНИЕ API РОУТЕРОВ =====

    app.include_router(auth.router)
    app.include_router(tasks.router)

    # ===== ОСНОВНЫЕ МАРШРУТЫ =====

    @app.get("/", response_class=HTMLResponse, dependencies=[Depends(require_session)])
    async def dashboard_home(
        request: Request,
        client: RemoteTaskClient = Depends(get_task_client),
    ):
        """Главная страница: задачи на сегодня"""
        due_tasks = await client.fetch_due_tasks()
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "title": "Today Dashboard",
                "tasks": due_tasks,
            },
        )

    @app.get("/login", response_class=HTMLResponse)
    async def login_page():
        """Форма входа"""
        return FileResponse(static_dir / "login.html")

    # ===== СЛУЖЕБНЫЕ МАРШРУТЫ =====

    @app.get("/health")
    async def health_check():
        """Health check для мониторинга"""
        return {
            "status": "healthy",
            "service": "today-dashboard",
            "version": __version__,
            "timestamp": time.time(),
            "uptime_seconds": time.time() - app.state.start_time,
        }

    @app.get("/ping")
    async def ping():
        """Простой ping endpoint"""
        return {
            "message": "pong",
            "timestamp": time.time(),
            "service": "today-dashboard"
        }

    @app.get("/dashboard")
    async def dashboard_redirect():
        """Редирект на главную"""
        return RedirectResponse(url="/", status_code=status.HTTP_301_MOVED_PERMANENTLY)

    # ===== ОБРАБОТЧИКИ ОШИБОК =====

    @app.exception_handler(AuthFailure)
    async def auth_failure_handler(request: Request, exc: AuthFailure):
        """Нет сессии - на страницу входа"""
        return RedirectResponse(url=exc.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        """Ошибка удаленного сервиса - запрос падает целиком, без кэша"""
        logger.error(f"❌ Ошибка удаленного сервиса: {exc}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={
                "detail": "Upstream task service error",
                "operation": exc.operation,
                "upstream_status": exc.status,
            }
        )

    return app

# ===== ЗАПУСК ПРИЛОЖЕНИЯ =====

def run_dashboard(
    settings: DashboardSettings,
    host: str = None,
    port: int = None,
    dev: bool = None,
    reload: bool = None
):
    """Запуск дашборда"""
    host = host or settings.HOST
    port = port or settings.PORT
    dev = dev if dev is not None else settings.DEBUG
    reload = reload if reload is not None else False

    logger.info(f"🌐 Запуск Dashboard на http://{host}:{port}")
    logger.info(f"🔧 Режим отладки: {dev}")
    logger.info(f"🔄 Автоперезагрузка: {reload}")

    # Для перезагрузки uvicorn нужна строка импорта фабрики
    target = "today_dashboard.app:create_app" if reload else create_app(settings)

    try:
        uvicorn.run(
            target,
            factory=reload,
            host=host,
            port=port,
            reload=reload,
            log_level="debug" if dev else "info",
            access_log=dev,
            server_header=False,
            date_header=False
        )
    except KeyboardInterrupt:
        logger.info("👋 Dashboard остановлен")

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Запуск Today Dashboard')
    parser.add_argument('--host', default=None, help='Host для запуска')
    parser.add_argument('--port', type=int, default=None, help='Port для запуска')
    parser.add_argument('--dev', action='store_true', help='Режим разработки')
    parser.add_argument('--reload', action='store_true', help='Автоперезагрузка')

    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ConfigMissing as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"❌ {e}")
        return 1

    settings.setup_logging()
    run_dashboard(
        settings,
        host=args.host,
        port=args.port,
        dev=args.dev or None,
        reload=args.reload
    )
    return 0

if __name__ == "__main__":
    sys.exit(main())
