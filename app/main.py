"""
FastAPI 主应用入口

Sonos SMAPI - OneDrive 网关的 JSON 传输层
"""
import logging
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import smapi
from app.core.config import Settings, get_settings
from app.core.exceptions import register_exception_handlers
from smapi_drive import __version__

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """配置日志"""
    handlers = [logging.StreamHandler()]

    if settings.log.file:
        settings.log.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.log.file,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter(settings.log.format))
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, settings.log.level.upper()),
        format=settings.log.format,
        handlers=handlers
    )


def create_app() -> FastAPI:
    """
    创建 FastAPI 应用

    Returns:
        FastAPI 应用实例
    """
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Sonos OneDrive 网关",
        description="将 Sonos SMAPI 调用转换为 Microsoft Graph 调用",
        version=__version__,
    )

    # CORS 中间件
    if settings.gateway.enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.gateway.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # 注册路由
    app.include_router(smapi.router, prefix="/smapi")
    app.include_router(smapi.router, prefix="/smapi/appfolder")

    if not settings.graph.client_id:
        logger.warning("GRAPH_CLIENT_ID is not set, device linking will fail")

    return app


# 创建应用实例
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=_settings.gateway.host,
        port=_settings.gateway.port,
        reload=_settings.gateway.debug,
        log_level=_settings.log.level.lower()
    )
