"""
异常处理模块

将网关异常转换为 SMAPI 故障响应
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from smapi_drive.core.exceptions import (
    LinkFailedError,
    LinkPendingError,
    SmapiError,
    TokenRefreshRequiredError,
    UpstreamError,
)

logger = logging.getLogger(__name__)


def fault_body(exc: SmapiError) -> dict:
    """构造故障响应体"""
    body = {
        "faultcode": exc.fault_code,
        "faultstring": str(exc) or exc.fault_code,
    }
    if isinstance(exc, (UpstreamError, LinkFailedError)) and exc.status_code is not None:
        body["detail"] = {
            "status": exc.status_code,
            "payload": exc.payload,
        }
    return body


async def smapi_error_handler(request: Request, exc: SmapiError) -> JSONResponse:
    """SOAP 约定：故障使用 HTTP 500"""
    if isinstance(exc, (LinkPendingError, TokenRefreshRequiredError)):
        logger.debug(f"{request.url.path}: {exc.fault_code}")
    else:
        logger.warning(f"{request.url.path}: {exc.fault_code} {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=fault_body(exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SmapiError, smapi_error_handler)
