"""
도메인 예외 계층과 HTTP 응답 변환기입니다.

서비스 레이어는 아래 예외만 발생시키고, 상태 코드와 JSON 형태로의 변환은
`register_exception_handlers`에 등록된 핸들러 한 곳에서만 수행합니다.

    raise NotFoundError("Question not found")
    -> 404 {"error": "Question not found"}
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class FoxClubError(Exception):
    """Base exception for all domain errors"""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[List[Dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.details = details or []
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(FoxClubError):
    """Malformed or out-of-range input"""

    status_code = 400
    default_message = "Invalid request"

    @classmethod
    def from_pydantic(
        cls,
        exc: PydanticValidationError,
        prefix: str = "",
        message: str = "Invalid request",
    ) -> "ValidationError":
        return cls(message, details=_format_errors(exc.errors(), prefix))


class Unauthorized(FoxClubError):
    """No session or invalid session"""

    status_code = 401
    default_message = "Authentication required"


class Forbidden(FoxClubError):
    """Authenticated but not allowed"""

    status_code = 403
    default_message = "Forbidden"


class NotFoundError(FoxClubError):
    """Referenced id does not exist"""

    status_code = 404
    default_message = "Not found"


class ConflictError(FoxClubError):
    """Unique value already taken"""

    status_code = 409
    default_message = "Conflict"


def _format_errors(errors, prefix: str = "") -> List[Dict[str, Any]]:
    rows = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = ".".join(loc)
        if prefix:
            field = f"{prefix}.{field}" if field else prefix
        rows.append({"field": field, "message": err.get("msg", "")})
    return rows


async def _handle_domain_error(request: Request, exc: FoxClubError):
    if exc.status_code >= 500:
        logger.error("[error] %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _handle_request_validation(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": _format_errors(exc.errors())},
    )


async def _handle_http_exception(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _handle_unexpected(request: Request, exc: Exception):
    logger.error("[error] unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(FoxClubError, _handle_domain_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(Exception, _handle_unexpected)
