"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Builds one structured event per request (method, path, status, duration,
query params, masked request body, tracking number, error reason) and ships
it to Axiom when configured, or to the ``parcel_desk.access`` logger otherwise.
Guest contact fields are masked before anything leaves the process.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from parcel_desk.config import settings

access_logger = logging.getLogger("parcel_desk.access")

# 마스킹 대상 필드 패턴 — 투숙객 연락처 (Guest contact fields to mask)
_SENSITIVE_KEYS = re.compile(r"(phone|password|secret|token|authorization)", re.IGNORECASE)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_PACKAGE_PATH = re.compile(r"^/api/packages/(?P<tracking>[^/]+)$")
_RESERVED_SEGMENTS = {"checkin", "checkout", "search", "getlist"}


def _mask_value(value: Any) -> Any:
    """끝 4자리만 남기고 마스킹 — Keep only the last four characters."""
    if isinstance(value, str) and len(value) > 4:
        return "*" * (len(value) - 4) + value[-4:]
    return "***"


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: _mask_value(v) if _SENSITIVE_KEYS.search(k) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    return data


def _truncate(value: Any, max_len: int = 2000) -> Any:
    """로그 크기 제한 — Truncate large string values."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    if isinstance(value, dict):
        return {k: _truncate(v, max_len) for k, v in value.items()}
    return value


def _tracking_number(path: str, query_params: dict[str, str] | None, body: Any) -> str | None:
    """요청에서 운송장 번호 추출 — body, query, path 순서."""
    if isinstance(body, dict) and body.get("tracking_number"):
        return str(body["tracking_number"])
    if query_params and query_params.get("tracking_number"):
        return query_params["tracking_number"]
    match = _PACKAGE_PATH.match(path)
    if match and match.group("tracking") not in _RESERVED_SEGMENTS:
        return match.group("tracking")
    return None


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 로깅하는 미들웨어.

    Middleware that logs every API request and response.
    Events go to Axiom when AXIOM_API_TOKEN and AXIOM_DATASET are set,
    and to the standard ``parcel_desk.access`` logger otherwise.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time = time.time()
        method = request.method
        path = request.url.path
        query_params = dict(request.query_params) if request.query_params else None

        # Request body 읽기 — Read request body (only for methods with body)
        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            try:
                body_bytes = await request.body()
                if body_bytes:
                    request_body = json.loads(body_bytes)
            except (json.JSONDecodeError, UnicodeDecodeError):
                request_body = "(non-json body)"
        tracking_number = _tracking_number(path, query_params, request_body)

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

                try:
                    detail = json.loads(resp_body).get("detail", "")
                    error_detail = detail if isinstance(detail, str) else json.dumps(detail)
                except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
                    error_detail = resp_body.decode("utf-8", errors="replace")
                error_detail = error_detail[:500]

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event: dict[str, Any] = {
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }
            if tracking_number:
                log_event["tracking_number"] = tracking_number
            if query_params:
                log_event["query_params"] = _mask_dict(query_params)
            if request_body is not None:
                log_event["request_body"] = _truncate(_mask_dict(request_body))
            if error_detail:
                log_event["error"] = error_detail
            self._emit(log_event)

        return response

    def _emit(self, log_event: dict[str, Any]) -> None:
        """이벤트 전송 — 로깅 실패가 요청 처리에 영향을 주지 않음."""
        if self._client is None:
            level = logging.WARNING if log_event["status_code"] >= 400 else logging.INFO
            access_logger.log(
                level,
                "%s %s -> %s (%sms)",
                log_event["method"],
                log_event["path"],
                log_event["status_code"],
                log_event["duration_ms"],
                extra={"event": log_event},
            )
            return
        try:
            self._client.ingest_events(self._dataset, [log_event])
        except Exception:
            access_logger.exception("Failed to ship request log to Axiom")
