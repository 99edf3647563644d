"""Forwarded headers middleware."""

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ...lib.common.headers import extract_forwarded_headers


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Store X-Forwarded-* headers on request.state (forwarded_proto, forwarded_host, ...)."""

    async def dispatch(self, request: Request, call_next: Callable):
        for key, value in extract_forwarded_headers(request.headers).items():
            setattr(request.state, key, value)

        return await call_next(request)
