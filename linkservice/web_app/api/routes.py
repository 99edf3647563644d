"""API routes implementation."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from .schemas import (
    CreateRequest,
    CreateResponse,
    ResolveResponse,
    HealthResponse,
    ErrorResponse,
)
from ...lib.common.headers import build_base_url, get_forwarded_path_prefix
from ...lib.common.url_builder import build_short_url
from ...lib.database.models import Link

router = APIRouter()


def _short_url_for(request: Request, code: str) -> str:
    """Public short URL, honouring proxy headers before configured defaults."""
    config = request.app.state.config

    base_url = build_base_url(
        headers=request.headers,
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )
    path_prefix = get_forwarded_path_prefix(request.headers) or config.path_prefix

    return build_short_url(code=code, base_url=base_url, path_prefix=path_prefix)


@router.post(
    "/links",
    response_model=CreateResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        500: {"model": ErrorResponse, "description": "Request could not be processed"},
    },
    summary="Create short URL",
    description="Return the short code for a URL, allocating one on first use.",
)
async def create_link(request: Request, body: CreateRequest):
    """Create (or look up) the short code for a URL."""
    service = request.app.state.service

    code = await service.create(body.url)

    return CreateResponse(code=code, short_url=_short_url_for(request, code))


@router.get(
    "/links/{code}",
    response_model=ResolveResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid short code"},
        404: {"model": ErrorResponse, "description": "Short code not found"},
        500: {"model": ErrorResponse, "description": "Request could not be processed"},
    },
    summary="Resolve short code",
    description="Get the original URL for a short code.",
)
async def resolve_link(request: Request, code: str):
    """Resolve a short code to its URL."""
    service = request.app.state.service

    url = await service.resolve(code)

    return ResolveResponse(**Link(code=code, url=url).to_dict())


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
