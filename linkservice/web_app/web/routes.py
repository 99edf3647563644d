"""Browser-facing routes: short link redirects and a load balancer probe."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import RedirectResponse

router = APIRouter()


@router.get("/health", include_in_schema=False)
async def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    service = request.app.state.service

    health = await service.health_check()

    if health["overall"]:
        return {"status": "healthy"}
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Service unhealthy",
    )


@router.get("/{code}", include_in_schema=False)
async def redirect_to_url(request: Request, code: str):
    """Redirect to the original URL."""
    service = request.app.state.service

    url = await service.resolve(code)

    # Schemeless URLs are stored as given; the Location header needs a scheme
    if not url.startswith(("http://", "https://")):
        url = f"http://{url}"

    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)
