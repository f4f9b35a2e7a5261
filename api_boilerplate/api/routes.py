"""Route table of the API.

Resource routers are listed explicitly with their mount paths and mounted
under the configured API prefix together with the health check.
"""

from fastapi import APIRouter, FastAPI

from api_boilerplate.api.schemas.envelope import HealthResponse
from api_boilerplate.api.utils.responses import ORJSONResponse
from api_boilerplate.users.router import router as users_router

RESOURCE_ROUTERS: tuple[tuple[str, APIRouter], ...] = (("/users", users_router),)

health_router = APIRouter(tags=["health"])


@health_router.get("/health", response_model=HealthResponse)
async def health() -> ORJSONResponse:
    """Liveness check used by load balancers and container orchestration."""
    return ORJSONResponse(content=HealthResponse().model_dump(mode="json"))


def build_api_router() -> APIRouter:
    """Assemble the health check and every resource router."""
    api_router = APIRouter()
    api_router.include_router(health_router)
    for mount_path, resource_router in RESOURCE_ROUTERS:
        api_router.include_router(resource_router, prefix=mount_path)
    return api_router


def include_routes(app: FastAPI, prefix: str) -> None:
    """Mount the API under ``prefix`` (e.g. ``/api``)."""
    app.include_router(build_api_router(), prefix=prefix)
