"""Provider availability API routes."""

from dataclasses import asdict

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication


class ProviderResponse(BaseModel):
    """Response model for one provider."""

    id: str
    name: str
    available: bool
    reason: str | None = None
    models: list[str] = []
    capabilities: dict[str, bool] = {}


class ProvidersResponse(BaseModel):
    """Response model for the provider list."""

    providers: list[ProviderResponse]


def create_providers_router(app: IApplication) -> APIRouter:
    """Create provider availability router."""
    router = APIRouter(prefix="/api", tags=["providers"])

    @router.get("/providers", response_model=ProvidersResponse)
    async def get_providers(
        refresh: bool = Query(False, description="Re-evaluate instead of using the cache"),
    ) -> dict:
        """Get provider availability."""
        try:
            providers = await app.providers.get_available_providers(refresh=refresh)
            return {"providers": [asdict(p) for p in providers]}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
