"""
College resolution HTTP API - FastAPI app exposing resolve and search

Run: uvicorn college_resolver.api:build_default_app --factory --port 8000
"""

from typing import Optional

from dotenv import load_dotenv
from fastapi import APIRouter, Depends, FastAPI, Query, Request
from pydantic import BaseModel, ConfigDict, Field

from .config_loader import Config, load_config
from .models import Resolution
from .service import CollegeResolutionService

router = APIRouter(prefix="/api")


class ResolveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    college_names: list[str] = Field(alias="collegeNames")


def get_service(request: Request) -> CollegeResolutionService:
    """Service handle built at app creation."""
    return request.app.state.resolution_service


@router.post("/resolve-colleges", response_model=list[Resolution])
def resolve_colleges(
    payload: ResolveRequest,
    service: CollegeResolutionService = Depends(get_service),
):
    """Resolve college names to standardized entries."""
    return service.resolve_colleges(payload.college_names)


@router.get("/colleges/search", response_model=list[str])
def search_colleges(
    q: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=1),
    service: CollegeResolutionService = Depends(get_service),
):
    """Autocomplete search for colleges."""
    if not q:
        return []
    return service.search_colleges(q, limit)


@router.get("/colleges/stats")
def college_stats(service: CollegeResolutionService = Depends(get_service)):
    """Index statistics."""
    return service.get_stats()


def create_app(
    config: Optional[Config] = None,
    service: Optional[CollegeResolutionService] = None,
) -> FastAPI:
    """Create the API app with a ready resolution service."""
    if service is None:
        service = CollegeResolutionService.create(config or load_config())

    app = FastAPI(title="College Resolver")
    app.state.resolution_service = service
    app.include_router(router)
    return app


def build_default_app() -> FastAPI:
    """App factory for uvicorn (`--factory`), configured from the environment."""
    load_dotenv()
    return create_app()
