"""Category endpoints for the Loop API."""

from fastapi import APIRouter

from loop_forum.api.v1.dependencies import SessionDep
from loop_forum.schemas.category import CategoryResponse, CategoryWithCount
from loop_forum.services.categories import get_category, list_categories

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=list[CategoryWithCount])
async def list_all_categories(db: SessionDep) -> list[CategoryWithCount]:
    """List all categories with their post counts."""
    return list_categories(db)


@router.get("/{slug}", response_model=CategoryResponse)
async def get_category_by_slug(slug: str, db: SessionDep) -> CategoryResponse:
    """Get a single category by slug."""
    return CategoryResponse.model_validate(get_category(db, slug))
