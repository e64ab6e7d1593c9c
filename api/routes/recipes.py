"""Recipe routes: lookup, trending, search and pantry matches"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List, Optional

from api.dependencies import get_current_user
from domain.mappers import PostMapper
from domain.models import User, get_db_session
from domain.schemas.marketplace_schemas import ProductResponse
from domain.schemas.planning_schemas import PantryRecipeMatch
from domain.schemas.post_schemas import RecipeResponse, TrendingRecipeResponse
from services.marketplace_service import MarketplaceService
from services.pantry_service import PantryService
from services.post_service import RecipeService
from services.recipe_search_service import RecipeSearchService

router = APIRouter(prefix="/recipes", tags=["Recipes"])
logger = logging.getLogger("chefsire.api.recipes")


def _split(values: Optional[List[str]]) -> List[str]:
    """Accept both ``?diets=a,b`` and ``?diets=a&diets=b``"""
    out: List[str] = []
    for value in values or []:
        out.extend(part.strip() for part in value.split(",") if part.strip())
    return out


@router.get("/trending", response_model=List[TrendingRecipeResponse])
def trending(limit: int = Query(10, ge=1, le=50), db: Session = Depends(get_db_session)):
    """Recipes from the last week ranked by likes * 2 + comments"""
    return [
        TrendingRecipeResponse(
            recipe=RecipeResponse.model_validate(recipe),
            post=PostMapper.to_response(post),
            score=score,
        )
        for recipe, post, score in RecipeService.trending(db, limit)
    ]


@router.get("/search")
def search_recipes(
    q: Optional[str] = Query(None, description="Free-text title query"),
    cuisines: Optional[List[str]] = Query(None),
    diets: Optional[List[str]] = Query(None),
    meal_types: Optional[List[str]] = Query(None),
    limit: int = Query(24, ge=1, le=50),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db_session),
):
    """Search local recipes together with TheMealDB"""
    return RecipeSearchService.search(
        db,
        q=q,
        cuisines=_split(cuisines),
        diets=_split(diets),
        meal_types=_split(meal_types),
        limit=limit,
        offset=offset,
    )


@router.get("/pantry-matches", response_model=List[PantryRecipeMatch])
def pantry_matches(
    require_all: bool = Query(False, description="Only recipes nothing is missing for"),
    max_missing: int = Query(3, ge=0, le=50),
    limit: int = Query(20, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Recipes ranked by how much of them the caller's pantry covers"""
    return PantryService.recipe_matches(
        db, user.id, require_all=require_all, max_missing=max_missing, limit=limit
    )


@router.get("/by-post/{post_id}", response_model=RecipeResponse)
def recipe_by_post(post_id: UUID, db: Session = Depends(get_db_session)):
    return RecipeService.get_by_post(db, post_id)


@router.get("/{recipe_id}/suggested-ingredients", response_model=List[ProductResponse])
def suggested_ingredients(recipe_id: UUID, db: Session = Depends(get_db_session)):
    """Marketplace ingredient products that match the recipe's ingredient list"""
    return MarketplaceService.suggested_ingredients(db, recipe_id)


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(recipe_id: UUID, db: Session = Depends(get_db_session)):
    return RecipeService.get_recipe(db, recipe_id)
