"""
Post domain mappers.
Builds post DTOs with author, recipe and the caller's like state.
"""

from typing import Iterable, List, Optional, Set
from uuid import UUID

from domain.models import Post
from domain.schemas.post_schemas import PostResponse, RecipeResponse
from domain.mappers.user_mapper import UserMapper


class PostMapper:
    """Mapper for post transformations."""

    @staticmethod
    def to_response(post: Post, is_liked: bool = False) -> PostResponse:
        return PostResponse(
            id=post.id,
            user_id=post.user_id,
            caption=post.caption,
            image_url=post.image_url,
            tags=post.tags or [],
            is_recipe=post.is_recipe,
            likes_count=post.likes_count,
            comments_count=post.comments_count,
            created_at=post.created_at,
            user=UserMapper.to_public(post.user) if post.user else None,
            recipe=RecipeResponse.model_validate(post.recipe) if post.recipe else None,
            is_liked=is_liked,
        )

    @staticmethod
    def to_responses(
        posts: Iterable[Post], liked_ids: Optional[Set[UUID]] = None
    ) -> List[PostResponse]:
        liked_ids = liked_ids or set()
        return [PostMapper.to_response(p, p.id in liked_ids) for p in posts]
