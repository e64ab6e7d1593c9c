from typing import List, Optional, Set, Tuple
from sqlalchemy.orm import Session
from datetime import timedelta
import logging
import uuid

from domain.models import Post, Recipe, User, utcnow
from domain.schemas.post_schemas import PostCreate
from repositories import (
    CommentRepository,
    FollowRepository,
    LikeRepository,
    PostRepository,
    RecipeRepository,
    UserRepository,
)
from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError

logger = logging.getLogger("chefsire.posts")


class PostService:
    @staticmethod
    def create_post(db: Session, user: User, payload: PostCreate) -> Post:
        """
        Create a post, and its recipe when the post is a recipe post.

        Args:
            db: Database session
            user: Author (the authenticated caller)
            payload: Validated post body

        Returns:
            Post with author and recipe loaded

        Raises:
            ServiceValidationError: If a recipe post carries no recipe, or a
                plain post carries neither caption nor image
        """
        if payload.is_recipe and payload.recipe is None:
            raise ServiceValidationError("Recipe posts must include a recipe")
        if not payload.is_recipe and not (payload.caption or payload.image_url):
            raise ServiceValidationError("A post needs a caption or an image")

        try:
            post = Post(
                user_id=user.id,
                caption=payload.caption,
                image_url=payload.image_url,
                tags=payload.tags,
                is_recipe=payload.is_recipe,
            )
            db.add(post)
            db.flush()

            if payload.is_recipe and payload.recipe is not None:
                recipe_data = payload.recipe.model_dump()
                if not recipe_data.get("image_url"):
                    recipe_data["image_url"] = payload.image_url
                db.add(Recipe(post_id=post.id, **recipe_data))

            UserRepository.adjust_counter(user, "posts_count", 1)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error creating post for user %s", user.id)
            raise

        logger.info("User %s created post %s", user.id, post.id)
        return PostRepository(db).get_with_user(post.id)

    @staticmethod
    def get_post(db: Session, post_id: uuid.UUID) -> Post:
        post = PostRepository(db).get_with_user(post_id)
        if not post:
            raise NotFoundError(f"Post {post_id} not found")
        return post

    @staticmethod
    def liked_ids(db: Session, viewer_id: Optional[uuid.UUID], posts: List[Post]) -> Set[uuid.UUID]:
        if viewer_id is None:
            return set()
        return LikeRepository(db).liked_post_ids(viewer_id, [p.id for p in posts])

    @staticmethod
    def get_feed(db: Session, user_id: uuid.UUID, offset: int = 0, limit: int = 10) -> List[Post]:
        """Posts by the user and by everyone they follow, newest first"""
        author_ids = FollowRepository(db).following_ids(user_id) + [user_id]
        return PostRepository(db).feed(author_ids, offset, limit)

    @staticmethod
    def get_explore(db: Session, offset: int = 0, limit: int = 10) -> List[Post]:
        return PostRepository(db).explore(offset, limit)

    @staticmethod
    def get_user_posts(db: Session, user_id: uuid.UUID, offset: int = 0, limit: int = 10) -> List[Post]:
        return PostRepository(db).by_user(user_id, offset, limit)

    @staticmethod
    def delete_post(db: Session, post_id: uuid.UUID, user_id: uuid.UUID) -> None:
        """
        Delete a post owned by ``user_id`` together with its comments, likes
        and recipe, and decrement the author's post count.

        Raises:
            NotFoundError: If the post does not exist
            ForbiddenError: If the caller is not the author
        """
        post = PostRepository(db).get_by_id(post_id)
        if not post:
            raise NotFoundError(f"Post {post_id} not found")
        if post.user_id != user_id:
            raise ForbiddenError("You can only delete your own posts", code="NOT_OWNER")

        try:
            CommentRepository(db).delete_for_post(post_id)
            LikeRepository(db).delete_for_post(post_id)
            recipe = RecipeRepository(db).get_by_post_id(post_id)
            if recipe:
                db.delete(recipe)
            author = UserRepository(db).get_by_id(post.user_id)
            db.delete(post)
            if author:
                UserRepository.adjust_counter(author, "posts_count", -1)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error deleting post %s", post_id)
            raise
        logger.info("User %s deleted post %s", user_id, post_id)


class RecipeService:
    @staticmethod
    def get_recipe(db: Session, recipe_id: uuid.UUID) -> Recipe:
        recipe = RecipeRepository(db).get_by_id(recipe_id)
        if not recipe:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        return recipe

    @staticmethod
    def get_by_post(db: Session, post_id: uuid.UUID) -> Recipe:
        recipe = RecipeRepository(db).get_by_post_id(post_id)
        if not recipe:
            raise NotFoundError(f"No recipe for post {post_id}")
        return recipe

    @staticmethod
    def trending(db: Session, limit: int = 10, days: int = 7) -> List[Tuple[Recipe, Post, int]]:
        """Recipes posted in the last ``days`` days ranked by likes*2 + comments"""
        since = utcnow() - timedelta(days=days)
        return RecipeRepository(db).trending(since, limit)
