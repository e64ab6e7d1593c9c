"""
Post Repository - Data access layer for posts, recipes, likes and bites
"""

from datetime import datetime
from typing import Optional, List, Set, Tuple, Iterable
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from repositories.base import BaseRepository
from domain.models import Post, Recipe, Like, Story


class PostRepository(BaseRepository[Post]):
    """Repository for post data access"""

    def __init__(self, db: Session):
        super().__init__(db, Post)

    def _with_relations(self):
        return self.db.query(Post).options(
            joinedload(Post.user), joinedload(Post.recipe)
        )

    def get_with_user(self, post_id: UUID) -> Optional[Post]:
        return self._with_relations().filter(Post.id == post_id).first()

    def feed(self, author_ids: Iterable[UUID], offset: int, limit: int) -> List[Post]:
        """Posts by any of ``author_ids``, newest first"""
        return (
            self._with_relations()
            .filter(Post.user_id.in_(list(author_ids)))
            .order_by(Post.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def explore(self, offset: int, limit: int) -> List[Post]:
        return (
            self._with_relations()
            .order_by(Post.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def by_user(self, user_id: UUID, offset: int, limit: int) -> List[Post]:
        return (
            self._with_relations()
            .filter(Post.user_id == user_id)
            .order_by(Post.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for recipe data access"""

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    def get_by_post_id(self, post_id: UUID) -> Optional[Recipe]:
        return self.db.query(Recipe).filter(Recipe.post_id == post_id).first()

    def trending(self, since: datetime, limit: int) -> List[Tuple[Recipe, Post, int]]:
        """Recipes from posts created after ``since`` ranked by likes*2 + comments"""
        score = (Post.likes_count * 2 + Post.comments_count).label("score")
        rows = (
            self.db.query(Recipe, Post, score)
            .join(Post, Recipe.post_id == Post.id)
            .filter(Post.created_at >= since)
            .order_by(score.desc(), Post.created_at.desc())
            .limit(limit)
            .all()
        )
        return [(r, p, int(s)) for r, p, s in rows]

    def first_by_difficulty(self, difficulty: str) -> Optional[Recipe]:
        return (
            self.db.query(Recipe)
            .filter(func.lower(Recipe.difficulty) == difficulty.lower())
            .order_by(Recipe.created_at)
            .first()
        )

    def first(self) -> Optional[Recipe]:
        return self.db.query(Recipe).order_by(Recipe.created_at).first()

    def with_ingredients(self, limit: int = 500) -> List[Recipe]:
        return (
            self.db.query(Recipe)
            .order_by(Recipe.created_at.desc())
            .limit(limit)
            .all()
        )

    def search_local(self, query: Optional[str], limit: int = 100) -> List[Recipe]:
        q = self.db.query(Recipe)
        if query:
            pattern = f"%{query.lower()}%"
            q = q.filter(
                or_(
                    func.lower(Recipe.title).like(pattern),
                    func.lower(Recipe.cuisine).like(pattern),
                    func.lower(Recipe.meal_type).like(pattern),
                )
            )
        return q.order_by(Recipe.created_at.desc()).limit(limit).all()


class LikeRepository(BaseRepository[Like]):
    def __init__(self, db: Session):
        super().__init__(db, Like)

    def get_pair(self, user_id: UUID, post_id: UUID) -> Optional[Like]:
        return (
            self.db.query(Like)
            .filter(Like.user_id == user_id, Like.post_id == post_id)
            .first()
        )

    def liked_post_ids(self, user_id: UUID, post_ids: Iterable[UUID]) -> Set[UUID]:
        """Subset of ``post_ids`` liked by ``user_id``"""
        ids = list(post_ids)
        if not ids:
            return set()
        rows = (
            self.db.query(Like.post_id)
            .filter(Like.user_id == user_id, Like.post_id.in_(ids))
            .all()
        )
        return {r[0] for r in rows}

    def delete_for_post(self, post_id: UUID) -> int:
        return (
            self.db.query(Like)
            .filter(Like.post_id == post_id)
            .delete(synchronize_session=False)
        )


class StoryRepository(BaseRepository[Story]):
    """Repository for bites (stories)"""

    def __init__(self, db: Session):
        super().__init__(db, Story)

    def active_for_users(self, user_ids: Iterable[UUID], now: datetime) -> List[Story]:
        return (
            self.db.query(Story)
            .options(joinedload(Story.user))
            .filter(Story.user_id.in_(list(user_ids)), Story.expires_at > now)
            .order_by(Story.created_at.desc())
            .all()
        )
