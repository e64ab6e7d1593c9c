from typing import List, Optional
from sqlalchemy.orm import Session
from datetime import datetime, time, timedelta
import logging
import uuid

from domain.enums import SuggestionType
from domain.models import AiSuggestion, User, utcnow
from repositories import (
    DrinkStatsRepository,
    NutritionRepository,
    RecipeRepository,
    SuggestionRepository,
)
from app.exceptions import NotFoundError

logger = logging.getLogger("chefsire.suggestions")

DEFAULT_PROTEIN_GOAL = 150
PROTEIN_GAP_RATIO = 0.7
STREAK_THRESHOLD = 2


class SuggestionService:
    @staticmethod
    def generate(db: Session, user: User, now: Optional[datetime] = None) -> List[AiSuggestion]:
        """
        Build today's suggestions for ``user``.

        Rules, each adding at most one suggestion:

        - morning (06:00-10:59): an Easy recipe as a morning pick-me-up
        - protein over the last 7 days averaging under 70% of the goal
        - a drink streak longer than 2 days

        Candidate recipes are the oldest matching ones, so the same data
        always yields the same suggestions. Rules without a candidate are
        skipped.
        """
        now = now or utcnow()
        recipes = RecipeRepository(db)
        suggestions = []

        def add(kind, recipe, title, reason, confidence, extra):
            suggestions.append(
                AiSuggestion(
                    user_id=user.id,
                    date=now,
                    suggestion_type=kind.value,
                    recipe_id=recipe.id,
                    title=title,
                    reason=reason,
                    confidence=confidence,
                    extra=extra,
                )
            )

        if 6 <= now.hour < 11:
            recipe = recipes.first_by_difficulty("Easy")
            if recipe:
                add(
                    SuggestionType.MORNING_DRINK,
                    recipe,
                    f"Start your day with {recipe.title}",
                    "Perfect morning energy boost to kickstart your day",
                    0.85,
                    {"time_of_day": "morning"},
                )

        logs = NutritionRepository(db).in_range(user.id, now - timedelta(days=7), now + timedelta(seconds=1))
        if logs:
            avg_protein = sum(float(log.protein or 0) for log in logs) / len(logs)
            target = (user.macro_goals or {}).get("protein") or DEFAULT_PROTEIN_GOAL
            if avg_protein < target * PROTEIN_GAP_RATIO:
                recipe = recipes.first_by_difficulty("Easy")
                if recipe:
                    add(
                        SuggestionType.NUTRITION_GAP,
                        recipe,
                        f"Boost your protein with {recipe.title}",
                        f"You've been averaging {avg_protein:.0f}g protein/day. "
                        f"Let's get you closer to your {target:g}g goal!",
                        0.92,
                        {"nutrition_gap": {"nutrient": "protein", "current": round(avg_protein, 1), "target": target}},
                    )

        stats = DrinkStatsRepository(db).get_by_id(user.id)
        if stats and stats.current_streak > STREAK_THRESHOLD:
            recipe = recipes.first()
            if recipe:
                add(
                    SuggestionType.MOOD_BASED,
                    recipe,
                    f"Keep your {stats.current_streak}-day streak alive!",
                    f"You're on fire! Try {recipe.title} to maintain your momentum",
                    0.88,
                    {"mood": "motivated", "recent_activity": "streak"},
                )

        if suggestions:
            db.add_all(suggestions)
            db.commit()
        logger.info("Generated %d suggestions for user %s", len(suggestions), user.id)
        return suggestions

    @staticmethod
    def today(db: Session, user: User, now: Optional[datetime] = None) -> List[AiSuggestion]:
        """Suggestions since midnight, generating a fresh set when there are none"""
        now = now or utcnow()
        midnight = datetime.combine(now.date(), time.min)
        existing = SuggestionRepository(db).active_since(user.id, midnight)
        if existing:
            return existing
        return SuggestionService.generate(db, user, now)

    @staticmethod
    def _mark(db: Session, user: User, suggestion_id: uuid.UUID, flag: str) -> AiSuggestion:
        repo = SuggestionRepository(db)
        suggestion = repo.get_owned(suggestion_id, user.id)
        if not suggestion:
            raise NotFoundError(f"Suggestion {suggestion_id} not found")
        now = utcnow()
        setattr(suggestion, flag, True)
        setattr(suggestion, f"{flag}_at", now)
        if not suggestion.viewed:
            suggestion.viewed = True
            suggestion.viewed_at = now
        return repo.update(suggestion)

    @staticmethod
    def accept(db: Session, user: User, suggestion_id: uuid.UUID) -> AiSuggestion:
        return SuggestionService._mark(db, user, suggestion_id, "accepted")

    @staticmethod
    def dismiss(db: Session, user: User, suggestion_id: uuid.UUID) -> AiSuggestion:
        return SuggestionService._mark(db, user, suggestion_id, "dismissed")
