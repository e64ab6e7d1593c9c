from typing import Dict, List
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging
import uuid

from domain.enums import FollowRequestStatus, NotificationType
from domain.models import Follow, FollowRequest, User
from repositories import FollowRepository, UserRepository
from services.notification_service import NotificationService
from app.exceptions import ConflictError, ForbiddenError, NotFoundError, ServiceValidationError

logger = logging.getLogger("chefsire.follows")


class FollowService:
    @staticmethod
    def _create_follow(db: Session, follower: User, target: User) -> Follow:
        follow = FollowRepository(db).add(Follow(follower_id=follower.id, following_id=target.id))
        UserRepository.adjust_counter(follower, "following_count", 1)
        UserRepository.adjust_counter(target, "followers_count", 1)
        NotificationService.notify(
            db,
            user_id=target.id,
            actor_id=follower.id,
            type=NotificationType.FOLLOW,
            title="New follower",
            message=f"{follower.display_name} started following you",
            data={"follower_id": str(follower.id)},
        )
        return follow

    @staticmethod
    def follow(db: Session, follower: User, target_id: uuid.UUID) -> Dict[str, str]:
        """
        Follow a user, or ask to follow a private account.

        Returns:
            ``{"status": "following"}`` or ``{"status": "requested"}``

        Raises:
            ServiceValidationError: When following yourself
            NotFoundError: If the target does not exist
            ConflictError: If already following or a request is pending
        """
        if follower.id == target_id:
            raise ServiceValidationError("You cannot follow yourself", code="SELF_FOLLOW")
        target = UserRepository(db).get_by_id(target_id)
        if not target:
            raise NotFoundError(f"User {target_id} not found")

        repo = FollowRepository(db)
        if repo.get_pair(follower.id, target_id):
            raise ConflictError("Already following this user", code="ALREADY_FOLLOWING")

        try:
            if target.is_private:
                existing = repo.get_request_pair(follower.id, target_id)
                if existing and existing.status == FollowRequestStatus.PENDING.value:
                    raise ConflictError("Follow request already pending", code="REQUEST_PENDING")
                if existing:
                    existing.status = FollowRequestStatus.PENDING.value
                else:
                    db.add(FollowRequest(requester_id=follower.id, target_id=target_id))
                NotificationService.notify(
                    db,
                    user_id=target_id,
                    actor_id=follower.id,
                    type=NotificationType.FOLLOW_REQUEST,
                    title="Follow request",
                    message=f"{follower.display_name} wants to follow you",
                    data={"requester_id": str(follower.id)},
                )
                db.commit()
                return {"status": "requested"}

            FollowService._create_follow(db, follower, target)
            db.commit()
            return {"status": "following"}
        except IntegrityError:
            db.rollback()
            raise ConflictError("Already following this user", code="ALREADY_FOLLOWING")

    @staticmethod
    def unfollow(db: Session, follower: User, target_id: uuid.UUID) -> None:
        repo = FollowRepository(db)
        follow = repo.get_pair(follower.id, target_id)
        if not follow:
            raise NotFoundError("You are not following this user")
        target = UserRepository(db).get_by_id(target_id)
        db.delete(follow)
        UserRepository.adjust_counter(follower, "following_count", -1)
        if target:
            UserRepository.adjust_counter(target, "followers_count", -1)
        db.commit()

    @staticmethod
    def status(db: Session, follower_id: uuid.UUID, target_id: uuid.UUID) -> Dict[str, bool]:
        repo = FollowRepository(db)
        request = repo.get_request_pair(follower_id, target_id)
        return {
            "following": repo.get_pair(follower_id, target_id) is not None,
            "requested": bool(request and request.status == FollowRequestStatus.PENDING.value),
        }

    @staticmethod
    def followers(db: Session, user_id: uuid.UUID, offset: int = 0, limit: int = 10) -> List[User]:
        return FollowRepository(db).followers_of(user_id, offset, limit)

    @staticmethod
    def following(db: Session, user_id: uuid.UUID, offset: int = 0, limit: int = 10) -> List[User]:
        return FollowRepository(db).following_of(user_id, offset, limit)

    @staticmethod
    def pending_requests(db: Session, user_id: uuid.UUID) -> List[FollowRequest]:
        return FollowRepository(db).pending_requests_for(user_id)

    @staticmethod
    def respond_to_request(db: Session, user: User, request_id: uuid.UUID, accept: bool) -> FollowRequest:
        """
        Accept or reject a pending follow request addressed to ``user``.

        Raises:
            NotFoundError: If the request does not exist
            ForbiddenError: If the request targets someone else
            ServiceValidationError: If the request was already answered
        """
        repo = FollowRepository(db)
        request = repo.get_request(request_id)
        if not request:
            raise NotFoundError(f"Follow request {request_id} not found")
        if request.target_id != user.id:
            raise ForbiddenError("This follow request is not addressed to you", code="NOT_OWNER")
        if request.status != FollowRequestStatus.PENDING.value:
            raise ServiceValidationError("Follow request was already answered")

        try:
            if accept:
                request.status = FollowRequestStatus.ACCEPTED.value
                requester = UserRepository(db).get_by_id(request.requester_id)
                if requester and not repo.get_pair(requester.id, user.id):
                    FollowService._create_follow(db, requester, user)
            else:
                request.status = FollowRequestStatus.REJECTED.value
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Error answering follow request %s", request_id)
            raise
        db.refresh(request)
        return request
