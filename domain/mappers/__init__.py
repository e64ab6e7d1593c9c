"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.user_mapper import UserMapper
from domain.mappers.post_mapper import PostMapper

__all__ = ["UserMapper", "PostMapper"]
