"""Pydantic models for relationship API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from social.application.value_objects import FollowOutcome, FollowResult
from social.domain.aggregates import FriendRelationship
from social.domain.value_objects import RelationshipStatus


class RelationshipResponse(BaseModel):
    """A directed follow edge."""

    id: str = Field(..., description="Relationship ID (ULID format)")
    follower_id: str
    following_id: str
    status: RelationshipStatus
    created_at: datetime

    @classmethod
    def from_domain(cls, relationship: FriendRelationship) -> RelationshipResponse:
        return cls(
            id=relationship.id.value,
            follower_id=relationship.follower_id.value,
            following_id=relationship.following_id.value,
            status=relationship.status,
            created_at=relationship.created_at,
        )


class FollowResponse(BaseModel):
    """Result of a follow call.

    ``outcome`` is pending_approval when the target must approve the request
    and duplicate_resolved when a concurrent follow for the same pair was
    merged into the oldest edge.
    """

    outcome: FollowOutcome
    relationship: RelationshipResponse

    @classmethod
    def from_result(cls, result: FollowResult) -> FollowResponse:
        return cls(
            outcome=result.outcome,
            relationship=RelationshipResponse.from_domain(result.relationship),
        )


class FollowStatusResponse(BaseModel):
    """Whether the caller follows a profile (accepted edges only)."""

    profile_id: str
    following: bool
