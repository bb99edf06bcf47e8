"""FriendRelationship aggregate for the social context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from social.domain.value_objects import ProfileId, RelationshipId, RelationshipStatus


@dataclass
class FriendRelationship:
    """A directed follow edge, follower -> following.

    Edges are not bidirectional: "followers of X" is the inverse query over
    the same edges. Re-following after an unfollow creates a new edge with a
    new id and created_at.

    State machine:
        nonexistent -> accepted -> nonexistent          (simple follow)
        nonexistent -> pending -> accepted | nonexistent (approval workflow)
        any -> blocked -> nonexistent                    (block / unblock)
    """

    id: RelationshipId
    follower_id: ProfileId
    following_id: ProfileId
    status: RelationshipStatus
    created_at: datetime

    def __post_init__(self) -> None:
        """Validate business rules after initialization."""
        if self.follower_id == self.following_id:
            raise ValueError("A profile cannot follow itself")

    @classmethod
    def create(
        cls,
        follower_id: ProfileId,
        following_id: ProfileId,
        status: RelationshipStatus = RelationshipStatus.ACCEPTED,
    ) -> FriendRelationship:
        """Factory method for a new edge.

        Raises:
            ValueError: If follower and following are the same profile
        """
        return cls(
            id=RelationshipId.generate(),
            follower_id=follower_id,
            following_id=following_id,
            status=status,
            created_at=datetime.now(UTC),
        )

    @property
    def is_accepted(self) -> bool:
        return self.status == RelationshipStatus.ACCEPTED

    @property
    def is_pending(self) -> bool:
        return self.status == RelationshipStatus.PENDING

    @property
    def is_blocked(self) -> bool:
        return self.status == RelationshipStatus.BLOCKED

    def accept(self) -> None:
        """Approve a pending follow request.

        Raises:
            ValueError: If the edge is not pending
        """
        if not self.is_pending:
            raise ValueError(f"Cannot accept a {self.status} relationship")
        self.status = RelationshipStatus.ACCEPTED

    def block(self) -> None:
        """Move the edge to blocked from any state."""
        self.status = RelationshipStatus.BLOCKED

    def sort_key(self) -> tuple[datetime, str]:
        """Ordering used to pick a winner among duplicate edges (oldest first)."""
        return (self.created_at, self.id.value)
