"""Unit tests for RelationshipService."""

from datetime import timedelta
from unittest.mock import create_autospec

import pytest

from social.application.observability import RelationshipServiceProbe
from social.application.services import PrivacyService, RelationshipService
from social.application.value_objects import FollowOutcome, ListLimits
from social.domain.aggregates import (
    FriendRelationship,
    SocialPrivacySettings,
    UserProfile,
)
from social.domain.value_objects import (
    FollowPermission,
    ProfileId,
    RelationshipStatus,
    SubjectId,
    Username,
)
from social.ports.exceptions import (
    AlreadyFollowingError,
    FollowNotPermittedError,
    NotFollowingError,
    ProfileNotFoundError,
    RequestNotFoundError,
    SelfFollowError,
)
from social.ports.repositories import IProfileRepository, IRelationshipRepository


@pytest.fixture
def mock_relationship_repository():
    return create_autospec(IRelationshipRepository, instance=True)


@pytest.fixture
def mock_profile_repository():
    return create_autospec(IProfileRepository, instance=True)


@pytest.fixture
def mock_privacy_service():
    privacy = create_autospec(PrivacyService, instance=True)
    privacy.get_settings.return_value = SocialPrivacySettings.defaults()
    return privacy


@pytest.fixture
def mock_probe():
    return create_autospec(RelationshipServiceProbe, instance=True)


@pytest.fixture
def isolated_service(
    mock_relationship_repository,
    mock_profile_repository,
    mock_privacy_service,
    mock_probe,
) -> RelationshipService:
    """RelationshipService over mock collaborators, for call-level assertions."""
    return RelationshipService(
        relationship_repository=mock_relationship_repository,
        profile_repository=mock_profile_repository,
        privacy_service=mock_privacy_service,
        fanout_concurrency=2,
        limits=ListLimits(maximum=2),
        probe=mock_probe,
    )


def _profile(username: str) -> UserProfile:
    return UserProfile.create(
        subject_id=SubjectId(f"subject-{username}"),
        username=Username.parse(username),
        display_name=username.title(),
    )


class TestFollow:
    """Tests for the simple follow flow."""

    @pytest.mark.asyncio
    async def test_follow_then_unfollow(self, services, register):
        alice = await register("alice")
        bob = await register("bob")

        result = await services.relationships.follow(alice.id, bob.id)

        assert result.outcome == FollowOutcome.FOLLOWED
        assert result.relationship.is_accepted
        assert await services.relationships.is_following(alice.id, bob.id)
        assert not await services.relationships.is_following(bob.id, alice.id)

        await services.relationships.unfollow(alice.id, bob.id)

        assert not await services.relationships.is_following(alice.id, bob.id)
        assert await services.relationships.list_following(alice.id) == []

    @pytest.mark.asyncio
    async def test_refollow_creates_a_new_edge(self, services, register):
        alice = await register("alice")
        bob = await register("bob")

        first = await services.relationships.follow(alice.id, bob.id)
        await services.relationships.unfollow(alice.id, bob.id)
        second = await services.relationships.follow(alice.id, bob.id)

        assert second.relationship.id != first.relationship.id

    @pytest.mark.asyncio
    async def test_self_follow_fails_before_any_store_call(
        self, isolated_service, mock_relationship_repository, mock_profile_repository
    ):
        me = ProfileId("usr_me")

        with pytest.raises(SelfFollowError):
            await isolated_service.follow(me, me)

        assert mock_relationship_repository.method_calls == []
        assert mock_profile_repository.method_calls == []

    @pytest.mark.asyncio
    async def test_duplicate_follow_keeps_exactly_one_edge(self, services, register):
        alice = await register("alice")
        bob = await register("bob")
        await services.relationships.follow(alice.id, bob.id)

        with pytest.raises(AlreadyFollowingError):
            await services.relationships.follow(alice.id, bob.id)

        followers = await services.relationships.list_followers(bob.id)
        assert [p.id for p in followers] == [alice.id]

    @pytest.mark.asyncio
    async def test_missing_target_is_not_found(self, services, register):
        alice = await register("alice")

        with pytest.raises(ProfileNotFoundError):
            await services.relationships.follow(alice.id, ProfileId("usr_ghost"))

    @pytest.mark.asyncio
    async def test_failure_is_reported(self, isolated_service, mock_probe):
        me = ProfileId("usr_me")
        with pytest.raises(SelfFollowError):
            await isolated_service.follow(me, me)
        mock_probe.follow_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_is_resolved_to_oldest_edge(
        self,
        isolated_service,
        mock_relationship_repository,
        mock_profile_repository,
        mock_probe,
    ):
        """A racing follow that slipped past the existence check is removed."""
        follower, target = ProfileId("usr_a"), ProfileId("usr_b")
        older = FriendRelationship.create(follower, target)
        older.created_at -= timedelta(seconds=1)
        mock_profile_repository.get_by_id.return_value = _profile("bob")

        async def list_between(a, b):
            if not mock_relationship_repository.save.called:
                return []
            created = mock_relationship_repository.save.call_args[0][0]
            return [older, created]

        mock_relationship_repository.list_between.side_effect = list_between

        result = await isolated_service.follow(follower, target)

        assert result.outcome == FollowOutcome.DUPLICATE_RESOLVED
        assert result.relationship is older
        saved = mock_relationship_repository.save.call_args[0][0]
        mock_relationship_repository.delete.assert_awaited_once_with(saved.id)
        mock_probe.duplicate_edges_resolved.assert_called_once_with(
            follower.value, target.value, 1
        )

    @pytest.mark.asyncio
    async def test_own_write_not_yet_visible_is_not_a_duplicate(
        self, isolated_service, mock_relationship_repository, mock_profile_repository
    ):
        mock_profile_repository.get_by_id.return_value = _profile("bob")
        mock_relationship_repository.list_between.return_value = []

        result = await isolated_service.follow(ProfileId("usr_a"), ProfileId("usr_b"))

        assert result.outcome == FollowOutcome.FOLLOWED
        mock_relationship_repository.delete.assert_not_called()


class TestFollowPermissions:
    """Tests for the target's follow permission and blocks."""

    @pytest.mark.asyncio
    async def test_approval_required_creates_pending_edge(self, services, register):
        alice = await register("alice")
        bob = await register("bob")
        await services.privacy.update_settings(
            bob.id,
            SocialPrivacySettings(who_can_follow=FollowPermission.APPROVAL_REQUIRED),
        )

        result = await services.relationships.follow(alice.id, bob.id)

        assert result.outcome == FollowOutcome.PENDING_APPROVAL
        assert result.relationship.status == RelationshipStatus.PENDING
        assert not await services.relationships.is_following(alice.id, bob.id)
        pending = await services.relationships.list_pending_requests(bob.id)
        assert [p.id for p in pending] == [alice.id]

    @pytest.mark.asyncio
    async def test_accepting_request_completes_follow(self, services, register):
        alice = await register("alice")
        bob = await register("bob")
        await services.privacy.update_settings(
            bob.id,
            SocialPrivacySettings(who_can_follow=FollowPermission.APPROVAL_REQUIRED),
        )
        await services.relationships.follow(alice.id, bob.id)

        edge = await services.relationships.accept_request(bob.id, alice.id)

        assert edge.is_accepted
        assert await services.relationships.is_following(alice.id, bob.id)
        assert await services.relationships.list_pending_requests(bob.id) == []

    @pytest.mark.asyncio
    async def test_declining_request_removes_edge(self, services, register):
        alice = await register("alice")
        bob = await register("bob")
        await services.privacy.update_settings(
            bob.id,
            SocialPrivacySettings(who_can_follow=FollowPermission.APPROVAL_REQUIRED),
        )
        await services.relationships.follow(alice.id, bob.id)

        await services.relationships.decline_request(bob.id, alice.id)

        assert await services.relationships.list_pending_requests(bob.id) == []
        with pytest.raises(RequestNotFoundError):
            await services.relationships.accept_request(bob.id, alice.id)

    @pytest.mark.asyncio
    async def test_accepting_without_request_fails(self, services, register):
        alice = await register("alice")
        bob = await register("bob")
        await services.relationships.follow(alice.id, bob.id)

        with pytest.raises(RequestNotFoundError):
            await services.relationships.accept_request(bob.id, alice.id)

    @pytest.mark.parametrize(
        "permission", [FollowPermission.NOBODY, FollowPermission.FRIENDS_ONLY]
    )
    @pytest.mark.asyncio
    async def test_closed_permissions_refuse_follow(
        self, services, register, permission
    ):
        alice = await register("alice")
        bob = await register("bob")
        await services.privacy.update_settings(
            bob.id, SocialPrivacySettings(who_can_follow=permission)
        )

        with pytest.raises(FollowNotPermittedError):
            await services.relationships.follow(alice.id, bob.id)

        assert await services.relationships.list_followers(bob.id) == []

    @pytest.mark.asyncio
    async def test_blocked_profile_cannot_follow(self, services, register):
        alice = await register("alice")
        bob = await register("bob")
        await services.relationships.block(bob.id, alice.id)

        with pytest.raises(FollowNotPermittedError):
            await services.relationships.follow(alice.id, bob.id)


class TestBlocking:
    """Tests for block and unblock."""

    @pytest.mark.asyncio
    async def test_block_converts_existing_follow(self, services, register):
        alice = await register("alice")
        bob = await register("bob")
        await services.relationships.follow(alice.id, bob.id)

        edge = await services.relationships.block(bob.id, alice.id)

        assert edge.is_blocked
        assert await services.relationships.list_followers(bob.id) == []

    @pytest.mark.asyncio
    async def test_blocked_follower_cannot_unfollow_the_block_away(
        self, services, register
    ):
        alice = await register("alice")
        bob = await register("bob")
        await services.relationships.block(bob.id, alice.id)

        with pytest.raises(NotFollowingError):
            await services.relationships.unfollow(alice.id, bob.id)

    @pytest.mark.asyncio
    async def test_unblock_deletes_edge(self, services, register):
        alice = await register("alice")
        bob = await register("bob")
        await services.relationships.follow(alice.id, bob.id)
        await services.relationships.block(bob.id, alice.id)

        await services.relationships.unblock(bob.id, alice.id)

        assert not await services.relationships.is_following(alice.id, bob.id)
        result = await services.relationships.follow(alice.id, bob.id)
        assert result.outcome == FollowOutcome.FOLLOWED

    @pytest.mark.asyncio
    async def test_unblock_without_block_fails(self, services, register):
        alice = await register("alice")
        bob = await register("bob")

        with pytest.raises(NotFollowingError):
            await services.relationships.unblock(bob.id, alice.id)

    @pytest.mark.asyncio
    async def test_cannot_block_self(self, isolated_service):
        me = ProfileId("usr_me")
        with pytest.raises(SelfFollowError):
            await isolated_service.block(me, me)


class TestLists:
    """Tests for adjacency lists."""

    @pytest.mark.asyncio
    async def test_following_in_edge_order_with_limit(self, services, register):
        alice = await register("alice")
        bob = await register("bob")
        carol = await register("carol")
        dave = await register("dave")
        for target in (carol, bob, dave):
            await services.relationships.follow(alice.id, target.id)

        following = await services.relationships.list_following(alice.id)
        limited = await services.relationships.list_following(alice.id, limit=2)

        assert [p.id for p in following] == [carol.id, bob.id, dave.id]
        assert [p.id for p in limited] == [carol.id, bob.id]

    @pytest.mark.asyncio
    async def test_edges_to_missing_profiles_are_skipped(
        self,
        isolated_service,
        mock_relationship_repository,
        mock_profile_repository,
        mock_probe,
    ):
        me = ProfileId("usr_me")
        bob = _profile("bob")
        mock_relationship_repository.list_by_follower.return_value = [
            FriendRelationship.create(me, ProfileId("usr_gone")),
            FriendRelationship.create(me, bob.id),
        ]

        async def get_by_id(profile_id):
            return bob if profile_id == bob.id else None

        mock_profile_repository.get_by_id.side_effect = get_by_id

        following = await isolated_service.list_following(me)

        assert following == [bob]
        mock_probe.profile_unresolved.assert_called_once_with("usr_gone", "not found")

    @pytest.mark.asyncio
    async def test_limits_are_capped_at_maximum(
        self, isolated_service, mock_relationship_repository, mock_profile_repository
    ):
        me = ProfileId("usr_me")
        profiles = {p.id: p for p in map(_profile, ("bob", "carol", "dave"))}
        mock_relationship_repository.list_by_follower.return_value = [
            FriendRelationship.create(me, profile_id) for profile_id in profiles
        ]

        async def get_by_id(profile_id):
            return profiles[profile_id]

        mock_profile_repository.get_by_id.side_effect = get_by_id

        everything = await isolated_service.list_following(me)
        capped = await isolated_service.list_following(me, limit=100)

        assert len(everything) == 3
        assert [p.username.value for p in capped] == ["bob", "carol"]

    @pytest.mark.asyncio
    async def test_negative_limit_rejected(self, services, register):
        alice = await register("alice")
        bob = await register("bob")
        await services.relationships.follow(alice.id, bob.id)

        with pytest.raises(ValueError, match="negative"):
            await services.relationships.list_following(alice.id, limit=-1)
        with pytest.raises(ValueError, match="negative"):
            await services.relationships.list_followers(bob.id, limit=-1)
        with pytest.raises(ValueError, match="negative"):
            await services.relationships.list_pending_requests(bob.id, limit=-1)

    @pytest.mark.asyncio
    async def test_unknown_user_has_empty_lists(self, services):
        nobody = ProfileId("usr_nobody")
        assert await services.relationships.list_following(nobody) == []
        assert await services.relationships.list_followers(nobody) == []


class TestPurge:
    @pytest.mark.asyncio
    async def test_removes_edges_in_both_directions(self, services, register):
        alice = await register("alice")
        bob = await register("bob")
        carol = await register("carol")
        await services.relationships.follow(alice.id, bob.id)
        await services.relationships.follow(carol.id, alice.id)
        await services.relationships.follow(bob.id, carol.id)

        await services.relationships.purge_profile(alice.id)

        assert await services.relationships.list_followers(bob.id) == []
        assert await services.relationships.list_following(carol.id) == []
        remaining = await services.relationships.list_following(bob.id)
        assert [p.id for p in remaining] == [carol.id]
