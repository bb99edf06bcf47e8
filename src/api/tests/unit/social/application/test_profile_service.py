"""Unit tests for ProfileService."""

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from social.application.observability import ProfileServiceProbe
from social.application.services import (
    PrivacyService,
    ProfileService,
    RelationshipService,
)
from social.application.value_objects import ProfileUpdate
from social.domain.aggregates import SocialPrivacySettings, UserProfile
from social.domain.value_objects import (
    ProfileField,
    ProfileId,
    ProfileVisibility,
    SubjectId,
    Username,
)
from social.ports.exceptions import (
    AlreadyRegisteredError,
    ProfileNotFoundError,
    UsernameTakenError,
)
from social.ports.repositories import IProfileRepository


@pytest.fixture
def mock_profile_repository():
    """Create mock profile repository."""
    return create_autospec(IProfileRepository, instance=True)


@pytest.fixture
def mock_probe():
    """Create mock profile service probe."""
    return create_autospec(ProfileServiceProbe, instance=True)


@pytest.fixture
def isolated_service(mock_profile_repository, mock_probe) -> ProfileService:
    """ProfileService over a mock repository, for call-level assertions."""
    return ProfileService(
        profile_repository=mock_profile_repository,
        relationship_service=create_autospec(RelationshipService, instance=True),
        privacy_service=create_autospec(PrivacyService, instance=True),
        probe=mock_probe,
    )


class TestCreateProfile:
    """Tests for create_profile."""

    @pytest.mark.asyncio
    async def test_read_your_own_write_by_username(self, services):
        created = await services.profiles.create_profile(
            subject_id=SubjectId("subject-1"),
            username="Vin_Lifts",
            display_name="Vin",
            bio="Powerlifter",
        )

        found = await services.profiles.get_profile_by_username("vin_lifts")

        assert found is not None
        assert found.id == created.id
        assert found.username.value == "vin_lifts"
        assert found.display_name == "Vin"
        assert found.bio == "Powerlifter"

    @pytest.mark.asyncio
    async def test_short_username_fails_before_any_store_call(
        self, isolated_service, mock_profile_repository
    ):
        with pytest.raises(ValueError, match="at least 3"):
            await isolated_service.create_profile(
                subject_id=SubjectId("subject-1"), username="ab", display_name="Al"
            )

        assert mock_profile_repository.method_calls == []

    @pytest.mark.asyncio
    async def test_blank_display_name_fails_before_any_store_call(
        self, isolated_service, mock_profile_repository
    ):
        with pytest.raises(ValueError, match="Display name"):
            await isolated_service.create_profile(
                subject_id=SubjectId("subject-1"), username="alice", display_name=" "
            )

        assert mock_profile_repository.method_calls == []

    @pytest.mark.asyncio
    async def test_second_registration_for_subject_fails(self, services, register):
        await register("alice")

        with pytest.raises(AlreadyRegisteredError):
            await services.profiles.create_profile(
                subject_id=SubjectId("subject-alice"),
                username="alice_two",
                display_name="Alice",
            )

    @pytest.mark.asyncio
    async def test_username_taken_is_case_insensitive(self, services, register):
        await register("alice")

        with pytest.raises(UsernameTakenError):
            await services.profiles.create_profile(
                subject_id=SubjectId("someone-else"),
                username="ALICE",
                display_name="Other Alice",
            )

    @pytest.mark.asyncio
    async def test_reports_collision_found_after_write(
        self, isolated_service, mock_profile_repository, mock_probe
    ):
        """A racing registration inside the replication window is reported."""
        racer = UserProfile.create(
            subject_id=SubjectId("racer"),
            username=Username.parse("alice"),
            display_name="Racer",
        )
        ours = UserProfile.create(
            subject_id=SubjectId("subject-1"),
            username=Username.parse("alice"),
            display_name="Alice",
        )
        mock_profile_repository.get_by_id.return_value = None
        mock_profile_repository.list_by_username.side_effect = [[], [racer, ours]]

        created = await isolated_service.create_profile(
            subject_id=SubjectId("subject-1"), username="alice", display_name="Alice"
        )

        mock_probe.username_collision_detected.assert_called_once()
        username, ids = mock_probe.username_collision_detected.call_args[0]
        assert username == "alice"
        assert ids == sorted([racer.id.value, created.id.value])

    @pytest.mark.asyncio
    async def test_failure_is_reported_and_reraised(
        self, isolated_service, mock_profile_repository, mock_probe
    ):
        mock_profile_repository.get_by_id.side_effect = RuntimeError("store down")

        with pytest.raises(RuntimeError):
            await isolated_service.create_profile(
                subject_id=SubjectId("subject-1"), username="alice", display_name="A"
            )

        mock_probe.profile_creation_failed.assert_called_once()


class TestLookup:
    """Tests for get_profile and get_profile_by_username."""

    @pytest.mark.asyncio
    async def test_get_missing_profile_raises(self, services):
        with pytest.raises(ProfileNotFoundError):
            await services.profiles.get_profile(ProfileId("usr_missing"))

    @pytest.mark.asyncio
    async def test_lookup_by_username_ignores_case(self, services, register):
        alice = await register("alice")
        found = await services.profiles.get_profile_by_username("AlIcE")
        assert found == alice

    @pytest.mark.asyncio
    async def test_invalid_username_is_simply_not_found(
        self, isolated_service, mock_profile_repository
    ):
        assert await isolated_service.get_profile_by_username("a!") is None
        mock_profile_repository.list_by_username.assert_not_called()


class TestUpdateProfile:
    """Tests for update_profile."""

    @pytest.mark.asyncio
    async def test_updates_only_given_fields(self, services, register):
        alice = await register("alice")

        updated = await services.profiles.update_profile(
            alice.id, ProfileUpdate(bio="New bio", total_workouts=12)
        )

        assert updated.bio == "New bio"
        assert updated.total_workouts == 12
        assert updated.display_name == "Alice"
        stored = await services.profiles.get_profile(alice.id)
        assert stored.bio == "New bio"

    @pytest.mark.asyncio
    async def test_username_change_rechecks_uniqueness(self, services, register):
        alice = await register("alice")
        await register("bob")

        with pytest.raises(UsernameTakenError):
            await services.profiles.update_profile(
                alice.id, ProfileUpdate(username="Bob")
            )

    @pytest.mark.asyncio
    async def test_username_change_to_own_name_in_new_case_is_allowed(
        self, services, register
    ):
        alice = await register("alice")
        updated = await services.profiles.update_profile(
            alice.id, ProfileUpdate(username="ALICE")
        )
        assert updated.username.value == "alice"

    @pytest.mark.asyncio
    async def test_negative_counter_fails_before_any_store_call(
        self, isolated_service, mock_profile_repository
    ):
        with pytest.raises(ValueError, match="cannot be negative"):
            await isolated_service.update_profile(
                ProfileId("usr_a"), ProfileUpdate(total_volume=-1)
            )
        assert mock_profile_repository.method_calls == []

    @pytest.mark.asyncio
    async def test_update_missing_profile_raises(self, services):
        with pytest.raises(ProfileNotFoundError):
            await services.profiles.update_profile(
                ProfileId("usr_missing"), ProfileUpdate(bio="x")
            )


class TestSearchAndSuggestions:
    """Tests for search_profiles and suggest_profiles."""

    @pytest.mark.asyncio
    async def test_search_excludes_caller(self, services, register):
        caller = await register("lifter_a")
        await register("lifter_b")

        results = await services.profiles.search_profiles(caller.id, "LIFTER")

        assert [p.username.value for p in results] == ["lifter_b"]

    @pytest.mark.asyncio
    async def test_blank_search_does_not_query(
        self, isolated_service, mock_profile_repository
    ):
        assert await isolated_service.search_profiles(ProfileId("usr_a"), "  ") == []
        mock_profile_repository.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_limit_is_capped_at_maximum(
        self, isolated_service, mock_profile_repository
    ):
        mock_profile_repository.search.return_value = []
        await isolated_service.search_profiles(ProfileId("usr_a"), "x", limit=1000)
        assert mock_profile_repository.search.call_args.kwargs["limit"] == 50

    @pytest.mark.asyncio
    async def test_negative_limit_is_rejected(self, services):
        with pytest.raises(ValueError, match="limit"):
            await services.profiles.search_profiles(ProfileId("usr_a"), "x", limit=-1)

    @pytest.mark.asyncio
    async def test_suggestions_prefer_most_active(self, services, register):
        caller = await register("caller")
        casual = await register("casual")
        regular = await register("regular")
        await services.profiles.update_profile(
            casual.id, ProfileUpdate(total_workouts=1)
        )
        await services.profiles.update_profile(
            regular.id, ProfileUpdate(total_workouts=40)
        )

        results = await services.profiles.suggest_profiles(caller.id, limit=2)

        assert [p.id for p in results] == [regular.id, casual.id]


class TestViewProfile:
    """Tests for view_profile privacy projection."""

    @pytest.mark.asyncio
    async def test_hidden_fields_are_none(self, services, register):
        owner = await register("owner")
        viewer = await register("viewer")
        await services.profiles.update_profile(owner.id, ProfileUpdate(bio="secret"))
        await services.privacy.update_settings(
            owner.id, SocialPrivacySettings(show_bio=False)
        )

        view = await services.profiles.view_profile(viewer.id, owner.id)

        assert view.bio is None
        assert ProfileField.BIO not in view.visible_fields
        assert view.username == "owner"

    @pytest.mark.asyncio
    async def test_friends_only_opens_up_after_follow(self, services, register):
        owner = await register("owner")
        viewer = await register("viewer")
        await services.profiles.update_profile(owner.id, ProfileUpdate(bio="hello"))
        await services.privacy.update_settings(
            owner.id,
            SocialPrivacySettings(profile_visibility=ProfileVisibility.FRIENDS_ONLY),
        )

        before = await services.profiles.view_profile(viewer.id, owner.id)
        await services.relationships.follow(viewer.id, owner.id)
        after = await services.profiles.view_profile(viewer.id, owner.id)

        assert before.bio is None
        assert after.bio == "hello"

    @pytest.mark.asyncio
    async def test_nobody_profile_is_searchable_but_shows_identity_only(
        self, services, register
    ):
        owner = await register("hermit")
        viewer = await register("viewer")
        await services.profiles.update_profile(
            owner.id, ProfileUpdate(bio="private", total_workouts=9)
        )
        await services.privacy.update_settings(
            owner.id,
            SocialPrivacySettings(profile_visibility=ProfileVisibility.NOBODY),
        )

        found = await services.profiles.search_profiles(viewer.id, "herm")
        view = await services.profiles.view_profile(viewer.id, owner.id)

        assert [p.id for p in found] == [owner.id]
        assert view.visible_fields == {
            ProfileField.USERNAME,
            ProfileField.DISPLAY_NAME,
        }
        assert view.bio is None
        assert view.total_workouts is None


class TestDeleteProfile:
    """Tests for delete_profile cascades."""

    @pytest.mark.asyncio
    async def test_cascades_run_in_order_before_delete(
        self, isolated_service, mock_profile_repository, mock_probe
    ):
        profile = UserProfile.create(
            subject_id=SubjectId("s"),
            username=Username.parse("alice"),
            display_name="Alice",
        )
        mock_profile_repository.get_by_id.return_value = profile
        manager = MagicMock()
        first, second = AsyncMock(), AsyncMock()
        manager.attach_mock(first.purge_profile, "first")
        manager.attach_mock(second.purge_profile, "second")
        manager.attach_mock(mock_profile_repository.delete, "delete")
        isolated_service.add_cascade(first)
        isolated_service.add_cascade(second)

        await isolated_service.delete_profile(profile.id)

        assert [c[0] for c in manager.mock_calls] == ["first", "second", "delete"]
        mock_probe.profile_deleted.assert_called_once_with(profile.id.value)

    @pytest.mark.asyncio
    async def test_failed_cascade_keeps_profile(
        self, isolated_service, mock_profile_repository
    ):
        mock_profile_repository.get_by_id.return_value = MagicMock()
        failing = AsyncMock()
        failing.purge_profile.side_effect = RuntimeError("boom")
        isolated_service.add_cascade(failing)

        with pytest.raises(RuntimeError):
            await isolated_service.delete_profile(ProfileId("usr_a"))

        mock_profile_repository.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_removes_everything_hanging_off_the_profile(
        self, services, register, summary
    ):
        alice = await register("alice")
        bob = await register("bob")
        await services.relationships.follow(bob.id, alice.id)
        await services.relationships.follow(alice.id, bob.id)
        await services.feed.share_workout(alice.id, summary())
        await services.privacy.update_settings(
            alice.id, SocialPrivacySettings(show_bio=False)
        )

        await services.profiles.delete_profile(alice.id)

        with pytest.raises(ProfileNotFoundError):
            await services.profiles.get_profile(alice.id)
        assert await services.relationships.list_followers(bob.id) == []
        assert await services.relationships.list_following(bob.id) == []
        assert await services.feed.load_feed(bob.id) == []
        assert await services.privacy.get_settings(alice.id) == (
            SocialPrivacySettings.defaults()
        )
