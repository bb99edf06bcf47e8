"""Unit tests for social domain value objects."""

import pytest
from ulid import ULID

from social.domain.value_objects import (
    ProfileId,
    RelationshipId,
    SubjectId,
    Username,
    WorkoutId,
)


class TestUsername:
    """Tests for Username parsing."""

    def test_case_folds_username(self):
        """Usernames are stored in lower case."""
        assert Username.parse("Vin_Lifts").value == "vin_lifts"

    def test_strips_surrounding_whitespace(self):
        assert Username.parse("  alice  ").value == "alice"

    def test_case_variants_are_equal(self):
        """Usernames compare case-insensitively through their canonical form."""
        assert Username.parse("ALICE") == Username.parse("alice")

    def test_rejects_too_short(self):
        with pytest.raises(ValueError, match="at least 3"):
            Username.parse("ab")

    def test_rejects_too_long(self):
        with pytest.raises(ValueError, match="at most 30"):
            Username.parse("a" * 31)

    def test_accepts_boundary_lengths(self):
        assert Username.parse("abc").value == "abc"
        assert Username.parse("a" * 30).value == "a" * 30

    @pytest.mark.parametrize("raw", ["has space", "dash-name", "dot.name", "émile"])
    def test_rejects_invalid_characters(self, raw):
        with pytest.raises(ValueError, match="letters, numbers and underscores"):
            Username.parse(raw)


class TestProfileId:
    """Tests for ProfileId derivation."""

    def test_derived_deterministically_from_subject(self):
        """The same subject always maps to the same profile id."""
        first = ProfileId.from_subject(SubjectId("auth0|123"))
        second = ProfileId.from_subject(SubjectId("auth0|123"))
        assert first == second
        assert first.value.startswith("usr_")

    def test_different_subjects_get_different_ids(self):
        assert ProfileId.from_subject(SubjectId("a")) != ProfileId.from_subject(
            SubjectId("b")
        )

    def test_from_string_rejects_empty(self):
        with pytest.raises(ValueError):
            ProfileId.from_string("  ")


class TestSubjectId:
    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            SubjectId("")


class TestGeneratedIds:
    """Tests for ULID-backed identifiers."""

    def test_relationship_id_is_ulid(self):
        ULID.from_str(RelationshipId.generate().value)

    def test_workout_id_round_trips_from_string(self):
        workout_id = WorkoutId.generate()
        assert WorkoutId.from_string(workout_id.value) == workout_id

    def test_workout_id_rejects_non_ulid(self):
        with pytest.raises(ValueError, match="Invalid WorkoutId"):
            WorkoutId.from_string("not-a-ulid")
