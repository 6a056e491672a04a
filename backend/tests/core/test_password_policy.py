"""Password policy — length-only validation and strength hints."""

from gym_tracker.core.password_policy import (
    password_strength_feedback, validate_password_strength,
)


def test_length_bounds():
    assert validate_password_strength("").feedback == "Password is required"
    assert validate_password_strength("short").valid is False
    assert validate_password_strength("x" * 8).valid is True
    assert validate_password_strength("x" * 64).valid is True
    too_long = validate_password_strength("x" * 65)
    assert too_long.valid is False
    assert too_long.feedback == "Password must not exceed 64 characters"


def test_no_composition_rules():
    assert validate_password_strength("aaaaaaaa").valid is True


def test_feedback_tiers():
    assert password_strength_feedback("abcdefg") == "Too short. Add 1 more character."
    assert password_strength_feedback("abc") == "Too short. Add 5 more characters."
    assert password_strength_feedback("a" * 8).startswith("Acceptable")
    assert password_strength_feedback("a" * 12).startswith("Good")
    assert password_strength_feedback("a" * 16).startswith("Excellent")
