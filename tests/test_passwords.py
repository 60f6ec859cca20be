"""Tests for password hashing and strength rules."""

import base64

import pytest

from employee_mgmt.services.passwords import hash_password, is_strong_password, verify_password


class TestHashing:
    """Test salted SHA-256 hashes."""

    def test_round_trip(self):
        stored = hash_password("Password123!")

        assert verify_password("Password123!", stored) is True
        assert verify_password("password123!", stored) is False

    def test_fresh_salt_each_time(self):
        assert hash_password("Password123!") != hash_password("Password123!")

    def test_fixed_salt_is_deterministic(self):
        salt = b"0123456789abcdef"

        stored = hash_password("Password123!", salt)

        assert stored == hash_password("Password123!", salt)
        assert stored.split(":")[0] == base64.b64encode(salt).decode("ascii")

    @pytest.mark.parametrize("stored", ["", "no-colon", "!!!:@@@", ":"])
    def test_malformed_hash_fails(self, stored):
        assert verify_password("Password123!", stored) is False

    def test_empty_password_fails(self):
        assert verify_password("", hash_password("Password123!")) is False


class TestStrength:
    """Test password strength rules."""

    @pytest.mark.parametrize("password", ["Password1", "aB3defgh", "Password123!"])
    def test_strong(self, password):
        assert is_strong_password(password) is True

    @pytest.mark.parametrize(
        "password",
        [None, "", "Short1", "alllowercase1", "ALLUPPERCASE1", "NoDigitsHere"],
    )
    def test_weak(self, password):
        assert is_strong_password(password) is False
