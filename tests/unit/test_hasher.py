"""Tests for bcrypt password hashing."""

import pytest

from src.core.domain.exceptions import HashFormatError
from src.core.infrastructure.security.hasher import BcryptPasswordHasher, gen_password


class TestBcryptPasswordHasher:
    def test_hash_is_not_plaintext(self, hasher: BcryptPasswordHasher) -> None:
        hashed = hasher.hash("secret123")
        assert hashed != "secret123"
        assert hashed.startswith("$2")

    def test_verify_round_trip(self, hasher: BcryptPasswordHasher) -> None:
        hashed = hasher.hash("secret123")
        assert hasher.verify("secret123", hashed) is True
        assert hasher.verify("secret124", hashed) is False

    def test_same_plaintext_gets_different_salts(
        self, hasher: BcryptPasswordHasher
    ) -> None:
        assert hasher.hash("secret123") != hasher.hash("secret123")

    def test_malformed_hash_raises_instead_of_mismatch(
        self, hasher: BcryptPasswordHasher
    ) -> None:
        with pytest.raises(HashFormatError):
            hasher.verify("secret123", "not-a-bcrypt-hash")

    def test_hash_format_error_is_internal(self) -> None:
        err = HashFormatError("bad salt")
        assert err.http_status_code == 500
        assert err.error_code == "INTERNAL_ERROR"
        assert "bad salt" not in err.message

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_rounds_out_of_range(self, rounds: int) -> None:
        with pytest.raises(ValueError):
            BcryptPasswordHasher(rounds=rounds)


class TestGenPassword:
    def test_default_length_is_alphanumeric(self) -> None:
        password = gen_password()
        assert len(password) == 16
        assert password.isalnum()

    def test_custom_length(self) -> None:
        assert len(gen_password(24)) == 24
