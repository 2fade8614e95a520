"""Unit tests for password hashers."""

import pytest

from mentorbook.core.security import (
    BcryptHasher,
    PlaintextHasher,
    get_password_hasher,
)


@pytest.mark.unit
@pytest.mark.security
class TestPlaintextHasher:
    def test_stores_verbatim(self):
        assert PlaintextHasher().hash("secret") == "secret"

    def test_verify(self):
        hasher = PlaintextHasher()

        assert hasher.verify("secret", "secret")
        assert not hasher.verify("Secret", "secret")
        assert not hasher.verify(None, "secret")


@pytest.mark.unit
@pytest.mark.security
class TestBcryptHasher:
    def test_hash_and_verify(self):
        hasher = BcryptHasher()

        hashed = hasher.hash("secret")

        assert hashed != "secret"
        assert hashed.startswith("$2")
        assert hasher.verify("secret", hashed)
        assert not hasher.verify("wrong", hashed)

    def test_plaintext_record_never_matches(self):
        assert not BcryptHasher().verify("secret", "secret")

    def test_empty_values(self):
        hasher = BcryptHasher()

        assert not hasher.verify("", "whatever")
        assert not hasher.verify("secret", "")


class TestHasherLookup:
    def test_lookup(self):
        assert isinstance(get_password_hasher("plaintext"), PlaintextHasher)
        assert isinstance(get_password_hasher("bcrypt"), BcryptHasher)

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_password_hasher("md5")
