import pytest

from app.services.auth.hasher import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


class TestPasswordHasher:
    def test_hash_is_not_plaintext_and_verifies(self, hasher):
        """Hash output differs from input and verifies against it."""
        hashed = hasher.hash("Strong@123")
        assert hashed != "Strong@123"
        assert hashed.startswith("$2b$")
        assert hasher.verify("Strong@123", hashed)

    def test_wrong_secret_does_not_verify(self, hasher):
        hashed = hasher.hash("Strong@123")
        assert hasher.verify("Strong@124", hashed) is False

    def test_salt_is_embedded(self, hasher):
        """Same secret hashes differently each time, both verify."""
        first, second = hasher.hash("Rex"), hasher.hash("Rex")
        assert first != second
        assert hasher.verify("Rex", first)
        assert hasher.verify("Rex", second)

    @pytest.mark.parametrize("hashed", ["", "not-a-hash", "$2b$04$short", None, 12345])
    def test_verify_malformed_hash_returns_false(self, hasher, hashed):
        """Malformed input never raises."""
        assert hasher.verify("Strong@123", hashed) is False

    def test_verify_non_string_secret_returns_false(self, hasher):
        hashed = hasher.hash("Strong@123")
        assert hasher.verify(None, hashed) is False
