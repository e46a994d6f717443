import pytest

from myflix.core.security import MAX_PASSWORD_BYTES, hash_password, verify_password


def test_hash_is_not_plaintext_and_verifies():
    digest = hash_password("secret1", rounds=4)

    assert digest != "secret1"
    assert digest.startswith("$2b$04$")
    assert verify_password("secret1", digest)
    assert not verify_password("secret2", digest)
    assert not verify_password("Secret1", digest)


def test_same_password_gets_a_fresh_salt_each_time():
    first = hash_password("secret1", rounds=4)
    second = hash_password("secret1", rounds=4)

    assert first != second
    assert verify_password("secret1", first)
    assert verify_password("secret1", second)


def test_default_work_factor_comes_from_settings():
    from myflix.core.config import settings

    digest = hash_password("secret1")
    assert digest.startswith(f"$2b${settings.BCRYPT_ROUNDS:02d}$")


@pytest.mark.parametrize("digest", ["", None, "not-a-hash", "$2b$10$tooshort", "secret1"])
def test_malformed_digest_never_raises(digest):
    assert verify_password("secret1", digest) is False


def test_empty_password_does_not_verify():
    digest = hash_password("secret1", rounds=4)
    assert verify_password("", digest) is False


def test_overlong_password_is_rejected():
    with pytest.raises(ValueError):
        hash_password("x" * (MAX_PASSWORD_BYTES + 1), rounds=4)
