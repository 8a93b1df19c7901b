from __future__ import annotations

import re

import pytest

from auth_app.infrastructure.security.password_hasher import ScryptPasswordHasher

_HEX = re.compile(r"^[0-9a-f]+$")


def test_hash_password_never_stores_plaintext_and_verifies() -> None:
    hasher = ScryptPasswordHasher()
    password = "super-secret-password1!"

    password_hash = hasher.hash_password(password)

    assert password_hash != password
    assert password not in password_hash
    assert hasher.verify_password(password=password, password_hash=password_hash) is True


def test_wrong_password_fails_verification() -> None:
    hasher = ScryptPasswordHasher()
    password_hash = hasher.hash_password("correct")

    assert hasher.verify_password(password="wrong", password_hash=password_hash) is False


def test_same_password_hashes_to_different_records() -> None:
    hasher = ScryptPasswordHasher()

    first = hasher.hash_password("Passw0rd!")
    second = hasher.hash_password("Passw0rd!")

    assert first != second
    assert hasher.verify_password(password="Passw0rd!", password_hash=first) is True
    assert hasher.verify_password(password="Passw0rd!", password_hash=second) is True


def test_record_is_salt_hex_and_key_hex_joined_by_one_separator() -> None:
    hasher = ScryptPasswordHasher()

    password_hash = hasher.hash_password("Passw0rd!")

    assert password_hash.count(":") == 1
    salt_hex, key_hex = password_hash.split(":")
    assert _HEX.match(salt_hex)
    assert _HEX.match(key_hex)
    assert len(bytes.fromhex(salt_hex)) == 16
    assert len(bytes.fromhex(key_hex)) == 64


def test_unicode_password_round_trips() -> None:
    hasher = ScryptPasswordHasher()
    password_hash = hasher.hash_password("sénha-çom-acento-9!")

    assert hasher.verify_password(password="sénha-çom-acento-9!", password_hash=password_hash)
    assert not hasher.verify_password(password="senha-com-acento-9!", password_hash=password_hash)


@pytest.mark.parametrize(
    "malformed",
    [
        "",
        "no-separator-here",
        "abcd:",
        ":abcd",
        "zz:" + "00" * 64,
        "00" * 16 + ":not-hex",
        "00" * 16 + ":" + "00" * 32,
        "00" * 16 + ":" + "00" * 64 + ":extra",
        "$2b$10$abcdefghijklmnopqrstuv",
    ],
)
def test_malformed_record_fails_closed(malformed: str) -> None:
    hasher = ScryptPasswordHasher()

    assert hasher.verify_password(password="Passw0rd!", password_hash=malformed) is False


def test_tampered_key_fails_verification() -> None:
    hasher = ScryptPasswordHasher()
    salt_hex, key_hex = hasher.hash_password("Passw0rd!").split(":")
    flipped = ("0" if key_hex[0] != "0" else "1") + key_hex[1:]

    tampered = f"{salt_hex}:{flipped}"

    assert hasher.verify_password(password="Passw0rd!", password_hash=tampered) is False


def test_lone_surrogate_password_never_raises_on_verify() -> None:
    hasher = ScryptPasswordHasher()
    password_hash = hasher.hash_password("Passw0rd!")

    assert hasher.verify_password(password="Passw0rd!\ud800", password_hash=password_hash) is False


def test_lone_surrogate_password_hashes_and_verifies() -> None:
    hasher = ScryptPasswordHasher()

    password_hash = hasher.hash_password("Passw0rd!\udfff")

    assert hasher.verify_password(password="Passw0rd!\udfff", password_hash=password_hash) is True
    assert hasher.verify_password(password="Passw0rd!", password_hash=password_hash) is False
