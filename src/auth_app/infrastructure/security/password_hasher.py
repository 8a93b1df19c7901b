"""Scrypt password hasher adapter."""

from __future__ import annotations

import hashlib
import hmac
import secrets

from auth_app.application.ports.password_hasher_port import PasswordHasherPort

_SEPARATOR = ":"
_SALT_BYTES = 16
_KEY_BYTES = 64
_SCRYPT_N = 16_384
_SCRYPT_R = 8
_SCRYPT_P = 1


class ScryptPasswordHasher(PasswordHasherPort):
    """Password hashing adapter storing `salt_hex:key_hex` scrypt records."""

    def hash_password(self, password: str) -> str:
        salt = secrets.token_bytes(_SALT_BYTES)
        derived_key = _derive_key(password=password, salt=salt)
        return f"{salt.hex()}{_SEPARATOR}{derived_key.hex()}"

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        parts = password_hash.split(_SEPARATOR)
        if len(parts) != 2 or not parts[0] or not parts[1]:
            return False

        try:
            salt = bytes.fromhex(parts[0])
            stored_key = bytes.fromhex(parts[1])
        except ValueError:
            return False
        if len(stored_key) != _KEY_BYTES:
            return False

        try:
            candidate_key = _derive_key(password=password, salt=salt)
        except UnicodeError:
            return False
        return hmac.compare_digest(candidate_key, stored_key)


def _derive_key(*, password: str, salt: bytes) -> bytes:
    # surrogatepass keeps every `str` hashable, lone surrogates included.
    return hashlib.scrypt(
        password.encode("utf-8", "surrogatepass"),
        salt=salt,
        n=_SCRYPT_N,
        r=_SCRYPT_R,
        p=_SCRYPT_P,
        dklen=_KEY_BYTES,
    )
