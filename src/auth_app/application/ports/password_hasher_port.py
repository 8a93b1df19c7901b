"""Port for deriving and checking stored credential records."""

from __future__ import annotations

from typing import Protocol


class PasswordHasherPort(Protocol):
    """Credential record contract used by sign-up and sign-in."""

    def hash_password(self, password: str) -> str:
        """Return a freshly salted `salt_hex:key_hex` record; never the plaintext."""

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Return whether `password` matches the record.

        Malformed or foreign records return `False` instead of raising.
        """
