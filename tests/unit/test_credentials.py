from __future__ import annotations

import pytest

from auth_app.domain.auth.credentials import normalize_user_email, normalize_user_name


def test_normalize_user_email_lowercases_and_trims() -> None:
    assert normalize_user_email(email="  USER@Example.com ") == "user@example.com"


def test_normalize_user_email_rejects_blank() -> None:
    with pytest.raises(ValueError, match="email cannot be blank"):
        normalize_user_email(email="   ")


def test_normalize_user_name_trims_only() -> None:
    assert normalize_user_name(name="  Ann Lee  ") == "Ann Lee"
