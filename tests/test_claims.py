# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_oidc

from typing import Any

import pytest

from coreason_oidc.claims import IdentityClaimsView

FULL_PROFILE: dict[str, Any] = {
    "sub": "248289761001",
    "name": "Jane Doe",
    "given_name": "Jane",
    "family_name": "Doe",
    "middle_name": "Q",
    "nickname": "JD",
    "preferred_username": "j.doe",
    "profile": "https://example.com/janedoe",
    "picture": "https://example.com/janedoe/me.jpg",
    "website": "https://janedoe.example.com",
    "email": "janedoe@example.com",
    "email_verified": True,
    "gender": "female",
    "birthdate": "0000-10-31",
    "zoneinfo": "Europe/Paris",
    "locale": "fr-FR",
    "phone_number": "+1 (425) 555-1212",
    "phone_number_verified": False,
    "address": {"locality": "Paris", "country": "FR"},
    "updated_at": 1311280970,
    "https://acme.example.com/tenant": "acme",
}


def test_email_only_payload() -> None:
    view = IdentityClaimsView({"email": "a@b.com", "email_verified": True})

    assert view.email == "a@b.com"
    assert view.email_verified is True
    assert view.name is None


def test_all_standard_claims() -> None:
    view = IdentityClaimsView(FULL_PROFILE)

    assert view.subject == "248289761001"
    assert view.name == "Jane Doe"
    assert view.given_name == "Jane"
    assert view.family_name == "Doe"
    assert view.middle_name == "Q"
    assert view.nickname == "JD"
    assert view.preferred_username == "j.doe"
    assert view.profile == "https://example.com/janedoe"
    assert view.picture == "https://example.com/janedoe/me.jpg"
    assert view.website == "https://janedoe.example.com"
    assert view.gender == "female"
    assert view.birthdate == "0000-10-31"
    assert view.zoneinfo == "Europe/Paris"
    assert view.locale == "fr-FR"
    assert view.phone_number == "+1 (425) 555-1212"
    assert view.phone_number_verified is False
    assert view.address == {"locality": "Paris", "country": "FR"}
    assert view.updated_at == 1311280970


def test_updated_at_not_a_number() -> None:
    """A malformed optional claim is absent rather than an error."""
    assert IdentityClaimsView({"updated_at": "not-a-number"}).updated_at is None


@pytest.mark.parametrize(
    ("claims", "attribute"),
    [
        ({"email": 12345}, "email"),
        ({"email_verified": "true"}, "email_verified"),
        ({"phone_number_verified": 1}, "phone_number_verified"),
        ({"updated_at": True}, "updated_at"),
        ({"updated_at": 1311280970.5}, "updated_at"),
        ({"address": "1 Main St"}, "address"),
        ({"name": ["Jane", "Doe"]}, "name"),
        ({"locale": None}, "locale"),
    ],
)
def test_type_mismatch_is_absent(claims: dict[str, Any], attribute: str) -> None:
    assert getattr(IdentityClaimsView(claims), attribute) is None


def test_empty_payload() -> None:
    view = IdentityClaimsView({})
    assert view.subject is None
    assert view.email is None
    assert len(view) == 0


def test_custom_subject_key() -> None:
    view = IdentityClaimsView({"sub": "pairwise-id", "oid": "object-id"}, subject_claim_key="oid")
    assert view.subject == "object-id"


def test_non_standard_claims_preserved() -> None:
    view = IdentityClaimsView(FULL_PROFILE)

    assert view["https://acme.example.com/tenant"] == "acme"
    assert "https://acme.example.com/tenant" in view
    assert view.get("missing") is None
    assert set(view) == set(FULL_PROFILE)
    assert view.to_dict() == FULL_PROFILE


def test_view_is_read_only() -> None:
    view = IdentityClaimsView(FULL_PROFILE)

    with pytest.raises(TypeError):
        view["email"] = "other@example.com"  # type: ignore[index]
    with pytest.raises(TypeError):
        view.address["country"] = "US"  # type: ignore[index]

    copy = view.to_dict()
    copy["email"] = "other@example.com"
    assert view.email == "janedoe@example.com"


def test_repr_redacts_values() -> None:
    text = repr(IdentityClaimsView({"sub": "secret-subject", "email": "jane@example.com"}))

    assert "secret-subject" not in text
    assert "jane@example.com" not in text
    assert "REDACTED" in text
    assert str(IdentityClaimsView({"email": "jane@example.com"})) == repr(
        IdentityClaimsView({"email": "jane@example.com"})
    )
