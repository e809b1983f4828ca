# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_oidc

"""
IdentityClaimsView component exposing standard OIDC claims from a UserInfo payload.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any


class IdentityClaimsView(Mapping[str, Any]):
    """
    Read-only view over a claims payload with typed accessors for the standard claims
    of OpenID Connect Core 1.0, section 5.1.

    Every accessor returns None when the claim is absent or has the wrong JSON type.
    Non-standard claims stay available through the mapping interface (`view["custom"]`).

    Attributes:
        subject_claim_key (str): The claim holding the resource owner identifier.
    """

    def __init__(self, claims: Mapping[str, Any], subject_claim_key: str = "sub") -> None:
        self._claims = claims
        self.subject_claim_key = subject_claim_key

    def __getitem__(self, key: str) -> Any:
        return self._claims[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._claims)

    def __len__(self) -> int:
        return len(self._claims)

    def __repr__(self) -> str:
        # Claim values are PII and MUST NOT be rendered
        return (
            f"IdentityClaimsView(claims=<REDACTED {sorted(self._claims)}>, "
            f"subject_claim_key={self.subject_claim_key!r})"
        )

    def _string(self, key: str) -> str | None:
        value = self._claims.get(key)
        return value if isinstance(value, str) else None

    def _boolean(self, key: str) -> bool | None:
        value = self._claims.get(key)
        return value if isinstance(value, bool) else None

    def to_dict(self) -> dict[str, Any]:
        """Returns a shallow copy of the wrapped claims."""
        return dict(self._claims)

    @property
    def subject(self) -> Any | None:
        """
        The resource owner identifier, read from `subject_claim_key`.
        Presence is the caller's contract to enforce; this view does not raise.
        """
        return self._claims.get(self.subject_claim_key)

    @property
    def name(self) -> str | None:
        """
        End-User's full name in displayable form, including all name parts, possibly titles and suffixes,
        ordered according to the End-User's locale and preferences.
        """
        return self._string("name")

    @property
    def given_name(self) -> str | None:
        """Given name(s) or first name(s). Multiple names are separated by spaces."""
        return self._string("given_name")

    @property
    def family_name(self) -> str | None:
        """Surname(s) or last name(s). Multiple names are separated by spaces."""
        return self._string("family_name")

    @property
    def middle_name(self) -> str | None:
        """Middle name(s). Some cultures do not use them."""
        return self._string("middle_name")

    @property
    def nickname(self) -> str | None:
        """Casual name, e.g. `Mike` alongside a given_name of `Michael`."""
        return self._string("nickname")

    @property
    def preferred_username(self) -> str | None:
        """
        Shorthand name the End-User wishes to be referred to by, such as `janedoe` or `j.doe`.
        It MAY contain any JSON string characters and MUST NOT be relied upon as unique.
        """
        return self._string("preferred_username")

    @property
    def profile(self) -> str | None:
        """URL of the End-User's profile page."""
        return self._string("profile")

    @property
    def picture(self) -> str | None:
        """URL of the End-User's profile picture. It refers to an image file, not a page."""
        return self._string("picture")

    @property
    def website(self) -> str | None:
        return self._string("website")

    @property
    def email(self) -> str | None:
        """
        Preferred e-mail address in RFC 5322 addr-spec syntax.
        MUST NOT be relied upon as unique.
        """
        return self._string("email")

    @property
    def email_verified(self) -> bool | None:
        """
        True if the OP took affirmative steps to ensure the e-mail address was controlled by the End-User
        at the time of verification.
        """
        return self._boolean("email_verified")

    @property
    def gender(self) -> str | None:
        return self._string("gender")

    @property
    def birthdate(self) -> str | None:
        """
        Birthday as ISO 8601 `YYYY-MM-DD`. The year MAY be `0000` to mark it omitted, and `YYYY` alone is allowed.
        Returned as the raw string.
        """
        return self._string("birthdate")

    @property
    def zoneinfo(self) -> str | None:
        """IANA time zone name, e.g. `Europe/Paris`."""
        return self._string("zoneinfo")

    @property
    def locale(self) -> str | None:
        """
        BCP47 language tag such as `en-US`. Some providers send `en_US`; it is returned unchanged.
        """
        return self._string("locale")

    @property
    def phone_number(self) -> str | None:
        """Preferred telephone number, E.164 recommended, e.g. `+1 (425) 555-1212`."""
        return self._string("phone_number")

    @property
    def phone_number_verified(self) -> bool | None:
        """True if the OP verified the phone number. When true, `phone_number` is in E.164 format."""
        return self._boolean("phone_number_verified")

    @property
    def address(self) -> Mapping[str, Any] | None:
        """
        Preferred postal address, a JSON object with some of `formatted`, `street_address`, `locality`,
        `region`, `postal_code` and `country`. Returned read-only.
        """
        value = self._claims.get("address")
        if isinstance(value, Mapping):
            return MappingProxyType(dict(value))
        return None

    @property
    def updated_at(self) -> int | None:
        """Seconds since the Unix epoch when the End-User's information was last updated."""
        value = self._claims.get("updated_at")
        # bool is an int subclass; a JSON true is not a timestamp
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return None
