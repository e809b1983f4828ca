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
Custom exceptions for the coreason-oidc package.
"""


class CoreasonOidcError(Exception):
    """Base exception for all coreason-oidc errors."""


class DiscoveryError(CoreasonOidcError):
    """Raised when the IdP discovery document cannot be used."""


class DiscoveryUnreachableError(DiscoveryError):
    """
    Raised when the discovery request fails or returns a non-2xx status.

    Attributes:
        url (str): The discovery URL that was requested.
        status_code (int | None): The HTTP status, or None if no response was received.
    """

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MalformedMetadataError(DiscoveryError):
    """Raised when the discovery document is not JSON or lacks a required field."""


class OversizedResponseError(CoreasonOidcError):
    """Raised when an HTTP response is too large."""


class TokenExchangeError(CoreasonOidcError):
    """Raised when the authorization code cannot be exchanged for a token."""


class ProfileFetchError(CoreasonOidcError):
    """Raised when the UserInfo endpoint cannot be queried."""
