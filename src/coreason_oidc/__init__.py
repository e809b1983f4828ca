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
OpenID Connect Relying Party helper: provider discovery, client authentication selection,
and standard identity claims on top of an Authlib Authorization Code client.
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .auth_selector import select_client_auth
from .claims import IdentityClaimsView
from .client import OidcClient, OidcClientAsync
from .config import CoreasonOidcConfig
from .discovery import MetadataFetcher, MetadataFetcherAsync, discovery_url
from .exceptions import (
    CoreasonOidcError,
    DiscoveryError,
    DiscoveryUnreachableError,
    MalformedMetadataError,
    OversizedResponseError,
    ProfileFetchError,
    TokenExchangeError,
)
from .models import AuthorizationRequest, ClientAuthStrategy, ProviderMetadata, TokenResponse

__all__ = [
    "AuthorizationRequest",
    "ClientAuthStrategy",
    "CoreasonOidcConfig",
    "CoreasonOidcError",
    "DiscoveryError",
    "DiscoveryUnreachableError",
    "IdentityClaimsView",
    "MalformedMetadataError",
    "MetadataFetcher",
    "MetadataFetcherAsync",
    "OidcClient",
    "OidcClientAsync",
    "OversizedResponseError",
    "ProfileFetchError",
    "ProviderMetadata",
    "TokenExchangeError",
    "TokenResponse",
    "discovery_url",
    "select_client_auth",
]
