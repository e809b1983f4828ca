# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_oidc

from collections.abc import Callable
from typing import Any

import httpx
import pytest

ISSUER = "https://idp.example.com"


@pytest.fixture
def discovery_document() -> dict[str, Any]:
    """A representative discovery document advertising both secret-based auth methods."""
    return {
        "issuer": ISSUER,
        "authorization_endpoint": f"{ISSUER}/authorize",
        "token_endpoint": f"{ISSUER}/oauth/token",
        "userinfo_endpoint": f"{ISSUER}/userinfo",
        "end_session_endpoint": f"{ISSUER}/logout",
        "jwks_uri": f"{ISSUER}/.well-known/jwks.json",
        "registration_endpoint": f"{ISSUER}/register",
        "scopes_supported": ["openid", "profile", "email", "offline_access"],
        "response_types_supported": ["code", "id_token", "token id_token"],
        "response_modes_supported": ["query", "fragment", "form_post"],
        "grant_types_supported": ["authorization_code", "refresh_token"],
        "acr_values_supported": ["urn:mace:incommon:iap:silver", "urn:mace:incommon:iap:bronze"],
        "subject_types_supported": ["public", "pairwise"],
        "id_token_signing_alg_values_supported": ["RS256", "HS256"],
        "id_token_encryption_alg_values_supported": ["RSA-OAEP", "A128KW"],
        "id_token_encryption_enc_values_supported": ["A128CBC-HS256", "A256GCM"],
        "userinfo_signing_alg_values_supported": ["RS256", "ES256"],
        "userinfo_encryption_alg_values_supported": ["RSA-OAEP-256"],
        "userinfo_encryption_enc_values_supported": ["A128GCM"],
        "request_object_signing_alg_values_supported": ["none", "RS256"],
        "request_object_encryption_alg_values_supported": ["RSA1_5"],
        "request_object_encryption_enc_values_supported": ["A192CBC-HS384"],
        "token_endpoint_auth_methods_supported": ["client_secret_basic", "client_secret_post"],
        "token_endpoint_auth_signing_alg_values_supported": ["RS256", "PS256"],
        "code_challenge_methods_supported": ["S256", "plain"],
        "display_values_supported": ["page", "popup"],
        "claim_types_supported": ["normal", "distributed"],
        "claims_supported": ["sub", "name", "email", "email_verified"],
        "claims_locales_supported": ["en-US", "fr-CA"],
        "ui_locales_supported": ["en-US", "de-DE"],
        "claims_parameter_supported": True,
        "request_parameter_supported": True,
        "request_uri_parameter_supported": False,
        "require_request_uri_registration": True,
        "service_documentation": f"{ISSUER}/docs",
        "op_policy_uri": f"{ISSUER}/policy",
        "op_tos_uri": f"{ISSUER}/tos",
        "x_vendor_extension": {"tenant": "acme"},
    }


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_transport() -> Callable[[dict[str, Handler]], httpx.MockTransport]:
    """
    Builds an httpx MockTransport routing `METHOD path` keys to handlers.
    Unrouted requests get a 404.
    """

    def _make(routes: dict[str, Handler]) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            route = routes.get(f"{request.method} {request.url.path}")
            if route is None:
                return httpx.Response(404, json={"error": "not_found"})
            return route(request)

        return httpx.MockTransport(handler)

    return _make
