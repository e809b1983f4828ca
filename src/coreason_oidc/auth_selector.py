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
Token endpoint client authentication selection.
"""

from coreason_oidc.models import ClientAuthStrategy, ProviderMetadata


def select_client_auth(metadata: ProviderMetadata) -> ClientAuthStrategy:
    """
    Picks how the client secret is sent to the token endpoint.

    `client_secret_basic` wins when both are advertised, as it is the OAuth 2.0 default
    and keeps the secret out of request bodies. If neither method is advertised,
    `ClientAuthStrategy.NONE` leaves the decision to the OAuth2 client library.

    Args:
        metadata: The discovered provider metadata.

    Returns:
        ClientAuthStrategy: The selected strategy. Never raises.
    """
    if metadata.supports_token_endpoint_auth_method(ClientAuthStrategy.BASIC.value):
        return ClientAuthStrategy.BASIC
    if metadata.supports_token_endpoint_auth_method(ClientAuthStrategy.POST_BODY.value):
        return ClientAuthStrategy.POST_BODY
    return ClientAuthStrategy.NONE
