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
Data models for the coreason-oidc package.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

CONFIG_LOCATION = "/.well-known/openid-configuration"


class ClientAuthStrategy(StrEnum):
    """
    How the client authenticates itself at the token endpoint.

    `NONE` means no strategy was selected and the OAuth2 client library's own default applies.
    """

    BASIC = "client_secret_basic"
    POST_BODY = "client_secret_post"
    NONE = "unspecified"

    @property
    def token_endpoint_auth_method(self) -> str | None:
        """The Authlib `token_endpoint_auth_method` value, or None to leave the library default."""
        if self is ClientAuthStrategy.NONE:
            return None
        return self.value


class ProviderMetadata(BaseModel):
    """
    OpenID Provider Metadata as published at `<issuer>/.well-known/openid-configuration`.

    Field names match the discovery document keys (OpenID Connect Discovery 1.0, section 3).
    The model is frozen: it is configuration for the lifetime of the client and is never refreshed.
    Unknown keys are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    issuer: str = Field(..., description="Issuer Identifier. Must match the `iss` claim of issued tokens.")
    authorization_endpoint: str = Field(..., description="URL of the OAuth 2.0 Authorization Endpoint.")
    token_endpoint: str | None = Field(
        default=None, description="URL of the Token Endpoint. Required unless only the Implicit Flow is used."
    )
    userinfo_endpoint: str | None = Field(default=None, description="URL of the UserInfo Endpoint.")
    end_session_endpoint: str | None = Field(
        default=None, description="URL the RP redirects to in order to log the End-User out at the OP."
    )
    jwks_uri: str = Field(..., description="URL of the OP's JSON Web Key Set document.")
    registration_endpoint: str | None = Field(
        default=None, description="URL of the Dynamic Client Registration Endpoint."
    )

    scopes_supported: tuple[str, ...] = ()
    response_types_supported: tuple[str, ...] = Field(
        ..., description="OAuth 2.0 response_type values supported. Must include `code` for dynamic OPs."
    )
    response_modes_supported: tuple[str, ...] = ()
    grant_types_supported: tuple[str, ...] = ()
    acr_values_supported: tuple[str, ...] = ()
    subject_types_supported: tuple[str, ...] = Field(
        ..., description="Subject Identifier types supported, e.g. `pairwise` and `public`."
    )

    id_token_signing_alg_values_supported: tuple[str, ...] = ()
    id_token_encryption_alg_values_supported: tuple[str, ...] = ()
    id_token_encryption_enc_values_supported: tuple[str, ...] = ()
    userinfo_signing_alg_values_supported: tuple[str, ...] = ()
    userinfo_encryption_alg_values_supported: tuple[str, ...] = ()
    userinfo_encryption_enc_values_supported: tuple[str, ...] = ()
    request_object_signing_alg_values_supported: tuple[str, ...] = ()
    request_object_encryption_alg_values_supported: tuple[str, ...] = ()
    request_object_encryption_enc_values_supported: tuple[str, ...] = ()

    token_endpoint_auth_methods_supported: tuple[str, ...] = ()
    token_endpoint_auth_signing_alg_values_supported: tuple[str, ...] = ()
    code_challenge_methods_supported: tuple[str, ...] = ()

    display_values_supported: tuple[str, ...] = ()
    claim_types_supported: tuple[str, ...] = ()
    claims_supported: tuple[str, ...] = ()
    claims_locales_supported: tuple[str, ...] = ()
    ui_locales_supported: tuple[str, ...] = ()

    claims_parameter_supported: bool = False
    request_parameter_supported: bool = False
    request_uri_parameter_supported: bool = True
    require_request_uri_registration: bool = False

    service_documentation: str | None = None
    op_policy_uri: str | None = None
    op_tos_uri: str | None = None

    def supports_token_endpoint_auth_method(self, method: str) -> bool:
        """Whether `method` is listed in `token_endpoint_auth_methods_supported`."""
        return method in self.token_endpoint_auth_methods_supported

    def supports_scope(self, scope: str) -> bool:
        """Whether `scope` is listed in `scopes_supported`."""
        return scope in self.scopes_supported

    def supports_response_type(self, response_type: str) -> bool:
        """Whether `response_type` is listed in `response_types_supported`."""
        return response_type in self.response_types_supported

    def supports_code_challenge_method(self, method: str) -> bool:
        """Whether the PKCE `method` is listed in `code_challenge_methods_supported`."""
        return method in self.code_challenge_methods_supported


class AuthorizationRequest(BaseModel):
    """
    An authorization redirect ready to be sent to the browser.

    Attributes:
        url (str): The full authorization endpoint URL with query parameters.
        state (str): The anti-CSRF state value; store it to check the callback.
        code_verifier (str | None): The PKCE verifier to keep for the token exchange, if PKCE is enabled.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    state: str
    code_verifier: str | None = None


class TokenResponse(BaseModel):
    """
    Response from the token endpoint.

    Attributes:
        access_token (str): The access token issued by the authorization server.
        token_type (str): The type of the token (e.g. "Bearer").
        refresh_token (str | None): The refresh token, if issued.
        id_token (str | None): The ID token, if issued. It is not validated by this package.
        expires_in (int | None): The lifetime in seconds of the access token.
        expires_at (int | None): Absolute expiry computed by the OAuth2 client library.
        scope (str | None): The granted scopes, space separated.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    access_token: str
    token_type: str = "Bearer"
    refresh_token: str | None = None
    id_token: str | None = None
    expires_in: int | None = None
    expires_at: int | None = None
    scope: str | None = None
