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
OidcClient component wiring discovered provider metadata into an Authlib Authorization Code client.
"""

from collections.abc import Mapping, Sequence
from typing import Any

import httpx
from authlib.common.errors import AuthlibBaseError
from authlib.common.security import generate_token
from authlib.integrations.httpx_client import AsyncOAuth2Client, OAuth2Client
from authlib.oauth2.rfc7636 import create_s256_code_challenge
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from pydantic import ValidationError

from coreason_oidc.auth_selector import select_client_auth
from coreason_oidc.claims import IdentityClaimsView
from coreason_oidc.config import CoreasonOidcConfig
from coreason_oidc.discovery import MetadataFetcher, MetadataFetcherAsync
from coreason_oidc.exceptions import ProfileFetchError, TokenExchangeError
from coreason_oidc.models import AuthorizationRequest, ClientAuthStrategy, ProviderMetadata, TokenResponse
from coreason_oidc.utils.logger import logger

tracer = trace.get_tracer(__name__)

PKCE_METHODS = ("S256", "plain")
CODE_VERIFIER_LENGTH = 48

# Collaborator failures surfaced as TokenExchangeError or ProfileFetchError
_COLLABORATOR_ERRORS = (AuthlibBaseError, httpx.HTTPError, ValueError)


class _OidcClientBase:
    """
    Shared construction and request shaping for the sync and async clients.
    """

    _collaborator_class: type[OAuth2Client] | type[AsyncOAuth2Client]

    def __init__(
        self,
        metadata: ProviderMetadata,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scopes: Sequence[str],
        pkce_method: str | None = None,
        subject_claim_key: str = "sub",
        **client_kwargs: Any,
    ) -> None:
        """
        Initialize the client. No network I/O is performed.

        Args:
            metadata: Provider metadata from discovery.
            client_id: The OAuth 2.0 client identifier.
            client_secret: The client secret.
            redirect_uri: The redirect URI registered with the IdP.
            scopes: Scopes requested in the authorization URL.
            pkce_method: "S256" or "plain" to enable PKCE; None disables it.
            subject_claim_key: The UserInfo claim holding the resource owner id.
            **client_kwargs: httpx client options forwarded to the OAuth2 client (e.g. `timeout`, `transport`).

        Raises:
            ValueError: If `pkce_method` is not a known PKCE method.
        """
        if pkce_method is not None and pkce_method not in PKCE_METHODS:
            raise ValueError(f"Unsupported PKCE method {pkce_method!r}. Expected one of {PKCE_METHODS}.")

        if (
            pkce_method is not None
            and metadata.code_challenge_methods_supported
            and not metadata.supports_code_challenge_method(pkce_method)
        ):
            logger.warning(f"IdP {metadata.issuer} does not advertise PKCE method {pkce_method}; using it anyway.")

        self._metadata = metadata
        self._auth_strategy = select_client_auth(metadata)
        self.pkce_method = pkce_method
        self.scopes = tuple(scopes)
        self.subject_claim_key = subject_claim_key

        self._oauth = self._collaborator_class(
            client_id=client_id,
            client_secret=client_secret,
            token_endpoint_auth_method=self._auth_strategy.token_endpoint_auth_method,
            scope=" ".join(self.scopes),
            redirect_uri=redirect_uri,
            code_challenge_method=pkce_method,
            authorization_endpoint=metadata.authorization_endpoint,
            token_endpoint=metadata.token_endpoint,
            userinfo_endpoint=metadata.userinfo_endpoint,
            **client_kwargs,
        )
        logger.debug(f"Configured OIDC client for {metadata.issuer} with auth strategy {self._auth_strategy.name}")

    @property
    def metadata(self) -> ProviderMetadata:
        return self._metadata

    @property
    def auth_strategy(self) -> ClientAuthStrategy:
        """The token endpoint authentication strategy selected at construction."""
        return self._auth_strategy

    @property
    def end_session_endpoint(self) -> str | None:
        """The discovered logout URL, for callers building their own logout redirect."""
        return self._metadata.end_session_endpoint

    @property
    def oauth_client(self) -> OAuth2Client | AsyncOAuth2Client:
        """The underlying Authlib client."""
        return self._oauth

    def build_authorization_url(
        self, state: str | None = None, code_verifier: str | None = None, **params: Any
    ) -> AuthorizationRequest:
        """
        Builds the authorization endpoint redirect.

        Args:
            state: The state value. Generated when omitted.
            code_verifier: The PKCE verifier. Generated when PKCE is enabled and none is given.
            **params: Extra query parameters (e.g. `nonce`, `prompt`, `login_hint`).

        Returns:
            AuthorizationRequest: The URL plus the state and verifier the caller must keep.
        """
        if self.pkce_method is not None:
            code_verifier = code_verifier or generate_token(CODE_VERIFIER_LENGTH)
            params["code_challenge"] = (
                create_s256_code_challenge(code_verifier) if self.pkce_method == "S256" else code_verifier
            )
            params["code_challenge_method"] = self.pkce_method
        else:
            code_verifier = None

        url, state = self._oauth.create_authorization_url(self._metadata.authorization_endpoint, state=state, **params)
        return AuthorizationRequest(url=url, state=state, code_verifier=code_verifier)

    def _token_endpoint(self) -> str:
        if not self._metadata.token_endpoint:
            raise TokenExchangeError(f"IdP {self._metadata.issuer} does not advertise a token_endpoint")
        return self._metadata.token_endpoint

    def _userinfo_endpoint(self) -> str:
        if not self._metadata.userinfo_endpoint:
            raise ProfileFetchError(f"IdP {self._metadata.issuer} does not advertise a userinfo_endpoint")
        return self._metadata.userinfo_endpoint

    @staticmethod
    def _to_token_response(raw: Mapping[str, Any]) -> TokenResponse:
        try:
            return TokenResponse.model_validate(dict(raw))
        except ValidationError as e:
            raise TokenExchangeError(f"Invalid token response: {e}") from e

    @staticmethod
    def _bearer_headers(token: TokenResponse | str) -> dict[str, str]:
        access_token = token.access_token if isinstance(token, TokenResponse) else token
        return {"Authorization": f"Bearer {access_token}", "Accept": "application/json"}

    def _to_claims_view(self, response: httpx.Response) -> IdentityClaimsView:
        response.raise_for_status()
        claims = response.json()
        if not isinstance(claims, dict):
            raise ProfileFetchError("UserInfo response is not a JSON object")
        return IdentityClaimsView(claims, self.subject_claim_key)


class OidcClient(_OidcClientBase):
    """
    Authorization Code client configured from discovered provider metadata.

    Holds an Authlib `OAuth2Client` (an httpx client) and delegates protocol work to it.
    The token endpoint authentication method is chosen once at construction by `select_client_auth`.
    Operations are independent one-shot calls; use the client as a context manager to release connections.
    """

    _collaborator_class = OAuth2Client

    def __enter__(self) -> "OidcClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._oauth.close()

    @classmethod
    def from_config(cls, config: CoreasonOidcConfig, **client_kwargs: Any) -> "OidcClient":
        """
        Runs discovery for `config.issuer` and builds a client from the result.

        Raises:
            DiscoveryError: If discovery fails.
        """
        client_kwargs.setdefault("timeout", config.http_timeout)
        with MetadataFetcher(**client_kwargs) as fetcher:
            metadata = fetcher.fetch(config.issuer)
        return cls(
            metadata,
            config.client_id,
            config.client_secret.get_secret_value(),
            config.redirect_uri,
            config.scopes,
            config.pkce_method,
            **client_kwargs,
        )

    def exchange_code(self, code: str, code_verifier: str | None = None) -> TokenResponse:
        """
        Exchanges an authorization code at the token endpoint.

        Args:
            code: The `code` query parameter from the redirect callback.
            code_verifier: The PKCE verifier returned by `build_authorization_url`, if PKCE is enabled.

        Returns:
            TokenResponse: The issued tokens. The ID token is not validated.

        Raises:
            TokenExchangeError: If the IdP rejects the code or the request fails.
        """
        url = self._token_endpoint()
        with tracer.start_as_current_span("oidc.token_exchange") as span:
            # fetch_token stores the issued token on the shared Authlib session
            previous_token = self._oauth.token
            try:
                raw = self._oauth.fetch_token(
                    url, grant_type="authorization_code", code=code, code_verifier=code_verifier
                )
            except _COLLABORATOR_ERRORS as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.error(f"Token exchange at {url} failed: {e}")
                raise TokenExchangeError(f"Failed to exchange authorization code: {e}") from e
            finally:
                self._oauth.token = previous_token
            return self._to_token_response(raw)

    def fetch_identity(self, token: TokenResponse | str) -> IdentityClaimsView:
        """
        Queries the UserInfo endpoint and wraps the claims.

        Args:
            token: A TokenResponse or a raw access token.

        Returns:
            IdentityClaimsView: The claims of the authenticated End-User.

        Raises:
            ProfileFetchError: If the endpoint is missing, the request fails, or the body is not a JSON object.
        """
        url = self._userinfo_endpoint()
        with tracer.start_as_current_span("oidc.userinfo") as span:
            try:
                response = self._oauth.request("GET", url, headers=self._bearer_headers(token), withhold_token=True)
                return self._to_claims_view(response)
            except _COLLABORATOR_ERRORS as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.error(f"UserInfo request to {url} failed: {e}")
                raise ProfileFetchError(f"Failed to fetch UserInfo: {e}") from e


class OidcClientAsync(_OidcClientBase):
    """
    Async twin of OidcClient over Authlib's `AsyncOAuth2Client`.
    """

    _collaborator_class = AsyncOAuth2Client

    async def __aenter__(self) -> "OidcClientAsync":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._oauth.aclose()

    @classmethod
    async def from_config(cls, config: CoreasonOidcConfig, **client_kwargs: Any) -> "OidcClientAsync":
        """
        Runs discovery for `config.issuer` and builds a client from the result.
        """
        client_kwargs.setdefault("timeout", config.http_timeout)
        async with MetadataFetcherAsync(**client_kwargs) as fetcher:
            metadata = await fetcher.fetch(config.issuer)
        return cls(
            metadata,
            config.client_id,
            config.client_secret.get_secret_value(),
            config.redirect_uri,
            config.scopes,
            config.pkce_method,
            **client_kwargs,
        )

    async def exchange_code(self, code: str, code_verifier: str | None = None) -> TokenResponse:
        """
        Exchanges an authorization code at the token endpoint. See `OidcClient.exchange_code`.
        """
        url = self._token_endpoint()
        with tracer.start_as_current_span("oidc.token_exchange") as span:
            # fetch_token stores the issued token on the shared Authlib session
            previous_token = self._oauth.token
            try:
                raw = await self._oauth.fetch_token(
                    url, grant_type="authorization_code", code=code, code_verifier=code_verifier
                )
            except _COLLABORATOR_ERRORS as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.error(f"Token exchange at {url} failed: {e}")
                raise TokenExchangeError(f"Failed to exchange authorization code: {e}") from e
            finally:
                self._oauth.token = previous_token
            return self._to_token_response(raw)

    async def fetch_identity(self, token: TokenResponse | str) -> IdentityClaimsView:
        """
        Queries the UserInfo endpoint and wraps the claims. See `OidcClient.fetch_identity`.
        """
        url = self._userinfo_endpoint()
        with tracer.start_as_current_span("oidc.userinfo") as span:
            try:
                response = await self._oauth.request(
                    "GET", url, headers=self._bearer_headers(token), withhold_token=True
                )
                return self._to_claims_view(response)
            except _COLLABORATOR_ERRORS as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.error(f"UserInfo request to {url} failed: {e}")
                raise ProfileFetchError(f"Failed to fetch UserInfo: {e}") from e
