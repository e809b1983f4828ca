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
MetadataFetcher component for retrieving the IdP discovery document.
"""

from typing import Any

import httpx
from opentelemetry import trace
from pydantic import ValidationError

from coreason_oidc.exceptions import DiscoveryUnreachableError, MalformedMetadataError
from coreason_oidc.models import CONFIG_LOCATION, ProviderMetadata
from coreason_oidc.transport import safe_json_fetch, safe_json_fetch_async
from coreason_oidc.utils.logger import logger

tracer = trace.get_tracer(__name__)


def discovery_url(issuer_base_url: str) -> str:
    """
    Returns the discovery document URL for an issuer.

    Example:
        >>> discovery_url("https://idp.example.com/realms/main/")
        'https://idp.example.com/realms/main/.well-known/openid-configuration'
    """
    return f"{issuer_base_url.rstrip('/')}{CONFIG_LOCATION}"


def parse_metadata(data: Any, url: str) -> ProviderMetadata:
    """
    Builds ProviderMetadata from a decoded discovery document.

    Raises:
        MalformedMetadataError: If the document is not an object, or a required field is missing or mistyped.
    """
    if not isinstance(data, dict):
        raise MalformedMetadataError(f"Discovery document at {url} is not a JSON object")
    try:
        return ProviderMetadata.model_validate(data)
    except ValidationError as e:
        raise MalformedMetadataError(f"Invalid discovery document at {url}: {e}") from e


def _unreachable(url: str, e: httpx.HTTPError) -> DiscoveryUnreachableError:
    if isinstance(e, httpx.HTTPStatusError):
        status = e.response.status_code
        logger.error(f"Discovery request to {url} returned HTTP {status}")
        return DiscoveryUnreachableError(f"Discovery endpoint {url} returned HTTP {status}", url, status)
    logger.error(f"Discovery request to {url} failed: {e}")
    return DiscoveryUnreachableError(f"Failed to fetch discovery document from {url}: {e}", url)


class MetadataFetcher:
    """
    Fetches an IdP's discovery document and parses it into ProviderMetadata.

    Issues exactly one GET per `fetch` call. There is no retry and no caching here;
    callers that want either keep the returned metadata or configure the httpx transport.

    Attributes:
        client (httpx.Client): The HTTP client used for the discovery request.
    """

    def __init__(self, client: httpx.Client | None = None, **client_kwargs: Any) -> None:
        """
        Initialize the MetadataFetcher.

        Args:
            client: External HTTP client (optional). If omitted, one is created and closed with this fetcher.
            **client_kwargs: Options for the internal `httpx.Client` (e.g. `timeout`). Ignored when `client` is given.
        """
        self._internal_client = client is None
        self.client = client if client is not None else httpx.Client(**client_kwargs)

    def __enter__(self) -> "MetadataFetcher":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._internal_client:
            self.client.close()

    def fetch(self, issuer_base_url: str) -> ProviderMetadata:
        """
        Retrieves `<issuer_base_url>/.well-known/openid-configuration`.

        Args:
            issuer_base_url: The issuer URL. A trailing slash is stripped.

        Returns:
            ProviderMetadata: The parsed, immutable provider capabilities.

        Raises:
            DiscoveryUnreachableError: If the request fails or the status is not 2xx.
            MalformedMetadataError: If the body is not JSON or misses a required field.
            OversizedResponseError: If the body exceeds the size limit.
        """
        url = discovery_url(issuer_base_url)
        with tracer.start_as_current_span("oidc.discovery") as span:
            span.set_attribute("oidc.discovery_url", url)
            try:
                data = safe_json_fetch(self.client, url)
            except httpx.HTTPError as e:
                raise _unreachable(url, e) from e
            except ValueError as e:
                raise MalformedMetadataError(f"Discovery document at {url} is not valid JSON: {e}") from e

            metadata = parse_metadata(data, url)
            logger.debug(f"Discovered OIDC provider {metadata.issuer}")
            return metadata


class MetadataFetcherAsync:
    """
    Async twin of MetadataFetcher over `httpx.AsyncClient`.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, **client_kwargs: Any) -> None:
        self._internal_client = client is None
        self.client = client if client is not None else httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> "MetadataFetcherAsync":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._internal_client:
            await self.client.aclose()

    async def fetch(self, issuer_base_url: str) -> ProviderMetadata:
        """
        Retrieves and parses the discovery document. See `MetadataFetcher.fetch`.
        """
        url = discovery_url(issuer_base_url)
        with tracer.start_as_current_span("oidc.discovery") as span:
            span.set_attribute("oidc.discovery_url", url)
            try:
                data = await safe_json_fetch_async(self.client, url)
            except httpx.HTTPError as e:
                raise _unreachable(url, e) from e
            except ValueError as e:
                raise MalformedMetadataError(f"Discovery document at {url} is not valid JSON: {e}") from e

            metadata = parse_metadata(data, url)
            logger.debug(f"Discovered OIDC provider {metadata.issuer}")
            return metadata
