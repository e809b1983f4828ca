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
Size-limited JSON fetching over httpx.
"""

import json
from typing import Any

import httpx

from coreason_oidc.exceptions import OversizedResponseError

MAX_RESPONSE_BYTES = 1_000_000


def _check_content_length(response: httpx.Response, limit: int) -> None:
    content_length = response.headers.get("Content-Length")
    if not content_length:
        return
    try:
        declared = int(content_length)
    except ValueError:
        return
    if declared > limit:
        raise OversizedResponseError(f"Response from {response.url} declares {declared} bytes (limit {limit})")


def _append_chunk(buffer: bytearray, chunk: bytes, limit: int, url: httpx.URL) -> None:
    buffer.extend(chunk)
    if len(buffer) > limit:
        raise OversizedResponseError(f"Response from {url} exceeds {limit} bytes")


def safe_json_fetch(client: httpx.Client, url: str, limit: int = MAX_RESPONSE_BYTES) -> Any:
    """
    GETs `url` and decodes the body as JSON, reading at most `limit` bytes.

    Raises:
        httpx.HTTPStatusError: If the response status is not 2xx.
        httpx.HTTPError: On transport failures.
        OversizedResponseError: If the body is larger than `limit`.
        ValueError: If the body is not valid JSON.
    """
    with client.stream("GET", url, follow_redirects=True) as response:
        response.raise_for_status()
        _check_content_length(response, limit)
        content = bytearray()
        for chunk in response.iter_bytes():
            _append_chunk(content, chunk, limit, response.url)
    return json.loads(content)


async def safe_json_fetch_async(client: httpx.AsyncClient, url: str, limit: int = MAX_RESPONSE_BYTES) -> Any:
    """
    Async twin of `safe_json_fetch`.
    """
    async with client.stream("GET", url, follow_redirects=True) as response:
        response.raise_for_status()
        _check_content_length(response, limit)
        content = bytearray()
        async for chunk in response.aiter_bytes():
            _append_chunk(content, chunk, limit, response.url)
    return json.loads(content)
