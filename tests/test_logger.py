# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_oidc

import logging
import os
from collections.abc import Generator
from unittest.mock import patch

import pytest

from coreason_oidc.utils.logger import InterceptHandler, configure_logging, logger


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    yield
    configure_logging()


def test_stdlib_records_reach_loguru() -> None:
    """Records from libraries using stdlib logging (httpx, authlib) are intercepted."""
    configure_logging()
    assert any(isinstance(h, InterceptHandler) for h in logging.getLogger().handlers)

    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="INFO")
    try:
        logging.getLogger("httpx").warning("HTTP Request: GET https://idp.example.com")
    finally:
        logger.remove(handler_id)

    assert any("HTTP Request: GET https://idp.example.com" in m for m in messages)


def test_level_from_env() -> None:
    with patch.dict(os.environ, {"COREASON_LOG_LEVEL": "warning"}):
        configure_logging()
    assert logging.getLogger().level == logging.WARNING


def test_invalid_level_falls_back_to_info() -> None:
    with patch.dict(os.environ, {"COREASON_LOG_LEVEL": "chatty"}):
        configure_logging()
    assert logging.getLogger().level == logging.INFO
