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
Configuration for the coreason-oidc package.
"""

from typing import Annotated, Any, Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class CoreasonOidcConfig(BaseSettings):
    """
    Settings for building an OidcClient from the environment.

    Attributes:
        issuer (str): The issuer base URL; discovery is fetched from `<issuer>/.well-known/openid-configuration`.
        client_id (str): The OAuth 2.0 client identifier.
        client_secret (SecretStr): The client secret. Protected from logging.
        redirect_uri (str): The registered redirect URI.
        scopes (list[str]): Requested scopes. Accepts a space or comma separated string from env.
        pkce_method (str | None): "S256", "plain", or None to disable PKCE.
        http_timeout (float): Timeout in seconds for all IdP network operations.
        unsafe_local_dev (bool): Allows a plain http issuer for local testing.
    """

    model_config = SettingsConfigDict(
        env_prefix="COREASON_OIDC_",
        case_sensitive=False,
    )

    issuer: str
    client_id: str
    client_secret: SecretStr
    redirect_uri: str
    scopes: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["openid"])
    pkce_method: Literal["S256", "plain"] | None = None
    http_timeout: float = Field(default=10.0, gt=0, description="Timeout in seconds for all IdP network operations.")
    unsafe_local_dev: bool = False

    @field_validator("issuer")
    @classmethod
    def normalize_issuer(cls, v: str) -> str:
        """Strips whitespace and any trailing slash."""
        return v.strip().rstrip("/")

    @field_validator("scopes", mode="before")
    @classmethod
    def split_scopes(cls, v: Any) -> Any:
        """Splits `"openid profile"` or `"openid,profile"` into a list."""
        if isinstance(v, str):
            return [s for s in v.replace(",", " ").split() if s]
        return v

    @model_validator(mode="after")
    def validate_https(self) -> "CoreasonOidcConfig":
        """
        Ensures that the issuer uses HTTPS, unless strictly opted out for local dev.
        """
        if self.issuer.startswith("http://") and not self.unsafe_local_dev:
            raise ValueError("HTTPS is required for production. Set 'unsafe_local_dev=True' only for local testing.")
        return self
