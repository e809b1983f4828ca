import asyncio
import contextlib
import os
import sys

# Add src to path for running directly
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

from coreason_oidc import CoreasonOidcError, OidcClientAsync
from coreason_oidc.config import CoreasonOidcConfig


async def main() -> None:
    """
    Demonstrates the Authorization Code flow against a discovered provider.
    Reads COREASON_OIDC_* variables, e.g.:

        COREASON_OIDC_ISSUER=https://accounts.example.com
        COREASON_OIDC_CLIENT_ID=my-app
        COREASON_OIDC_CLIENT_SECRET=...
        COREASON_OIDC_REDIRECT_URI=http://localhost:8000/callback
        COREASON_OIDC_SCOPES="openid profile email"
        COREASON_OIDC_PKCE_METHOD=S256
    """
    config = CoreasonOidcConfig()  # type: ignore[call-arg]
    print(f">>> Discovering {config.issuer}")

    try:
        oidc = await OidcClientAsync.from_config(config)
    except CoreasonOidcError as e:
        print(f">>> Discovery failed: {e}")
        return

    async with oidc:
        print(f">>> Token endpoint auth: {oidc.auth_strategy.name}")
        request = oidc.build_authorization_url()
        print(f">>> Open in a browser:\n    {request.url}")

        redirect = input(">>> Paste the full redirect URL: ").strip()
        params = dict(p.split("=", 1) for p in redirect.split("?", 1)[-1].split("&") if "=" in p)
        if params.get("state") != request.state:
            print(">>> State mismatch, aborting")
            return

        try:
            token = await oidc.exchange_code(params["code"], code_verifier=request.code_verifier)
            identity = await oidc.fetch_identity(token)
        except CoreasonOidcError as e:
            print(f">>> Login failed: {e}")
            return

        print(f">>> Logged in as {identity.subject} ({identity.email or 'no email'})")
        if oidc.end_session_endpoint:
            print(f">>> Logout URL: {oidc.end_session_endpoint}")


if __name__ == "__main__":
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())
