import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING
from urllib.parse import urlencode

from ._storage import VerificationToken
from .exceptions import CrossSignInException
from .providers.email import EmailProvider, VerificationRequest
from .utils._checks import hash_token
from .utils._maybe_await import maybe_await

if TYPE_CHECKING:
    from ._context import SignInOptions

logger = logging.getLogger(__name__)


async def send_verification_request(email: str, options: "SignInOptions") -> str:
    """
    Store a verification token and send the sign-in link for ``email``.

    The token is stored (hashed) before the link is sent, so a delivered
    link always has a matching token. Returns the URL of the page telling
    the user to check their inbox.
    """
    provider = options.provider
    adapter = options.adapter

    if not isinstance(provider, EmailProvider):
        raise CrossSignInException(
            "invalid_provider", f"Provider {provider.id} can't send emails"
        )

    if adapter is None:
        raise CrossSignInException(
            "missing_adapter", "An adapter is required to sign in with email"
        )

    secret = provider.secret or options.secret

    if not secret:
        raise CrossSignInException(
            "missing_secret", "A secret is required to sign in with email"
        )

    token: str | None = None

    if provider.generate_verification_token:
        token = await maybe_await(provider.generate_verification_token())

    token = token or secrets.token_hex(32)
    expires = datetime.now(tz=timezone.utc) + timedelta(seconds=provider.max_age)

    query = {"token": token, "email": email}

    if options.callback_url:
        query = {"callbackUrl": options.callback_url, **query}

    url = f"{options.url}/callback/{provider.id}?{urlencode(query)}"

    await adapter.create_verification_token(
        VerificationToken(
            identifier=email,
            token=hash_token(token, secret),
            expires=expires,
        )
    )

    await maybe_await(
        provider.send_verification_request(
            VerificationRequest(
                identifier=email,
                token=token,
                expires=expires,
                url=url,
                provider=provider,
            )
        )
    )

    logger.debug("Sent verification request with %s", provider.id)

    params = urlencode({"provider": provider.id, "type": provider.type})

    return f"{options.url}/verify-request?{params}"
