import logging
from collections.abc import Mapping
from typing import Any

from ._authorization import EmailMetadata, SignInAttempt, check_authorized
from ._context import SignInOptions
from ._identity import build_email_account, resolve_user
from .exceptions import SignInError
from .models import SignInResult
from .providers.email import EmailProvider
from .utils._maybe_await import maybe_await
from .utils._url import error_redirect_url

logger = logging.getLogger(__name__)


async def signin(
    query: Mapping[str, str],
    body: Mapping[str, Any] | None,
    options: SignInOptions,
) -> SignInResult:
    """
    Start signing in with ``options.provider``.

    For OAuth and OIDC providers this redirects to the provider's
    authorization page, for email providers it sends a sign-in link and
    redirects to the "check your email" page.

    This never raises, failures are logged and turned into a redirect to
    the error page.
    """
    provider = options.provider
    provider_type = getattr(provider, "type", None)

    try:
        if provider_type == "oauth" or provider_type == "oidc":
            return await options.get_authorization_url(query, options)
        elif provider_type == "email":
            assert isinstance(provider, EmailProvider)

            return await _email_signin(body or {}, provider, options)

        logger.debug(
            "Unsupported provider type %r, redirecting to the sign-in page",
            provider_type,
        )

        return SignInResult(redirect=f"{options.url}/signin")
    except Exception as e:
        return handle_sign_in_error(e, options)


async def _email_signin(
    body: Mapping[str, Any], provider: EmailProvider, options: SignInOptions
) -> SignInResult:
    email = await maybe_await(provider.normalize_identifier(body.get("email")))

    user = await resolve_user(email, options.adapter)
    account = build_email_account(email, user, provider)

    unauthorized = await check_authorized(
        SignInAttempt(
            user=user,
            account=account,
            email=EmailMetadata(verification_request=True),
        ),
        options,
    )

    if unauthorized:
        return unauthorized

    redirect = await options.send_verification_request(email, options)

    return SignInResult(redirect=redirect)


def handle_sign_in_error(exception: Exception, options: SignInOptions) -> SignInResult:
    error = SignInError(
        exception, {"provider": getattr(options.provider, "id", None)}
    )

    options.logger.error(error, exc_info=error)

    return SignInResult(redirect=error_redirect_url(options.url, error.name))
