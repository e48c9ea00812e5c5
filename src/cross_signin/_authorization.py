import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from typing_extensions import Protocol

from ._identity import Account
from ._storage import User
from .models import SignInResult
from .utils._maybe_await import maybe_await
from .utils._url import error_redirect_url

if TYPE_CHECKING:
    from ._context import SignInOptions

logger = logging.getLogger(__name__)


@dataclass
class EmailMetadata:
    # True while the sign-in link is being requested, as opposed to used
    verification_request: bool = True


@dataclass
class SignInAttempt:
    user: User
    account: Account
    email: EmailMetadata | None = None


class AuthorizationPolicy(Protocol):
    """Decides whether a sign-in may go ahead.

    ``evaluate`` returns ``None`` to let the sign-in continue, or the result
    to send back instead (e.g. a redirect to a "not allowed" page).
    """

    async def evaluate(
        self, attempt: SignInAttempt, options: "SignInOptions"
    ) -> SignInResult | None: ...


class AllowAll:
    async def evaluate(
        self, attempt: SignInAttempt, options: "SignInOptions"
    ) -> SignInResult | None:
        return None


SignInCallback = Callable[
    [SignInAttempt], bool | str | None | Awaitable[bool | str | None]
]


class CallbackPolicy:
    """Policy backed by an application ``sign_in(attempt)`` callback.

    The callback returns ``True`` to allow the sign-in or a URL to redirect
    the user there instead. Any falsy value (``False``, ``None``, ``""``)
    denies it and the user ends up on the error page with
    ``error=AccessDenied``. Without a callback every sign-in is allowed.
    """

    def __init__(self, sign_in: SignInCallback | None = None):
        self.sign_in = sign_in

    async def evaluate(
        self, attempt: SignInAttempt, options: "SignInOptions"
    ) -> SignInResult | None:
        if self.sign_in is None:
            return None

        authorized = await maybe_await(self.sign_in(attempt))

        if not authorized:
            logger.debug("User %s not authorized", attempt.user.id)

            return SignInResult(
                redirect=error_redirect_url(options.url, "AccessDenied"),
                status_code=403,
            )

        if isinstance(authorized, str):
            return SignInResult(redirect=authorized)

        return None


async def check_authorized(
    attempt: SignInAttempt, options: "SignInOptions"
) -> SignInResult | None:
    result = await options.authorization_policy.evaluate(attempt, options)

    if result:
        return result

    return None
