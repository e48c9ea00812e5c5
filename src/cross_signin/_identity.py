import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from ._storage import Adapter, User
from .providers.email import EmailProvider

logger = logging.getLogger(__name__)


@dataclass
class ProvisionalUser:
    """Stand-in for a user we haven't stored yet.

    Its id is the email address, it is never persisted while starting a
    sign-in.
    """

    id: str
    email: str
    email_verified: datetime | None = None


@dataclass
class Account:
    provider_account_id: str
    user_id: Any
    type: Literal["oauth", "oidc", "email"]
    provider: str


async def resolve_user(email: str, adapter: Adapter | None = None) -> User:
    """Find the user with this email, or synthesize a provisional one.

    A missing adapter or a missing user are not errors, adapter failures
    are propagated.
    """
    if adapter is None:
        return ProvisionalUser(id=email, email=email)

    user = await adapter.get_user_by_email(email)

    if user is None:
        logger.debug("No user found for email, using a provisional one")

        return ProvisionalUser(id=email, email=email)

    return user


def build_email_account(email: str, user: User, provider: EmailProvider) -> Account:
    return Account(
        provider_account_id=email,
        user_id=user.id,
        type="email",
        provider=provider.id,
    )
