from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Literal

from ..exceptions import CrossSignInException

ONE_DAY_IN_SECONDS = 24 * 60 * 60


@dataclass
class VerificationRequest:
    """What gets handed to ``send_verification_request``."""

    identifier: str
    # The raw token, only its hash is stored
    token: str
    expires: datetime
    url: str
    provider: EmailProvider


def default_normalizer(email: Any) -> str:
    """Lower-case and trim an email address.

    Only the first two ``@`` separated parts are kept and anything after a
    comma in the domain part is dropped, so ``"Bob@Example.com,evil.com"``
    becomes ``"bob@example.com"``.
    """
    if not email or not isinstance(email, str):
        raise CrossSignInException(
            "invalid_request", "Missing email from request body."
        )

    parts = email.lower().strip().split("@")

    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise CrossSignInException("invalid_request", "Invalid email address.")

    local, domain = parts[0], parts[1].split(",")[0]

    return f"{local}@{domain}"


class EmailProvider:
    """Passwordless sign-in through a link sent by email."""

    type: ClassVar[Literal["email"]] = "email"

    def __init__(
        self,
        send_verification_request: Callable[
            [VerificationRequest], Awaitable[None] | None
        ],
        id: str = "email",
        normalize_identifier: Callable[[Any], str | Awaitable[str]] = (
            default_normalizer
        ),
        max_age: int = ONE_DAY_IN_SECONDS,
        secret: str | None = None,
        generate_verification_token: Callable[[], str | Awaitable[str]]
        | None = None,
    ):
        """
        Args:
            send_verification_request: Delivers the sign-in link, usually by
                sending an email.
            id: Provider id, used in URLs.
            normalize_identifier: Turns the submitted value into the
                canonical email address, raising on invalid input.
            max_age: How long the link stays valid, in seconds.
            secret: Used to hash verification tokens, defaults to the
                context's secret.
            generate_verification_token: Custom token generator.
        """
        self.id = id
        self.send_verification_request = send_verification_request
        self.normalize_identifier = normalize_identifier
        self.max_age = max_age
        self.secret = secret
        self.generate_verification_token = generate_verification_token
