from dataclasses import dataclass
from datetime import datetime
from typing import Any

from typing_extensions import Protocol


class User(Protocol):
    id: Any
    email: str
    email_verified: datetime | None


@dataclass
class VerificationToken:
    identifier: str
    # Hashed with the provider secret, never the value sent by email
    token: str
    expires: datetime


class Adapter(Protocol):
    """Persistent storage used while starting a sign-in.

    Only lookups and verification token writes happen here, users are
    created later, once the sign-in is completed.
    """

    async def get_user_by_email(self, email: str) -> User | None: ...

    async def create_verification_token(
        self, verification_token: VerificationToken
    ) -> VerificationToken | None: ...


class SecondaryStorage(Protocol):
    def set(self, key: str, value: str): ...

