from dataclasses import dataclass
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from cross_signin._context import Context, SignInOptions
from cross_signin._storage import SecondaryStorage, VerificationToken
from cross_signin.providers import EmailProvider, VerificationRequest
from cross_signin.providers.oauth import OAuth2Provider

AUTH_URL = "https://app.example.com/api/auth"


@dataclass
class User:
    id: str
    email: str
    email_verified: datetime | None = None


class MemoryStorage(SecondaryStorage):
    def __init__(self):
        self.data = {}

    def set(self, key: str, value: str):
        self.data[key] = value

    def get(self, key: str) -> str | None:
        return self.data.get(key)


class MemoryAdapter:
    def __init__(self):
        self.users = {
            "test": User(id="test", email="test@example.com"),
        }
        self.verification_tokens: list[VerificationToken] = []
        self.lookups: list[str] = []

    async def get_user_by_email(self, email: str) -> User | None:
        self.lookups.append(email)

        return next(
            (user for user in self.users.values() if user.email == email), None
        )

    async def create_verification_token(
        self, verification_token: VerificationToken
    ) -> VerificationToken:
        self.verification_tokens.append(verification_token)

        return verification_token


class BrokenAdapter(MemoryAdapter):
    async def get_user_by_email(self, email: str) -> User | None:
        raise ConnectionError("database is down")


class TestOAuth2Provider(OAuth2Provider):
    __test__ = False
    id = "test"
    authorization_endpoint = "https://test.com/authorize"
    scopes = ["openid", "email", "profile"]
    supports_pkce = True


@pytest.fixture
def secondary_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def adapter() -> MemoryAdapter:
    return MemoryAdapter()


@pytest.fixture
def logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def sent_requests() -> list[VerificationRequest]:
    return []


@pytest.fixture
def email_provider(sent_requests: list[VerificationRequest]) -> EmailProvider:
    async def send_verification_request(request: VerificationRequest) -> None:
        sent_requests.append(request)

    return EmailProvider(send_verification_request=send_verification_request)


@pytest.fixture
def oauth_provider() -> TestOAuth2Provider:
    return TestOAuth2Provider(
        client_id="test_client_id", client_secret="test_client_secret"
    )


@pytest.fixture
def context(
    adapter: MemoryAdapter, secondary_storage: MemoryStorage, logger: MagicMock
) -> Context:
    return Context(
        secret="test-secret",
        adapter=adapter,
        secondary_storage=secondary_storage,
        logger=logger,
        config={"trusted_origins": ["valid-frontend.com"]},
    )


@pytest.fixture
def email_options(context: Context, email_provider: EmailProvider) -> SignInOptions:
    return SignInOptions(url=AUTH_URL, provider=email_provider, context=context)


@pytest.fixture
def oauth_options(
    context: Context, oauth_provider: TestOAuth2Provider
) -> SignInOptions:
    return SignInOptions(url=AUTH_URL, provider=oauth_provider, context=context)
