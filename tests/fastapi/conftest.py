from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cross_signin._context import Context
from cross_signin.providers import EmailProvider
from cross_signin.router import SignInRouter

from ..conftest import TestOAuth2Provider


@pytest.fixture
def router(
    context: Context,
    oauth_provider: TestOAuth2Provider,
    email_provider: EmailProvider,
) -> SignInRouter:
    return SignInRouter(providers=[oauth_provider, email_provider], context=context)


@pytest.fixture
def test_app(router: SignInRouter) -> FastAPI:
    app = FastAPI()

    app.include_router(router, prefix="/api/auth")

    return app


@pytest.fixture
def client(test_app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(test_app) as c:
        yield c
