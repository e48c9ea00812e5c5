import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

from typing_extensions import Protocol

from ._authorization import AllowAll, AuthorizationPolicy
from ._config import Config
from ._email import send_verification_request as send_email_verification_request
from ._storage import Adapter, SecondaryStorage
from .models import SignInResult
from .providers.oauth import get_authorization_url as get_oauth_authorization_url
from .utils._is_same_host import is_same_host

if TYPE_CHECKING:
    from .providers import Provider

logger = logging.getLogger(__name__)


class Logger(Protocol):
    def error(self, msg: object, *args: Any, **kwargs: Any) -> None: ...


AuthorizationUrlBuilder = Callable[
    [Mapping[str, str], "SignInOptions"], Awaitable[SignInResult]
]
EmailSender = Callable[[str, "SignInOptions"], Awaitable[str]]


class Context:
    """Process-wide configuration, shared read-only by every sign-in."""

    def __init__(
        self,
        secret: str | None = None,
        adapter: Adapter | None = None,
        secondary_storage: SecondaryStorage | None = None,
        authorization_policy: AuthorizationPolicy | None = None,
        logger: Logger | None = None,
        base_url: str | None = None,
        config: Config | None = None,
        get_authorization_url: AuthorizationUrlBuilder | None = None,
        send_verification_request: EmailSender | None = None,
    ):
        self.secret = secret
        self.adapter = adapter
        self.secondary_storage = secondary_storage
        self.authorization_policy: AuthorizationPolicy = (
            authorization_policy or AllowAll()
        )
        self.logger: Logger = logger or logging.getLogger("cross_signin")
        self.base_url = base_url
        self.config: Config = config or {}
        self.get_authorization_url = (
            get_authorization_url or get_oauth_authorization_url
        )
        self.send_verification_request = (
            send_verification_request or send_email_verification_request
        )

    @property
    def trusted_origins(self) -> list[str]:
        return self.config.get("trusted_origins", [])

    def is_valid_redirect_uri(self, redirect_uri: str) -> bool:
        parsed = urlparse(redirect_uri)

        # Relative paths stay on our own host
        if not parsed.scheme and not parsed.netloc:
            return redirect_uri.startswith("/") and not redirect_uri.startswith("//")

        for origin in self.trusted_origins:
            if is_same_host(parsed.netloc, origin):
                return True

        return False

    def resolve_callback_url(self, callback_url: Any) -> str | None:
        if isinstance(callback_url, str) and callback_url:
            if self.is_valid_redirect_uri(callback_url):
                return callback_url

            logger.warning("Ignoring untrusted callback URL")

        return self.config.get("callback_url")


@dataclass
class SignInOptions:
    """Everything a single sign-in call needs.

    ``url`` is the base URL of the auth routes (for example
    ``https://app.example.com/api/auth``), sign-in, error and callback
    pages all live below it.
    """

    url: str
    provider: "Provider"
    context: Context
    callback_url: str | None = None

    def __post_init__(self) -> None:
        self.url = self.url.rstrip("/")

    @property
    def adapter(self) -> Adapter | None:
        return self.context.adapter

    @property
    def secondary_storage(self) -> SecondaryStorage | None:
        return self.context.secondary_storage

    @property
    def authorization_policy(self) -> AuthorizationPolicy:
        return self.context.authorization_policy

    @property
    def logger(self) -> Logger:
        return self.context.logger

    @property
    def secret(self) -> str | None:
        return self.context.secret

    @property
    def get_authorization_url(self) -> AuthorizationUrlBuilder:
        return self.context.get_authorization_url

    @property
    def send_verification_request(self) -> EmailSender:
        return self.context.send_verification_request
