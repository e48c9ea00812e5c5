import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Literal

import httpx
from pydantic import BaseModel, ValidationError

from ..exceptions import CrossSignInException
from ..models import OAuth2AuthorizationRequestData, SignInResult
from ..utils._checks import create_pkce_pair, generate_nonce, generate_state
from ..utils._url import with_query_params

if TYPE_CHECKING:
    from .._context import SignInOptions

logger = logging.getLogger(__name__)

Check = Literal["state", "pkce", "nonce"]

# Query parameters that only make sense to us and are never forwarded
# to the provider
INTERNAL_QUERY_PARAMS = frozenset({"callbackUrl"})


class OIDCDiscoveryDocument(BaseModel):
    issuer: str
    authorization_endpoint: str
    token_endpoint: str | None = None
    userinfo_endpoint: str | None = None


class OAuth2Provider:
    type: ClassVar[Literal["oauth", "oidc"]] = "oauth"
    id: ClassVar[str]
    authorization_endpoint: ClassVar[str]
    scopes: ClassVar[list[str]]
    supports_pkce: ClassVar[bool] = False

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        authorization_params: dict[str, str] | None = None,
    ):
        """
        Initialize the OAuth2 provider.

        Args:
            client_id: OAuth2 client ID.
            client_secret: OAuth2 client secret.
            authorization_params: Extra parameters always sent to the
                authorization endpoint (e.g. ``{"prompt": "consent"}``).
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.authorization_params = authorization_params or {}

    @property
    def checks(self) -> list[Check]:
        checks: list[Check] = ["state"]

        if self.supports_pkce:
            checks.append("pkce")

        return checks

    async def resolve_authorization_endpoint(self) -> str:
        return self.authorization_endpoint

    def get_redirect_params(self, redirect_uri: str) -> dict[str, str]:
        """
        Generate the query parameters for the redirect to the authorization endpoint.
        """
        return {
            "client_id": self.client_id,
            "scope": " ".join(self.scopes),
            "redirect_uri": redirect_uri,
            "response_type": "code",
            **self.authorization_params,
        }

    async def get_authorization_url(
        self, query: Mapping[str, str], options: "SignInOptions"
    ) -> SignInResult:
        """
        Build the URL of the provider's authorization page.

        Parameters from the inbound query are forwarded to the provider and
        take precedence over the configured ones, the security checks (state,
        PKCE and nonce) are always generated here and can't be overridden.
        The values needed to complete the flow are kept in the secondary
        storage, keyed by state.
        """
        storage = options.secondary_storage

        if storage is None:
            raise CrossSignInException(
                "missing_secondary_storage",
                "A secondary storage is required to sign in with OAuth providers",
            )

        endpoint = await self.resolve_authorization_endpoint()
        redirect_uri = f"{options.url}/callback/{self.id}"

        params = self.get_redirect_params(redirect_uri)
        params.update(
            (key, value)
            for key, value in query.items()
            if key not in INTERNAL_QUERY_PARAMS
        )

        state = generate_state()
        params["state"] = state

        code_verifier: str | None = None
        nonce: str | None = None

        if "pkce" in self.checks:
            code_verifier, code_challenge = create_pkce_pair()
            params["code_challenge"] = code_challenge
            params["code_challenge_method"] = "S256"

        if "nonce" in self.checks:
            nonce = generate_nonce()
            params["nonce"] = nonce

        data = OAuth2AuthorizationRequestData(
            provider=self.id,
            state=state,
            redirect_uri=redirect_uri,
            callback_url=options.callback_url,
            provider_code_verifier=code_verifier,
            nonce=nonce,
            created_at=datetime.now(tz=timezone.utc),
        )

        storage.set(
            f"oauth:authorization_request:{state}",
            data.model_dump_json(),
            # TODO: ttl
        )

        logger.debug("Redirecting to %s authorization endpoint", self.id)

        return SignInResult(redirect=with_query_params(endpoint, params))


class OIDCProvider(OAuth2Provider):
    type = "oidc"
    issuer: ClassVar[str]
    scopes = ["openid", "email", "profile"]
    supports_pkce = True

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        authorization_params: dict[str, str] | None = None,
        issuer: str | None = None,
    ):
        super().__init__(client_id, client_secret, authorization_params)

        if issuer:
            self.issuer = issuer

    @property
    def checks(self) -> list[Check]:
        return [*super().checks, "nonce"]

    async def resolve_authorization_endpoint(self) -> str:
        # Providers can skip discovery by configuring the endpoint
        if endpoint := getattr(self, "authorization_endpoint", None):
            return endpoint

        document = await self.discover()

        return document.authorization_endpoint

    async def discover(self) -> OIDCDiscoveryDocument:
        """Fetch the issuer's OpenID Connect discovery document.

        Raises:
            CrossSignInException: If the document can't be fetched or parsed
        """
        url = f"{self.issuer.rstrip('/')}/.well-known/openid-configuration"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    url, headers={"Accept": "application/json"}
                )
                response.raise_for_status()

            return OIDCDiscoveryDocument.model_validate_json(response.text)
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"HTTP error during OIDC discovery: {e.response.status_code} - {e.response.text}"
            )
            raise CrossSignInException(
                "server_error",
                error_description="OIDC discovery failed",
            ) from e
        except (httpx.RequestError, ValidationError) as e:
            logger.error(f"Failed to fetch OIDC discovery document: {str(e)}")
            raise CrossSignInException(
                "server_error",
                error_description="Failed to fetch OIDC discovery document",
            ) from e


async def get_authorization_url(
    query: Mapping[str, str], options: "SignInOptions"
) -> SignInResult:
    provider = options.provider

    if not isinstance(provider, OAuth2Provider):
        raise CrossSignInException(
            "invalid_provider",
            f"Provider {provider.id} doesn't support the authorization code flow",
        )

    return await provider.get_authorization_url(query, options)
