from pydantic import AwareDatetime, BaseModel, Field


class OAuth2AuthorizationRequestData(BaseModel):
    """State kept between the redirect to the provider and its callback."""

    provider: str = Field(description="Id of the provider the user was sent to")
    state: str
    redirect_uri: str = Field(description="Our callback URL sent to the provider")
    callback_url: str | None = Field(
        None, description="Where to send the user once sign-in completes"
    )
    provider_code_verifier: str | None = None  # PKCE verifier for provider OAuth flow
    nonce: str | None = None  # OIDC only
    created_at: AwareDatetime
