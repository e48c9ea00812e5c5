from .oauth import OIDCProvider


class GoogleProvider(OIDCProvider):
    """Google sign-in, the authorization endpoint comes from discovery."""

    id = "google"
    issuer = "https://accounts.google.com"
