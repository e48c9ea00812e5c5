from typing import Literal

from .discord import DiscordProvider
from .email import EmailProvider, VerificationRequest, default_normalizer
from .github import GitHubProvider
from .google import GoogleProvider
from .oauth import OAuth2Provider, OIDCProvider

ProviderType = Literal["oauth", "oidc", "email"]
Provider = OAuth2Provider | EmailProvider

__all__ = [
    "DiscordProvider",
    "EmailProvider",
    "GitHubProvider",
    "GoogleProvider",
    "OAuth2Provider",
    "OIDCProvider",
    "Provider",
    "ProviderType",
    "VerificationRequest",
    "default_normalizer",
]
