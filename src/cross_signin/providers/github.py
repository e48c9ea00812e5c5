from .oauth import OAuth2Provider


class GitHubProvider(OAuth2Provider):
    id = "github"

    authorization_endpoint = "https://github.com/login/oauth/authorize"
    scopes = ["read:user", "user:email"]
    supports_pkce = True
