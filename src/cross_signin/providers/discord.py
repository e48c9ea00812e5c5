from .oauth import OAuth2Provider


class DiscordProvider(OAuth2Provider):
    # NOTE: Discord users without an email will fail authentication
    # (email is required).
    id = "discord"
    authorization_endpoint = "https://discord.com/oauth2/authorize"
    scopes = ["identify", "email"]
    supports_pkce = True
