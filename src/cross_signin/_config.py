from __future__ import annotations

from typing import TypedDict


class Config(TypedDict, total=False):
    # Where to send the user once sign-in completes, if the request
    # doesn't provide a (trusted) callbackUrl
    callback_url: str

    # Hosts allowed as callbackUrl, "*.example.com" matches subdomains
    trusted_origins: list[str]
