from .authorization_request import OAuth2AuthorizationRequestData
from .sign_in_result import SignInResult

__all__ = ["OAuth2AuthorizationRequestData", "SignInResult"]
