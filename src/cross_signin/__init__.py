from ._authorization import (
    AllowAll,
    AuthorizationPolicy,
    CallbackPolicy,
    EmailMetadata,
    SignInAttempt,
    check_authorized,
)
from ._config import Config
from ._context import Context, SignInOptions
from ._identity import Account, ProvisionalUser, resolve_user
from ._signin import signin
from ._storage import Adapter, SecondaryStorage, User, VerificationToken
from .exceptions import CrossSignInException, SignInError
from .models import SignInResult

__all__ = [
    "Account",
    "Adapter",
    "AllowAll",
    "AuthorizationPolicy",
    "CallbackPolicy",
    "Config",
    "Context",
    "CrossSignInException",
    "EmailMetadata",
    "ProvisionalUser",
    "SecondaryStorage",
    "SignInAttempt",
    "SignInError",
    "SignInOptions",
    "SignInResult",
    "User",
    "VerificationToken",
    "check_authorized",
    "resolve_user",
    "signin",
]
