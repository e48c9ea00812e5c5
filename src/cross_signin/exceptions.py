from typing import Any


class CrossSignInException(Exception):
    def __init__(self, error: str, error_description: str | None = None) -> None:
        super().__init__(error_description or error)
        self.error = error
        self.error_description = error_description


class SignInError(CrossSignInException):
    """Raised (and logged) whenever starting a sign-in fails.

    Wraps the original exception in ``cause`` and keeps the provider that was
    being used in ``metadata``.
    """

    name = "SignInError"

    def __init__(self, cause: BaseException, metadata: dict[str, Any]) -> None:
        super().__init__(self.name, f"{type(cause).__name__}: {cause}")
        self.cause = cause
        self.metadata = metadata
        self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.name} ({self.metadata}): {self.error_description}"
