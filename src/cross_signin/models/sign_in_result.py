from dataclasses import dataclass

from cross_web import Response


@dataclass(frozen=True)
class SignInResult:
    """Where the user agent should go next.

    This is the only thing a sign-in ever returns, including when it fails
    (in which case ``redirect`` points to the error page).

    ``status_code`` tells callers using ``signin`` directly why they are
    being redirected (403 for a denied sign-in), browsers always get a
    302 from ``to_response`` since they don't follow ``Location`` on
    other statuses.
    """

    redirect: str
    status_code: int = 302

    def to_response(self) -> Response:
        return Response.redirect(self.redirect)
