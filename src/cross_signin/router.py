import logging
from collections.abc import Awaitable, Callable
from itertools import chain
from typing import Any

from cross_web import AsyncHTTPRequest, Response
from fastapi import APIRouter
from pydantic import TypeAdapter, ValidationError

from ._context import Context, SignInOptions
from ._signin import signin
from .providers import Provider
from .utils._url import auth_base_url

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

BodyAdapter: TypeAdapter[dict[str, Any]] = TypeAdapter(dict[str, Any])


async def read_body(request: AsyncHTTPRequest) -> dict[str, Any]:
    """Read a JSON or form body, anything unreadable counts as empty."""
    content_type = (request.content_type or "").lower()

    if content_type.startswith(FORM_CONTENT_TYPES):
        try:
            form_data = await request.get_form_data()
        except ValueError as e:
            logger.warning("Invalid form body in sign-in request: %s", e)
            return {}

        # uploaded files are not sign-in fields
        return {
            key: value
            for key, value in form_data.form.items()
            if isinstance(value, str)
        }

    body = await request.get_body()

    if not body:
        return {}

    try:
        return BodyAdapter.validate_json(body)
    except ValidationError as e:
        logger.warning("Invalid JSON body in sign-in request: %s", e)
        return {}


class Route:
    def __init__(
        self,
        path: str,
        methods: list[str],
        function: Callable[[AsyncHTTPRequest, Context], Awaitable[Response]],
        operation_id: str,
        summary: str,
    ):
        self.path = path
        self.methods = methods
        self.function = function
        self.operation_id = operation_id
        self.summary = summary

    def to_fastapi_endpoint(self, context: Context) -> Callable[..., Any]:
        from fastapi import Request as FastAPIRequest
        from fastapi import Response as FastAPIResponse

        async def endpoint(request: FastAPIRequest) -> FastAPIResponse:
            response = await self.function(
                AsyncHTTPRequest.from_fastapi(request), context
            )

            return response.to_fastapi()

        return endpoint


def signin_routes(provider: Provider) -> list[Route]:
    async def start_signin(request: AsyncHTTPRequest, context: Context) -> Response:
        query = dict(request.query_params)
        body = await read_body(request) if request.method == "POST" else {}

        options = SignInOptions(
            # .../signin/<provider id> -> ...
            url=auth_base_url(str(request.url), 2, context.base_url),
            provider=provider,
            context=context,
            callback_url=context.resolve_callback_url(
                body.get("callbackUrl") or query.get("callbackUrl")
            ),
        )

        result = await signin(query, body, options)

        return result.to_response()

    return [
        Route(
            path=f"/signin/{provider.id}",
            methods=[method],
            function=start_signin,
            operation_id=f"{provider.id}_signin_{method.lower()}",
            summary=f"Sign in with {provider.id}",
        )
        for method in ("GET", "POST")
    ]


class SignInRouter(APIRouter):
    def __init__(self, providers: list[Provider], context: Context):
        super().__init__()

        self._context = context
        self.providers = {provider.id: provider for provider in providers}

        for route in chain.from_iterable(signin_routes(p) for p in providers):
            self.add_api_route(
                route.path,
                route.to_fastapi_endpoint(self._context),
                methods=route.methods,
                operation_id=route.operation_id,
                summary=route.summary,
            )
