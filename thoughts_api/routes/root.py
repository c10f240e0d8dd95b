"""
Happy Thoughts API — Root / Discovery Route
=============================================

What:  GET / returns a welcome message and every registered API route.
How:   Reads the paths of the application's OpenAPI schema, so new routers
       show up automatically. Documentation routes (/docs, /openapi.json)
       are not part of the schema and are not listed.
"""

from fastapi import APIRouter, FastAPI, Request

from thoughts_api.schemas.thought import RouteInfo, WelcomeResponse

router = APIRouter(tags=["Root"])

WELCOME_MESSAGE = "Welcome to Happy Thoughts API!"

HTTP_METHODS = {"get", "post", "put", "patch", "delete", "options"}


def list_routes(app: FastAPI) -> list[RouteInfo]:
    """Method and path of every API route, in registration order."""
    paths = app.openapi().get("paths", {})
    return [
        RouteInfo(
            path=path,
            methods=sorted(method.upper() for method in operations if method in HTTP_METHODS),
        )
        for path, operations in paths.items()
    ]


@router.get("/", response_model=WelcomeResponse, summary="API discovery")
async def root(request: Request) -> WelcomeResponse:
    return WelcomeResponse(message=WELCOME_MESSAGE, routes=list_routes(request.app))
