# ABOUTME: ASGI web entry point exposing the weather session to a browser front end.
# ABOUTME: Creates a Starlette app with city search, weather search, and unit toggle routes.

import contextlib
import logging

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from weatherfusion.config import Settings, Unit
from weatherfusion.deps import WeatherDeps, create_http_client
from weatherfusion.session import SearchView, WeatherSession

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _search_response(view: SearchView) -> JSONResponse:
    status_code = 502 if view.fetch_failed else 200
    return JSONResponse(view.model_dump(mode="json"), status_code=status_code)


def create_app(deps: WeatherDeps) -> Starlette:
    """Build the app around a single session, mirroring the one-page, one-user front end."""
    session = WeatherSession(deps)

    async def cities(request: Request) -> Response:
        view = await session.on_query_input(request.query_params.get("q", ""))
        if view is None:
            return Response(status_code=204)
        return JSONResponse(view.model_dump(mode="json"))

    async def weather(request: Request) -> Response:
        view = await session.on_search_submit(request.query_params.get("q", ""))
        return _search_response(view)

    async def unit(request: Request) -> Response:
        try:
            body = await request.json()
            selected = Unit(body.get("unit"))
        except (ValueError, AttributeError) as e:
            return JSONResponse({"detail": f"Invalid unit selection: {e}"}, status_code=422)
        query = body.get("q", "")
        if not isinstance(query, str):
            return JSONResponse({"detail": "Query must be a string"}, status_code=422)
        view = await session.on_unit_selected(selected, query)
        return _search_response(view)

    async def health(request: Request) -> Response:
        return JSONResponse({"status": "ok", "service": "weatherfusion"})

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        yield
        await deps.http_client.aclose()

    app = Starlette(
        routes=[
            Route("/api/cities", cities, methods=["GET"]),
            Route("/api/weather", weather, methods=["GET"]),
            Route("/api/unit", unit, methods=["POST"]),
            Route("/health", health, methods=["GET"]),
        ],
        lifespan=lifespan,
    )
    app.state.session = session
    return app


_settings = Settings.from_env()
configure_logging(_settings)

app = create_app(WeatherDeps(http_client=create_http_client(), settings=_settings))
