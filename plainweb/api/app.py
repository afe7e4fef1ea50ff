"""
FastAPI Application - Serves the compiled site.

Endpoints:
    GET    /assets/...           Static files from the local assets directory
    GET    /api/v1/health        Health check
    GET    /api/v1/build         State of the served build
    POST   /api/v1/build         Rebuild (optionally ?force=true to skip the cache)
    GET    /api/v1/routes        Paths currently served
    GET    /{path}               Compiled pages

Pages are rendered per request from the frozen RouteTable held by
SiteService. A rebuild swaps the table only once it is complete.

For running directly: uvicorn --factory plainweb.api.app:create_app_from_env
"""

from typing import Annotated, Union
import os

from fastapi import FastAPI, Query
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from .. import __version__
from ..errors import MissingCredential, UpstreamError
from ..render.routes import HTML_CONTENT_TYPE
from .schemas import BuildResponse, ErrorCode, ErrorResponse, HealthResponse, RoutesResponse
from .service import SiteService

# Environment configuration
PLAINWEB_ROOT = os.getenv("PLAINWEB_ROOT", None)

ASSETS_MOUNT = "/assets"


def create_app(service: SiteService) -> FastAPI:
    """
    Create the FastAPI application for a site service.

    The service may or may not have been built already; pages are
    looked up on every request.
    """
    app = FastAPI(
        title="plainweb",
        description="Plain-language website compiler. Pages are compiled at build time and served from memory.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # assets/ may not exist yet; it is looked up per request
    app.mount(
        ASSETS_MOUNT,
        StaticFiles(directory=service.compiler.config.assets_dir, check_dir=False),
        name="assets",
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: dict | None = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    # =========================================================================
    # Build Endpoints
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Build"])
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__, built=service.is_built)

    @app.get("/api/v1/build", response_model=BuildResponse, tags=["Build"], summary="State of the served build")
    async def get_build() -> BuildResponse:
        return service.build_info()

    @app.post(
        "/api/v1/build",
        response_model=BuildResponse,
        responses={
            500: {"model": ErrorResponse, "description": "Source unreadable"},
            502: {"model": ErrorResponse, "description": "Model API failed"},
            503: {"model": ErrorResponse, "description": "No model API key"},
        },
        tags=["Build"],
        summary="Rebuild the site",
    )
    def rebuild(
        force: Annotated[bool, Query(description="Skip the cached plan")] = False,
    ) -> Union[BuildResponse, JSONResponse]:
        """
        Rebuild the site and swap in the new routes.

        On failure the previous routes keep being served.
        """
        try:
            service.rebuild(force=force)
        except MissingCredential as e:
            return make_error_response(ErrorCode.MISSING_CREDENTIAL, str(e), status_code=503)
        except UpstreamError as e:
            return make_error_response(
                ErrorCode.UPSTREAM_ERROR,
                str(e),
                status_code=502,
                details={"status_code": e.status_code},
            )
        except OSError as e:
            return make_error_response(ErrorCode.SOURCE_UNREADABLE, str(e), status_code=500)
        return service.build_info()

    @app.get("/api/v1/routes", response_model=RoutesResponse, tags=["Build"])
    async def list_routes() -> RoutesResponse:
        paths = service.routes.paths() if service.routes is not None else []
        return RoutesResponse(routes=paths, count=len(paths))

    # =========================================================================
    # Pages
    # =========================================================================

    @app.get("/{page_path:path}", response_class=HTMLResponse, include_in_schema=False)
    async def serve_page(page_path: str) -> HTMLResponse:
        routes = service.routes
        if routes is None:
            return HTMLResponse("<h1>Site not built</h1>", status_code=503)

        path = "/" + page_path
        route = routes.get(path)
        if route is None and len(path) > 1 and path.endswith("/"):
            route = routes.get(path.rstrip("/"))
        if route is None:
            return HTMLResponse("<h1>Not Found</h1>", status_code=404)

        return HTMLResponse(route.render(), headers={"Content-Type": HTML_CONTENT_TYPE})

    return app


def create_app_from_env() -> FastAPI:
    """
    Build the project at PLAINWEB_ROOT (or the working directory) and
    return an app serving it.
    """
    from ..compiler import CompilerConfig, SiteCompiler

    service = SiteService(SiteCompiler(CompilerConfig.load(PLAINWEB_ROOT)))
    service.rebuild()
    return create_app(service)
