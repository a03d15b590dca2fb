from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dotenv import load_dotenv

from coordination.coordinator import TournamentCoordinator
from coordination.errors import ConflictError, InvalidRequest, LockError, StorageUnavailable
from endpoints.tournament_endpoints import API_HEADER, API_VERSION, PrettyJSONResponse, lock_view
from persistence.repositories import AsyncCoordinatorRepository
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidRequest)
    async def invalid_request_handler(request: Request, exc: InvalidRequest):
        body: dict = {"error": exc.message}
        if exc.server_rev is not None:
            body["serverRev"] = exc.server_rev
        return PrettyJSONResponse(body, status_code=400)

    @app.exception_handler(LockError)
    async def lock_error_handler(request: Request, exc: LockError):
        return PrettyJSONResponse({"error": "read-only", "lock": lock_view(exc.lock)}, status_code=403)

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return PrettyJSONResponse(
            {"error": "conflict", "serverRev": exc.server_rev, "state": exc.state},
            status_code=409,
        )

    @app.exception_handler(StorageUnavailable)
    async def storage_unavailable_handler(request: Request, exc: StorageUnavailable):
        logger.warning("STORAGE: %s", exc.message)
        return PrettyJSONResponse({"error": exc.message}, status_code=503)

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods both read as a plain 404.
        if exc.status_code in (404, 405):
            return PlainTextResponse("Not Found", status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


def create_app(
    settings: Settings | None = None,
    coordinator: TournamentCoordinator | None = None,
) -> FastAPI:
    load_dotenv("local.env")

    from endpoints.tournament_endpoints import router as tournament_router

    settings = settings or get_settings()
    coordinator = coordinator or TournamentCoordinator.from_settings(settings)

    app = FastAPI()
    app.state.settings = settings
    app.state.repository = AsyncCoordinatorRepository(coordinator)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Client-Id", "X-Rev"],
        expose_headers=[API_HEADER],
    )

    @app.middleware("http")
    async def api_version_header(request: Request, call_next):
        response = await call_next(request)
        response.headers[API_HEADER] = API_VERSION
        return response

    _register_error_handlers(app)
    app.include_router(tournament_router)

    return app


def main() -> None:
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    load_dotenv("local.env")
    settings = get_settings()
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level="info")


app = create_app()


if __name__ == "__main__":
    main()
