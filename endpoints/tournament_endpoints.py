# tournament_endpoints.py
from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from coordination.errors import InvalidRequest
from persistence.repositories import AsyncTournamentRepository
from settings import Settings

router = APIRouter(tags=["tournament"])
logger = logging.getLogger(__name__)

API_HEADER = "X-Pool-Tournament-API"
API_VERSION = "1"
CLIENT_ID_HEADER = "x-client-id"
REV_HEADER = "x-rev"


class PrettyJSONResponse(JSONResponse):
    """JSON bodies are pretty-printed, matching what browser clients already parse."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, indent=2, ensure_ascii=False).encode("utf-8")


def get_repository(request: Request) -> AsyncTournamentRepository:
    return request.app.state.repository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def _client_id(request: Request) -> str:
    return str(request.headers.get(CLIENT_ID_HEADER) or "")


async def _json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidRequest(str(e)) from e


def lock_view(lock: dict[str, Any]) -> dict[str, Any]:
    view = {"owner": lock.get("owner"), "expiresAt": lock.get("expires_at", 0)}
    for key, out in (("valid", "valid"), ("ttl_ms", "ttlMs"), ("granted", "granted")):
        if key in lock:
            view[out] = lock[key]
    return view


@router.get("/")
async def index(settings: Settings = Depends(get_app_settings)):
    html_path = settings.ui_dir / "index.html"
    if not html_path.is_file():
        return PlainTextResponse("index.html not found", status_code=404)
    return HTMLResponse(html_path.read_text(encoding="utf-8"))


@router.get("/tournament")
async def get_tournament(repo: AsyncTournamentRepository = Depends(get_repository)):
    return PrettyJSONResponse(await repo.get_state())


@router.get("/lock")
async def get_lock(repo: AsyncTournamentRepository = Depends(get_repository)):
    return PrettyJSONResponse(lock_view(await repo.get_lock()))


@router.post("/lock")
async def post_lock(request: Request, repo: AsyncTournamentRepository = Depends(get_repository)):
    data = await _json_body(request)
    client_id = str(data.get("clientId") or "") if isinstance(data, dict) else ""
    result = await repo.acquire_lock(client_id)
    return PrettyJSONResponse(lock_view(result))


@router.post("/tournament")
async def post_tournament(
    request: Request,
    repo: AsyncTournamentRepository = Depends(get_repository),
    settings: Settings = Depends(get_app_settings),
):
    client_id = _client_id(request)
    incoming = await _json_body(request)

    base_rev = request.headers.get(REV_HEADER)
    if base_rev is None and isinstance(incoming, dict):
        base_rev = incoming.get("rev")

    nxt = await repo.put_state(client_id, base_rev, incoming)
    if settings.debug_log_requests:
        logger.info("POST /tournament client=%s rev=%s", client_id or "-", nxt["rev"])
    return PrettyJSONResponse(nxt)


@router.post("/reset")
async def post_reset(
    request: Request,
    repo: AsyncTournamentRepository = Depends(get_repository),
    settings: Settings = Depends(get_app_settings),
):
    client_id = _client_id(request)
    nxt = await repo.reset_state(client_id)
    if settings.debug_log_requests:
        logger.info("POST /reset client=%s rev=%s", client_id or "-", nxt["rev"])
    return PrettyJSONResponse(nxt)


@router.options("/{path:path}")
async def options_any(path: str):
    # Browser preflights are answered by CORSMiddleware; any other OPTIONS is a bare 204.
    return Response(status_code=204)
