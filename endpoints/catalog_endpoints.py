# catalog_endpoints.py
from __future__ import annotations

import asyncio
import hmac
import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from persistence import CatalogError, CatalogStore
from settings import Settings

router = APIRouter(tags=["catalog"])
logger = logging.getLogger(__name__)

ADMIN_TOKEN_HEADER = "X-Admin-Token"


class SaveProductsResponse(BaseModel):
    ok: bool = True
    etag: str


def _store(request: Request) -> CatalogStore:
    return request.app.state.catalog_store


def _settings(request: Request) -> Settings:
    return request.app.state.settings


def _is_admin(request: Request) -> bool:
    expected = _settings(request).admin_token
    provided = request.headers.get(ADMIN_TOKEN_HEADER, "")
    if not expected:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), provided.encode("utf-8"))


@router.get("/api/products")
async def get_products(request: Request) -> Response:
    snapshot = await asyncio.to_thread(_store(request).current)
    return Response(
        content=snapshot.body,
        media_type="application/json",
        headers={"ETag": snapshot.etag},
    )


@router.post("/api/save-products")
async def save_products(request: Request) -> Response:
    if not _is_admin(request):
        return PlainTextResponse("Unauthorized", status_code=401)

    store = _store(request)
    if_match = request.headers.get("If-Match")

    raw = await request.body()
    try:
        result = await asyncio.to_thread(store.save, raw, if_match)
    except CatalogError as e:
        logger.info("CATALOG SAVE: rejected with %d: %s", e.status_code, e.message)
        return PlainTextResponse(e.message, status_code=e.status_code)

    for warning in result.warnings:
        logger.warning("CATALOG SAVE: %s", warning)

    body = SaveProductsResponse(etag=result.etag)
    return JSONResponse(body.model_dump(), headers={"ETag": result.etag})


@router.api_route("/api/save-products", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def save_products_method_not_allowed() -> Response:
    return PlainTextResponse("Method Not Allowed", status_code=405, headers={"Allow": "POST"})

