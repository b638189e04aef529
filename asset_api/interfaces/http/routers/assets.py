"""Owner-scoped asset endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from asset_api.core.security import get_current_caller
from asset_api.interfaces.http.deps import get_asset_handlers, read_json_body
from asset_api.modules.assets.handlers import AssetHandlers, Outcome
from asset_api.modules.assets.models import CallerIdentity
from asset_api.schemas import AssetListResponse, AssetResponse, ErrorEnvelope

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorEnvelope},
    401: {"model": ErrorEnvelope},
    404: {"model": ErrorEnvelope},
    500: {"model": ErrorEnvelope},
    503: {"model": ErrorEnvelope},
}


def _respond(outcome: Outcome) -> Response:
    body = outcome.body()
    if body is None:
        return Response(status_code=outcome.status_code)
    return JSONResponse(status_code=outcome.status_code, content=body)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={201: {"model": AssetResponse}, **_ERROR_RESPONSES},
    summary="Create an asset",
)
async def create_asset(
    caller: CallerIdentity = Depends(get_current_caller),
    body: Any = Depends(read_json_body),
    handlers: AssetHandlers = Depends(get_asset_handlers),
) -> Response:
    return _respond(await handlers.create(caller, body))


@router.get(
    "",
    responses={200: {"model": AssetListResponse}, **_ERROR_RESPONSES},
    summary="List the caller's assets",
)
async def list_assets(
    request: Request,
    caller: CallerIdentity = Depends(get_current_caller),
    handlers: AssetHandlers = Depends(get_asset_handlers),
) -> Response:
    return _respond(await handlers.list(caller, dict(request.query_params)))


@router.get(
    "/{asset_id}",
    responses={200: {"model": AssetResponse}, **_ERROR_RESPONSES},
    summary="Get an asset",
)
async def get_asset(
    asset_id: str,
    caller: CallerIdentity = Depends(get_current_caller),
    handlers: AssetHandlers = Depends(get_asset_handlers),
) -> Response:
    return _respond(await handlers.get(caller, asset_id))


@router.patch(
    "/{asset_id}",
    responses={200: {"model": AssetResponse}, **_ERROR_RESPONSES},
    summary="Partially update an asset",
)
async def update_asset(
    asset_id: str,
    caller: CallerIdentity = Depends(get_current_caller),
    body: Any = Depends(read_json_body),
    handlers: AssetHandlers = Depends(get_asset_handlers),
) -> Response:
    return _respond(await handlers.update(caller, asset_id, body))


@router.delete(
    "/{asset_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_ERROR_RESPONSES,
    summary="Delete an asset (idempotent)",
)
async def delete_asset(
    asset_id: str,
    caller: CallerIdentity = Depends(get_current_caller),
    handlers: AssetHandlers = Depends(get_asset_handlers),
) -> Response:
    return _respond(await handlers.delete(caller, asset_id))
