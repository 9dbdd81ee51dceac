"""HTTP handlers for stub configuration and resolution."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from stubflow.core.errors import (
    NoOutputError,
    ParamValidationError,
    StubflowError,
    UnknownOperationError,
    UnsupportedProtocolError,
)
from stubflow.sdk.client import Client
from stubflow.sdk.errors import ServiceError, StubbingDisabledError

from ..dependencies import get_client, get_logger

router = APIRouter()


def _raise_http(exc: Exception) -> None:
    if isinstance(exc, UnknownOperationError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, (ParamValidationError, NoOutputError, UnsupportedProtocolError)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if isinstance(exc, StubbingDisabledError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


@router.get("/operations")
def list_operations(client: Client = Depends(get_client)) -> Dict[str, Any]:
    return {"protocol": client.api.protocol, "operations": client.api.operation_names()}


@router.put("/operations/{operation_name}/stubs")
def configure_stubs(
    operation_name: str,
    stubs: List[Any] = Body(...),
    client: Client = Depends(get_client),
) -> Dict[str, Any]:
    logger = get_logger()
    try:
        client.stub_responses(operation_name, stubs)
    except (StubflowError, StubbingDisabledError) as exc:
        _raise_http(exc)
    logger.info("Configured %s stub(s) for %s", len(stubs), operation_name)
    return {"ok": True, "count": len(stubs)}


@router.delete("/operations/{operation_name}/stubs")
def clear_stubs(operation_name: str, client: Client = Depends(get_client)) -> Dict[str, Any]:
    try:
        client.clear_stubs(operation_name)
    except StubflowError as exc:
        _raise_http(exc)
    return {"ok": True}


@router.post("/operations/{operation_name}")
def invoke_operation(
    operation_name: str,
    params: Optional[Dict[str, Any]] = Body(None),
    client: Client = Depends(get_client),
):
    logger = get_logger()
    try:
        response = client.invoke(operation_name, params or {})
    except ServiceError as exc:
        status_code = exc.http_response.status_code if exc.http_response is not None else status.HTTP_400_BAD_REQUEST
        logger.info("Stubbed %s error for %s", exc.code, operation_name)
        return JSONResponse(
            status_code=status_code,
            content={"ok": False, "error": {"code": exc.code, "message": exc.message}},
        )
    except StubflowError as exc:
        _raise_http(exc)
    logger.info("Resolved stub for %s", operation_name)
    return {"ok": True, "data": jsonable_encoder(response.to_dict()["data"])}
