"""Storage routes: each one publishes a command and answers 202."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from storehub_core.cqrs.commands import Action
from storehub_core.domain.models import StoreData, StoreVersionData

from ..auth.dependencies import get_caller
from ..publisher import CommandPublisher
from ..schemas import PROCESSING_TEXT, Envelope

router = APIRouter(prefix="/storage/store", tags=["storage"])


def get_command_publisher(request: Request) -> CommandPublisher:
    return request.app.state.command_publisher


Caller = Annotated[str, Depends(get_caller)]
Publisher = Annotated[CommandPublisher, Depends(get_command_publisher)]

_ACCEPTED = {"status_code": status.HTTP_202_ACCEPTED, "response_model": Envelope}


@router.post("", **_ACCEPTED)
async def create_store(
    data: StoreData, login: Caller, publisher: Publisher
) -> Envelope:
    await publisher.send(Action.CREATE_STORE, login=login, data=data)
    return Envelope.success(PROCESSING_TEXT)


@router.post("/{store_id}/version", **_ACCEPTED)
async def create_store_version(
    store_id: str, data: StoreVersionData, login: Caller, publisher: Publisher
) -> Envelope:
    await publisher.send(
        Action.CREATE_STORE_VERSION, login=login, store_id=store_id, data=data
    )
    return Envelope.success(PROCESSING_TEXT)


@router.delete("/{store_id}", **_ACCEPTED)
async def delete_store(store_id: str, login: Caller, publisher: Publisher) -> Envelope:
    await publisher.send(Action.DELETE_STORE, login=login, store_id=store_id)
    return Envelope.success(PROCESSING_TEXT)


@router.delete("/{store_id}/version/{version_id}", **_ACCEPTED)
async def delete_store_version(
    store_id: str, version_id: str, login: Caller, publisher: Publisher
) -> Envelope:
    await publisher.send(
        Action.DELETE_STORE_VERSION,
        login=login,
        store_id=store_id,
        version_id=version_id,
    )
    return Envelope.success(PROCESSING_TEXT)


@router.get("/{store_id}", **_ACCEPTED)
async def get_store(store_id: str, login: Caller, publisher: Publisher) -> Envelope:
    await publisher.send(Action.GET_STORE, login=login, store_id=store_id)
    return Envelope.success(PROCESSING_TEXT)


@router.get("/{store_id}/history", **_ACCEPTED)
async def get_store_history(
    store_id: str, login: Caller, publisher: Publisher
) -> Envelope:
    await publisher.send(Action.GET_STORE_HISTORY, login=login, store_id=store_id)
    return Envelope.success(PROCESSING_TEXT)


@router.get("/{store_id}/version/{version_id}", **_ACCEPTED)
async def get_store_version(
    store_id: str, version_id: str, login: Caller, publisher: Publisher
) -> Envelope:
    await publisher.send(
        Action.GET_STORE_VERSION,
        login=login,
        store_id=store_id,
        version_id=version_id,
    )
    return Envelope.success(PROCESSING_TEXT)
