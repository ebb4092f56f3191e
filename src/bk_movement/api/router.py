"""bk_movement REST endpoints.

POST   /movements                        — create CREDIT/DEBIT movement
GET    /movements                        — list all
GET    /movements/account/{account_id}   — list for one account
GET    /movements/{movement_id}          — detail
PUT    /movements/{movement_id}          — replace type/amount (revert + re-apply)
DELETE /movements/{movement_id}          — remove and revert its balance effect
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_common.database import get_db_session
from src.bk_common.response import ApiResponse, success_response
from src.bk_movement.application.processor import MovementProcessor
from src.bk_movement.application.schemas import (
    MovementCreateRequest,
    MovementResponse,
    MovementUpdateRequest,
)

router = APIRouter(prefix="/movements", tags=["movements"])

_processor = MovementProcessor()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_movement(
    body: MovementCreateRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    view = await _processor.create_movement(
        db, body.account_id, body.movement_type, body.amount_cents
    )
    return success_response(MovementResponse.from_view(view).model_dump(), request)


@router.get("")
async def list_movements(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    views = await _processor.list_all(db)
    data = [MovementResponse.from_view(v).model_dump() for v in views]
    return success_response(data, request)


@router.get("/account/{account_id}")
async def list_account_movements(
    account_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    views = await _processor.list_by_account(db, account_id)
    data = [MovementResponse.from_view(v).model_dump() for v in views]
    return success_response(data, request)


@router.get("/{movement_id}")
async def get_movement(
    movement_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    view = await _processor.get_movement(db, movement_id)
    return success_response(MovementResponse.from_view(view).model_dump(), request)


@router.put("/{movement_id}")
async def update_movement(
    movement_id: int,
    body: MovementUpdateRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    view = await _processor.update_movement(
        db, movement_id, body.movement_type, body.amount_cents
    )
    return success_response(MovementResponse.from_view(view).model_dump(), request)


@router.delete("/{movement_id}")
async def delete_movement(
    movement_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    await _processor.delete_movement(db, movement_id)
    return success_response({"movement_id": movement_id}, request)
