"""bk_account REST endpoints.

POST   /accounts                          — create (customer validated remotely)
GET    /accounts                          — list all
GET    /accounts/{account_id}             — detail
GET    /accounts/number/{account_number}  — detail by public number
GET    /accounts/customer/{customer_id}   — list a customer's accounts
PATCH  /accounts/{account_id}             — partial update of type/status
DELETE /accounts/{account_id}             — logical delete (status INACTIVE)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_account.application.schemas import AccountCreateRequest, AccountUpdateRequest
from src.bk_account.application.service import AccountApplicationService
from src.bk_common.database import get_db_session
from src.bk_common.response import ApiResponse, success_response

router = APIRouter(prefix="/accounts", tags=["accounts"])

_service = AccountApplicationService()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_account(
    body: AccountCreateRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_account(db, body.to_domain())
    return success_response(data.model_dump(), request)


@router.get("")
async def list_accounts(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_all(db)
    return success_response([a.model_dump() for a in data], request)


@router.get("/number/{account_number}")
async def get_account_by_number(
    account_number: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_account_by_number(db, account_number)
    return success_response(data.model_dump(), request)


@router.get("/customer/{customer_id}")
async def list_customer_accounts(
    customer_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_by_customer(db, customer_id)
    return success_response([a.model_dump() for a in data], request)


@router.get("/{account_id}")
async def get_account(
    account_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_account(db, account_id)
    return success_response(data.model_dump(), request)


@router.patch("/{account_id}")
async def update_account(
    account_id: int,
    body: AccountUpdateRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.update_account(db, account_id, body.to_patch())
    return success_response(data.model_dump(), request)


@router.delete("/{account_id}")
async def deactivate_account(
    account_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    await _service.deactivate_account(db, account_id)
    return success_response({"account_id": account_id, "status": "INACTIVE"}, request)
