"""bk_report REST endpoints.

GET /reports/{customer_id}?start_date=...&end_date=... — account statement
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_common.database import get_db_session
from src.bk_common.response import ApiResponse, success_response
from src.bk_report.application.service import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])

_service = ReportService()


@router.get("/{customer_id}")
async def account_statement(
    customer_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    start_date: Annotated[datetime, Query()],
    end_date: Annotated[datetime, Query()],
) -> ApiResponse:
    data = await _service.account_statement(db, customer_id, start_date, end_date)
    return success_response([s.model_dump() for s in data], request)
