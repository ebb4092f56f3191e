"""ReportService — per-account statement for a customer over a date range.

Read-only: balances come straight from the stored snapshots, nothing is
recomputed.
"""

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.bk_account.domain.repository import (
    AccountRepositoryProtocol,
    CustomerValidatorProtocol,
)
from src.bk_account.infrastructure.customer_client import CustomerClient
from src.bk_account.infrastructure.persistence import AccountRepository
from src.bk_common.boundary import error_boundary
from src.bk_common.datetime_utils import as_utc
from src.bk_common.errors import InvalidDateRangeError
from src.bk_movement.domain.repository import MovementRepositoryProtocol
from src.bk_movement.infrastructure.persistence import MovementRepository
from src.bk_report.application.schemas import AccountStatementResponse

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(
        self,
        account_repo: AccountRepositoryProtocol | None = None,
        movement_repo: MovementRepositoryProtocol | None = None,
        customer_client: CustomerValidatorProtocol | None = None,
    ) -> None:
        self._accounts: AccountRepositoryProtocol = account_repo or AccountRepository()
        self._movements: MovementRepositoryProtocol = movement_repo or MovementRepository()
        self._customers: CustomerValidatorProtocol = customer_client or CustomerClient()

    @error_boundary("generate account statement")
    async def account_statement(
        self, db: AsyncSession, customer_id: int, start: datetime, end: datetime
    ) -> list[AccountStatementResponse]:
        start, end = as_utc(start), as_utc(end)
        if start > end:
            raise InvalidDateRangeError(start, end)
        logger.info(
            "Generating account statement for customer: %s from %s to %s",
            customer_id, start, end,
        )

        customer = await self._customers.get_customer(customer_id)
        statements: list[AccountStatementResponse] = []
        for account in await self._accounts.list_by_customer(db, customer_id):
            movements = await self._movements.list_by_account_date_range(
                db, account.id, start, end
            )
            statements.append(AccountStatementResponse.build(customer.name, account, movements))
        return statements
