"""Unit tests for ReportService."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from src.bk_account.domain.models import Account, CustomerInfo
from src.bk_common.enums import AccountType, MovementType
from src.bk_common.errors import CustomerValidationError, InvalidDateRangeError
from src.bk_movement.domain.models import Movement
from src.bk_report.application.service import ReportService

_START = datetime(2024, 2, 1, tzinfo=UTC)
_END = datetime(2024, 2, 29, tzinfo=UTC)


def _account(account_id: int, balance: int) -> Account:
    return Account(
        id=account_id,
        account_number=f"47875{account_id}",
        account_type=AccountType.SAVINGS,
        initial_balance=200000,
        current_balance=balance,
        customer_id=7,
    )


def _service(accounts: AsyncMock, movements: AsyncMock, customers: AsyncMock) -> ReportService:
    return ReportService(account_repo=accounts, movement_repo=movements, customer_client=customers)


class TestAccountStatement:
    async def test_one_statement_per_account(self) -> None:
        accounts = AsyncMock()
        accounts.list_by_customer.return_value = [_account(1, 142500), _account(2, 200000)]
        movements = AsyncMock()
        movements.list_by_account_date_range.side_effect = lambda db, account_id, s, e: (
            [
                Movement(
                    id=10,
                    account_id=1,
                    movement_type=MovementType.DEBIT,
                    amount=57500,
                    balance=142500,
                    movement_date=datetime(2024, 2, 10, tzinfo=UTC),
                )
            ]
            if account_id == 1
            else []
        )
        customers = AsyncMock()
        customers.get_customer.return_value = CustomerInfo(7, "Jose Lema", True)

        result = await _service(accounts, movements, customers).account_statement(
            AsyncMock(), 7, _START, _END
        )

        assert [s.account_number for s in result] == ["478751", "478752"]
        assert result[0].customer_name == "Jose Lema"
        assert result[0].current_balance_cents == 142500
        assert result[0].movements[0].amount_display == "$575.00"
        assert result[1].movements == []

    async def test_naive_dates_treated_as_utc(self) -> None:
        accounts = AsyncMock()
        accounts.list_by_customer.return_value = [_account(1, 0)]
        movements = AsyncMock()
        movements.list_by_account_date_range.return_value = []
        customers = AsyncMock()
        customers.get_customer.return_value = CustomerInfo(7, None, True)

        await _service(accounts, movements, customers).account_statement(
            AsyncMock(), 7, datetime(2024, 2, 1), datetime(2024, 2, 29)
        )

        start = movements.list_by_account_date_range.await_args.args[2]
        assert start.tzinfo is not None

    async def test_inverted_range(self) -> None:
        with pytest.raises(InvalidDateRangeError):
            await _service(AsyncMock(), AsyncMock(), AsyncMock()).account_statement(
                AsyncMock(), 7, _END, _START
            )

    async def test_unknown_customer(self) -> None:
        customers = AsyncMock()
        customers.get_customer.side_effect = CustomerValidationError(
            "Customer not found with ID: 7"
        )
        with pytest.raises(CustomerValidationError):
            await _service(AsyncMock(), AsyncMock(), customers).account_statement(
                AsyncMock(), 7, _START, _END
            )
