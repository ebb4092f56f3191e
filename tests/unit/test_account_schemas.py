"""Tests for bk_account and bk_movement Pydantic schemas."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from src.bk_account.application.schemas import (
    AccountCreateRequest,
    AccountResponse,
    AccountUpdateRequest,
)
from src.bk_account.domain.models import Account
from src.bk_common.enums import AccountStatus, AccountType, MovementType
from src.bk_movement.application.schemas import MovementCreateRequest, MovementResponse
from src.bk_movement.domain.models import Movement, MovementView


class TestAccountCreateRequest:
    def test_valid(self) -> None:
        req = AccountCreateRequest(
            account_number="478758",
            account_type="SAVINGS",
            initial_balance_cents=200000,
            customer_id=7,
        )
        account = req.to_domain()
        assert account.current_balance == 200000
        assert account.initial_balance == 200000
        assert account.status == AccountStatus.ACTIVE

    @pytest.mark.parametrize("number", ["12345", "1234567890123", "47875a"])
    def test_bad_account_number(self, number: str) -> None:
        with pytest.raises(ValidationError):
            AccountCreateRequest(
                account_number=number,
                account_type="SAVINGS",
                initial_balance_cents=0,
                customer_id=7,
            )

    def test_negative_initial_balance(self) -> None:
        with pytest.raises(ValidationError):
            AccountCreateRequest(
                account_number="478758",
                account_type="SAVINGS",
                initial_balance_cents=-1,
                customer_id=7,
            )


class TestAccountUpdateRequest:
    def test_only_sent_fields_are_patched(self) -> None:
        patch = AccountUpdateRequest(status="INACTIVE").to_patch()
        assert patch.provided() == {"status": AccountStatus.INACTIVE}

    def test_empty_body(self) -> None:
        assert AccountUpdateRequest().to_patch().is_empty()

    def test_explicit_null_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AccountUpdateRequest(account_type=None)


class TestAccountResponse:
    def test_from_domain(self) -> None:
        account = Account(
            id=3,
            account_number="478758",
            account_type=AccountType.CHECKING,
            initial_balance=200000,
            current_balance=142500,
            customer_id=7,
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
        )
        resp = AccountResponse.from_domain(account)
        assert resp.account_id == 3
        assert resp.current_balance_display == "$1,425.00"
        assert resp.created_at == "2024-01-01T00:00:00+00:00"
        assert resp.updated_at is None


class TestMovementSchemas:
    def test_zero_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MovementCreateRequest(account_id=1, movement_type="DEBIT", amount_cents=0)

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MovementCreateRequest(account_id=1, movement_type="TRANSFER", amount_cents=10)

    def test_response_from_view(self) -> None:
        view = MovementView(
            movement=Movement(
                id=5,
                account_id=1,
                movement_type=MovementType.DEBIT,
                amount=57500,
                balance=142500,
                movement_date=datetime(2024, 2, 10, 9, 30, tzinfo=UTC),
            ),
            account_number="478758",
        )
        resp = MovementResponse.from_view(view)
        assert resp.movement_id == 5
        assert resp.amount_display == "$575.00"
        assert resp.balance_cents == 142500
        assert resp.account_number == "478758"
        assert resp.movement_date == "2024-02-10T09:30:00+00:00"
