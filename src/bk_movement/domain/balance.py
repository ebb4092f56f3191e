"""Pure balance arithmetic for movements. No I/O.

`apply_movement` is the forward step used by create and by the second half
of update; `revert_balance` undoes one movement's effect and is shared by
update and delete.
"""

from src.bk_common.enums import MovementType
from src.bk_common.errors import (
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidMovementTypeError,
)


def parse_movement_type(value: MovementType | str) -> MovementType:
    """Accept the enum or its name in any case; anything else is rejected."""
    if isinstance(value, MovementType):
        return value
    if isinstance(value, str):
        try:
            return MovementType(value.strip().upper())
        except ValueError:
            pass
    raise InvalidMovementTypeError(value)


def validate_amount(amount: int) -> None:
    if amount <= 0:
        raise InvalidAmountError(amount)


def apply_movement(balance: int, amount: int, movement_type: MovementType) -> int:
    """Balance after applying the movement. DEBIT requires balance >= amount."""
    if movement_type == MovementType.DEBIT:
        if balance < amount:
            raise InsufficientBalanceError(amount, balance)
        return balance - amount
    return balance + amount


def revert_balance(balance: int, amount: int, movement_type: MovementType) -> int:
    """Balance as if the movement had never been applied."""
    if movement_type == MovementType.DEBIT:
        return balance + amount
    return balance - amount
