"""Unified error codes and custom exceptions.

Error code ranges:
  2xxx: Account
  3xxx: Movement
  4xxx: Report
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 2xxx: Account ---

class AccountNotFoundError(AppError):
    def __init__(self, account_ref: int | str, by_number: bool = False) -> None:
        field = "number" if by_number else "ID"
        super().__init__(2001, f"Account not found with {field}: {account_ref}", 404)


class AccountAlreadyExistsError(AppError):
    def __init__(self, account_number: str) -> None:
        super().__init__(2002, f"Account already exists with number: {account_number}", 409)


class CustomerValidationError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2003, detail, 400)


# --- 3xxx: Movement ---

class MovementNotFoundError(AppError):
    def __init__(self, movement_id: int) -> None:
        super().__init__(3001, f"Movement not found with ID: {movement_id}", 404)


class InvalidAmountError(AppError):
    def __init__(self, amount: int) -> None:
        super().__init__(
            3002, f"Movement amount must be greater than zero, got {amount} cents", 422
        )


class InvalidMovementTypeError(AppError):
    def __init__(self, movement_type: object) -> None:
        super().__init__(
            3003, f"Invalid movement type {movement_type!r}. Must be CREDIT or DEBIT", 422
        )


class InsufficientBalanceError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            3004,
            f"Insufficient balance: required {required} cents, available {available} cents",
            422,
        )


# --- 4xxx: Report ---

class InvalidDateRangeError(AppError):
    def __init__(self, start: object, end: object) -> None:
        super().__init__(4001, f"Start date {start} is after end date {end}", 422)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
