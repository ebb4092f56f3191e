"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class AccountType(str, Enum):
    SAVINGS = "SAVINGS"
    CHECKING = "CHECKING"


class AccountStatus(str, Enum):
    """Account lifecycle: INACTIVE is the logical-delete state."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class MovementType(str, Enum):
    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


class MovementEventType(str, Enum):
    MOVEMENT_CREATED = "MOVEMENT_CREATED"
    MOVEMENT_UPDATED = "MOVEMENT_UPDATED"
    MOVEMENT_DELETED = "MOVEMENT_DELETED"


class AccountEventType(str, Enum):
    ACCOUNT_CREATED = "ACCOUNT_CREATED"
    ACCOUNT_UPDATED = "ACCOUNT_UPDATED"
    ACCOUNT_DELETED = "ACCOUNT_DELETED"


class CustomerEventType(str, Enum):
    CUSTOMER_CREATED = "CUSTOMER_CREATED"
    CUSTOMER_UPDATED = "CUSTOMER_UPDATED"
    CUSTOMER_DELETED = "CUSTOMER_DELETED"
    CUSTOMER_STATUS_CHANGED = "CUSTOMER_STATUS_CHANGED"
