from __future__ import annotations

from enum import Enum


class PunchType(str, Enum):
    """The six daily attendance events, in the order they happen."""

    ENTRY = "entry"
    LUNCH_START = "lunchStart"
    LUNCH_END = "lunchEnd"
    SNACK_START = "snackStart"
    SNACK_END = "snackEnd"
    EXIT = "exit"

    @property
    def field_name(self) -> str:
        """Attribute name on DailyRecord."""
        return _FIELD_NAMES[self]

    @classmethod
    def parse(cls, value) -> "PunchType":
        """Accept the wire value (``lunchStart``) or the field name (``lunch_start``)."""
        for p in cls:
            if value in (p, p.value, p.field_name):
                return p
        raise ValueError(f"Unknown punch type: {value!r}")


_FIELD_NAMES = {
    PunchType.ENTRY: "entry",
    PunchType.LUNCH_START: "lunch_start",
    PunchType.LUNCH_END: "lunch_end",
    PunchType.SNACK_START: "snack_start",
    PunchType.SNACK_END: "snack_end",
    PunchType.EXIT: "exit",
}


class TransactionType(str, Enum):
    """Kind of manual bank entry. Informative only, the sign lives in the amount."""

    ADJUSTMENT = "ADJUSTMENT"
    CERTIFICATE = "CERTIFICATE"
    PAYMENT = "PAYMENT"
    BONUS = "BONUS"


class RemoteAction(str, Enum):
    """Action discriminators understood by the spreadsheet script."""

    GET_EMPLOYEES = "getEmployees"
    GET_RECORDS = "getRecords"
    GET_TRANSACTIONS = "getTransactions"
    SYNC_ROW = "syncRow"
    SYNC_EMPLOYEE = "syncEmployee"
    SYNC_TRANSACTION = "syncTransaction"
    DELETE_TRANSACTION = "deleteTransaction"
