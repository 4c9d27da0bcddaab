from __future__ import annotations


class InvalidDateFormat(ValueError):
    """Raised when a date string is not a valid YYYY-MM-DD date in its calendar."""

    def __init__(self, value: object, reason: str = "expected YYYY-MM-DD") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"invalid date {value!r}: {reason}")


class TransactionNotFound(KeyError):
    def __init__(self, tx_id: object) -> None:
        self.tx_id = tx_id
        super().__init__(f"Transaction not found: {tx_id}")

    def __str__(self) -> str:
        # KeyError.__str__ repr()s the message
        return self.args[0]
