"""Errors raised by the ledger view."""


class LedgerError(Exception):
    """Base class for ledger view failures."""


class AdapterFailure(LedgerError):
    """An event source could not produce its rows. Tagged with the failing source."""

    def __init__(self, source: str, cause: BaseException) -> None:
        self.source = source
        self.cause = cause
        super().__init__(f"{source} source failed: {cause}")


class OrderingInvariantViolation(LedgerError):
    """Two events of the same source share an ordering key. Points at inconsistent upstream data."""

    def __init__(self, first, second) -> None:
        self.first = first
        self.second = second
        super().__init__(
            f"duplicate {first.source.value} ordering key {tuple(first.ordering_key)}: "
            f"{first.transaction_hash} vs {second.transaction_hash}"
        )
