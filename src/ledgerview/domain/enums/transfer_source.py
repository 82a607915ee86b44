from enum import Enum


class TransferSource(str, Enum):
    """Event source a transfer was read from."""

    NATIVE = "NATIVE"
    INTERNAL = "INTERNAL"
    TOKEN = "TOKEN"
