from ledgerview.domain.enums.call_type import CallType
from ledgerview.domain.enums.transfer_source import TransferSource

__all__ = [
    "CallType",
    "TransferSource",
]
