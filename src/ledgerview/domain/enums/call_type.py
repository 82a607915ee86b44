from enum import Enum


class CallType(str, Enum):
    """EVM call kinds recorded on internal transactions. Values match trace output."""

    CALL = "call"
    CALLCODE = "callcode"
    DELEGATECALL = "delegatecall"
    STATICCALL = "staticcall"
