from ledgerview.db.models.block import Block
from ledgerview.db.models.coin_balance import CoinBalance
from ledgerview.db.models.internal_transaction import InternalTransaction
from ledgerview.db.models.token import Token
from ledgerview.db.models.token_transfer import TokenTransfer
from ledgerview.db.models.transaction import Transaction

__all__ = [
    "Block",
    "CoinBalance",
    "InternalTransaction",
    "Token",
    "TokenTransfer",
    "Transaction",
]
