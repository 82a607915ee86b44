from ledgerview.db.repos.coin_balance_repo import CoinBalanceRepo
from ledgerview.db.repos.internal_transaction_repo import InternalTransactionRepo
from ledgerview.db.repos.token_transfer_repo import TokenTransferRepo
from ledgerview.db.repos.transaction_repo import TransactionRepo

__all__ = ["CoinBalanceRepo", "InternalTransactionRepo", "TokenTransferRepo", "TransactionRepo"]
