"""LedgerService: fetches event sources and runs them through the pure ledger core."""

import logging
from decimal import Decimal
from typing import Awaitable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerview.config import Settings, settings as default_settings
from ledgerview.db.repos.coin_balance_repo import CoinBalanceRepo
from ledgerview.db.repos.internal_transaction_repo import InternalTransactionRepo
from ledgerview.db.repos.token_transfer_repo import TokenTransferRepo
from ledgerview.db.repos.transaction_repo import TransactionRepo
from ledgerview.domain.enums import TransferSource
from ledgerview.domain.models.ledger import (
    AddressActivity,
    BalanceDelta,
    InternalCallTransfer,
    NativeTransfer,
    TokenTransferRow,
    TransactionParticipant,
    TransferEvent,
)
from ledgerview.exceptions import AdapterFailure
from ledgerview.ledger import filters
from ledgerview.ledger.balances import balance_deltas
from ledgerview.ledger.keys import TOP_LEVEL_CALL_INDEX
from ledgerview.ledger.merge import (
    collect_participants,
    merge_dual_currency_transfers,
    merge_single_currency_transfers,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

BALANCES_SOURCE = "BALANCES"


class LedgerService:
    """Read-only ledger view over one session.

    Every merge fetches all of its sources before merging; a failing source
    fails the whole call with ``AdapterFailure``.
    """

    def __init__(self, session: AsyncSession, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings
        self._transactions = TransactionRepo(session)
        self._internal = InternalTransactionRepo(session)
        self._tokens = TokenTransferRepo(session)
        self._balances = CoinBalanceRepo(session)

    async def _fetch(self, source: str, pending: Awaitable[T]) -> T:
        try:
            return await pending
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch %s events", source)
            raise AdapterFailure(source, exc) from exc

    async def _native(self) -> list[NativeTransfer]:
        return await self._fetch(
            TransferSource.NATIVE.value,
            self._transactions.fetch_native_transfers(min_value=Decimal(0)),
        )

    async def _internal_calls(self) -> list[InternalCallTransfer]:
        return await self._fetch(
            TransferSource.INTERNAL.value,
            self._internal.fetch_internal_call_transfers(
                min_value=Decimal(0),
                exclude_call_type=self._settings.excluded_call_type,
                exclude_index=TOP_LEVEL_CALL_INDEX,
            ),
        )

    async def _token_rows(self, currency_symbol: str) -> list[TokenTransferRow]:
        return await self._fetch(
            TransferSource.TOKEN.value,
            self._tokens.fetch_token_transfers(currency_symbol),
        )

    # ── Transfer ledgers ─────────────────────────────────────────

    async def merge_single_currency_transfers(
        self,
        currency_symbol: Optional[str] = None,
        *,
        address_hash: Optional[str] = None,
        transaction_hash: Optional[str] = None,
    ) -> list[TransferEvent]:
        """Ledger of one currency, optionally narrowed to an address or a transaction after ordering."""
        currency = currency_symbol or self._settings.primary_currency_symbol
        tokens = await self._token_rows(currency)
        native = await self._native()
        internal = await self._internal_calls()

        events = merge_single_currency_transfers(
            native, internal, tokens, currency,
            excluded_call_type=self._settings.excluded_call_type,
        )
        logger.info(
            "Merged %d %s transfers (%d token, %d native, %d internal rows read)",
            len(events), currency, len(tokens), len(native), len(internal),
        )
        return self._narrow(events, address_hash, transaction_hash)

    async def merge_dual_currency_transfers(
        self,
        *,
        address_hash: Optional[str] = None,
        transaction_hash: Optional[str] = None,
    ) -> list[TransferEvent]:
        primary = self._settings.primary_currency_symbol
        secondary = self._settings.secondary_currency_symbol
        primary_tokens = await self._token_rows(primary)
        secondary_tokens = await self._token_rows(secondary)
        native = await self._native()
        internal = await self._internal_calls()

        events = merge_dual_currency_transfers(
            native, internal, primary_tokens, secondary_tokens, primary, secondary,
            excluded_call_type=self._settings.excluded_call_type,
        )
        logger.info("Merged %d %s/%s transfers", len(events), primary, secondary)
        return self._narrow(events, address_hash, transaction_hash)

    @staticmethod
    def _narrow(
        events: list[TransferEvent],
        address_hash: Optional[str],
        transaction_hash: Optional[str],
    ) -> list[TransferEvent]:
        if address_hash is not None:
            events = filters.for_address(events, address_hash)
        if transaction_hash is not None:
            events = filters.for_transaction(events, transaction_hash)
        return events

    async def transaction_participants(
        self,
        *,
        address_hash: Optional[str] = None,
        transaction_hash: Optional[str] = None,
    ) -> list[TransactionParticipant]:
        primary_tokens = await self._token_rows(self._settings.primary_currency_symbol)
        secondary_tokens = await self._token_rows(self._settings.secondary_currency_symbol)
        native = await self._native()
        internal = await self._internal_calls()

        participants = collect_participants(
            native, internal, primary_tokens, secondary_tokens,
            excluded_call_type=self._settings.excluded_call_type,
        )
        if address_hash is not None:
            participants = filters.participants_for_address(participants, address_hash)
        if transaction_hash is not None:
            participants = filters.participants_for_transaction(participants, transaction_hash)
        return participants

    # ── Balances ─────────────────────────────────────────────────

    async def balance_deltas(self, address_hash: str) -> list[BalanceDelta]:
        snapshots = await self._fetch(BALANCES_SOURCE, self._balances.fetch_balance_snapshots(address_hash))
        return balance_deltas(snapshots)

    # ── Per-kind listings and point lookups ──────────────────────

    async def address_activity(self, address_hash: str) -> AddressActivity:
        transactions = await self._fetch(
            TransferSource.NATIVE.value, self._transactions.list_for_address(address_hash)
        )
        internal = await self._fetch(
            TransferSource.INTERNAL.value, self._internal.list_for_address(address_hash)
        )
        tokens = await self._fetch(
            TransferSource.TOKEN.value, self._tokens.list_for_address(address_hash)
        )
        return AddressActivity(
            address_hash=address_hash,
            transactions=transactions,
            internal_transfers=internal,
            token_transfers=tokens,
        )

    async def get_internal_transfer(self, transaction_hash: str, index: int) -> Optional[InternalCallTransfer]:
        return await self._fetch(TransferSource.INTERNAL.value, self._internal.get(transaction_hash, index))

    async def get_token_transfer(self, transaction_hash: str, log_index: int) -> Optional[TokenTransferRow]:
        return await self._fetch(TransferSource.TOKEN.value, self._tokens.get(transaction_hash, log_index))

    async def internal_transfers_for_transaction(self, transaction_hash: str) -> list[InternalCallTransfer]:
        return await self._fetch(
            TransferSource.INTERNAL.value, self._internal.list_for_transaction(transaction_hash)
        )

    async def token_transfers_for_contract(self, contract_address_hash: str) -> list[TokenTransferRow]:
        return await self._fetch(
            TransferSource.TOKEN.value, self._tokens.list_for_contract(contract_address_hash)
        )
