"""Tests for the transfer merge engine, pure functions."""

from decimal import Decimal

import pytest

from ledgerview.domain.enums import TransferSource
from ledgerview.domain.models.ledger import InternalCallTransfer, NativeTransfer, TokenTransferRow
from ledgerview.exceptions import OrderingInvariantViolation
from ledgerview.ledger.merge import (
    collect_participants,
    merge_dual_currency_transfers,
    merge_single_currency_transfers,
)


def _native(tx: str, value: int, index: int, block: int, frm: str = "0xaaa", to: str = "0xbbb") -> NativeTransfer:
    return NativeTransfer(
        transaction_hash=tx, from_address_hash=frm, to_address_hash=to,
        value=Decimal(value), transaction_index=index, block_number=block,
    )


def _internal(
    tx: str, value: int, call_index: int, block: int,
    call_type: str | None = "call", tx_index: int = 0, frm: str = "0xbbb", to: str = "0xccc",
) -> InternalCallTransfer:
    return InternalCallTransfer(
        transaction_hash=tx, from_address_hash=frm, to_address_hash=to,
        value=Decimal(value), call_index=call_index, call_type=call_type,
        transaction_index=tx_index, block_number=block,
    )


def _token(tx: str, amount: int, log_index: int, block: int, frm: str = "0xaaa", to: str = "0xddd") -> TokenTransferRow:
    return TokenTransferRow(
        transaction_hash=tx, from_address_hash=frm, to_address_hash=to,
        amount=Decimal(amount), log_index=log_index, block_number=block,
    )


class TestSingleCurrencyMerge:
    def test_same_transaction_order(self):
        """Native, then internal, then token for one transaction in one block."""
        events = merge_single_currency_transfers(
            native=[_native("0xA", 100, index=5, block=10)],
            internal=[_internal("0xA", 30, call_index=2, block=10, tx_index=5)],
            tokens=[_token("0xA", 7, log_index=1, block=10)],
            currency="X",
        )

        assert [e.value for e in events] == [Decimal(100), Decimal(30), Decimal(7)]
        assert [e.source for e in events] == [TransferSource.NATIVE, TransferSource.INTERNAL, TransferSource.TOKEN]
        assert all(e.currency == "X" for e in events)
        assert all(e.secondary_value is None for e in events)

    def test_strictly_descending_across_blocks(self):
        events = merge_single_currency_transfers(
            native=[_native("0x1", 1, 0, 10), _native("0x2", 2, 3, 12), _native("0x3", 3, 1, 12)],
            internal=[_internal("0x2", 4, 1, 12, tx_index=3), _internal("0x4", 5, 2, 11, tx_index=0)],
            tokens=[_token("0x5", 6, 0, 13), _token("0x1", 7, 4, 10), _token("0x1", 8, 2, 10)],
            currency="X",
        )

        keys = [e.ordering_key for e in events]
        assert all(a > b for a, b in zip(keys, keys[1:]))
        assert [e.block_number for e in events] == [13, 12, 12, 12, 11, 10, 10, 10]

    def test_top_level_call_absent_even_with_value(self):
        events = merge_single_currency_transfers(
            native=[],
            internal=[_internal("0xA", 500, call_index=0, block=10)],
            tokens=[],
            currency="X",
        )
        assert events == []

    def test_delegatecall_absent(self):
        events = merge_single_currency_transfers(
            native=[],
            internal=[_internal("0xA", 50, call_index=3, block=10, call_type="delegatecall")],
            tokens=[],
            currency="X",
        )
        assert events == []

    def test_internal_without_call_type_absent(self):
        events = merge_single_currency_transfers(
            native=[],
            internal=[_internal("0xA", 5, call_index=1, block=10, call_type=None)],
            tokens=[],
            currency="X",
        )
        assert events == []

    def test_token_without_amount_absent(self):
        nft = _token("0xA", 0, log_index=2, block=10).model_copy(update={"amount": None})
        events = merge_single_currency_transfers(
            native=[], internal=[], tokens=[nft, _token("0xA", 4, log_index=1, block=10)], currency="X",
        )
        assert [e.value for e in events] == [Decimal(4)]

    def test_non_positive_values_dropped_tokens_exempt(self):
        events = merge_single_currency_transfers(
            native=[_native("0xA", 0, 1, 10)],
            internal=[_internal("0xA", 0, 1, 10)],
            tokens=[_token("0xB", 0, 1, 10)],
            currency="X",
        )
        assert len(events) == 1
        assert events[0].source == TransferSource.TOKEN

    def test_rerun_is_identical(self):
        kwargs = dict(
            native=[_native("0x1", 10, 0, 5), _native("0x2", 20, 1, 5)],
            internal=[_internal("0x2", 5, 1, 5, tx_index=1)],
            tokens=[_token("0x2", 3, 7, 5)],
            currency="X",
        )
        first = merge_single_currency_transfers(**kwargs)
        second = merge_single_currency_transfers(**kwargs)
        assert [e.model_dump() for e in first] == [e.model_dump() for e in second]

    def test_empty_sources(self):
        assert merge_single_currency_transfers([], [], [], "X") == []


class TestOrderingInvariant:
    def test_duplicate_native_key_raises(self):
        with pytest.raises(OrderingInvariantViolation) as exc_info:
            merge_single_currency_transfers(
                native=[_native("0x1", 10, 2, 5), _native("0x2", 20, 2, 5)],
                internal=[], tokens=[], currency="X",
            )
        assert exc_info.value.first.source == TransferSource.NATIVE
        assert {exc_info.value.first.transaction_hash, exc_info.value.second.transaction_hash} == {"0x1", "0x2"}

    def test_duplicate_token_log_index_raises(self):
        with pytest.raises(OrderingInvariantViolation):
            merge_single_currency_transfers(
                native=[], internal=[],
                tokens=[_token("0x1", 1, 3, 5), _token("0x2", 2, 3, 5)],
                currency="X",
            )

    def test_same_call_index_in_different_transactions_is_fine(self):
        events = merge_single_currency_transfers(
            native=[],
            internal=[_internal("0x1", 1, 1, 5, tx_index=0), _internal("0x2", 2, 1, 5, tx_index=1)],
            tokens=[], currency="X",
        )
        assert [e.transaction_hash for e in events] == ["0x2", "0x1"]


class TestDualCurrencyMerge:
    def _merge(self, **overrides):
        sources = dict(native=[], internal=[], primary_tokens=[], secondary_tokens=[])
        sources.update(overrides)
        return merge_dual_currency_transfers(
            **sources, primary_currency="cGLD", secondary_currency="cUSD",
        )

    def test_secondary_leg_negates_value(self):
        events = self._merge(secondary_tokens=[_token("0x1", 40, 2, 10)])

        assert len(events) == 1
        assert events[0].value == Decimal(-40)
        assert events[0].secondary_value == Decimal(40)
        assert events[0].currency == "cUSD"

    def test_primary_rows_clamp_secondary_to_zero(self):
        events = self._merge(
            native=[_native("0x1", 100, 0, 10)],
            internal=[_internal("0x1", 30, 1, 10)],
            primary_tokens=[_token("0x1", 7, 3, 10)],
        )

        assert len(events) == 3
        assert all(e.secondary_value == Decimal(0) for e in events)
        assert all(e.currency == "cGLD" for e in events)
        assert [e.value for e in events] == [Decimal(100), Decimal(30), Decimal(7)]

    def test_every_secondary_value_non_negative(self):
        events = self._merge(
            native=[_native("0x1", 100, 0, 10), _native("0x2", 5, 1, 11)],
            internal=[_internal("0x1", 30, 1, 10), _internal("0x2", 9, 4, 11, tx_index=1)],
            primary_tokens=[_token("0x1", 7, 3, 10)],
            secondary_tokens=[_token("0x1", 8, 4, 10), _token("0x2", 2, 0, 11)],
        )
        assert all(e.secondary_value >= 0 for e in events)

    def test_legs_interleave_by_log_index(self):
        events = self._merge(
            primary_tokens=[_token("0x1", 1, 3, 10), _token("0x1", 2, 6, 10)],
            secondary_tokens=[_token("0x1", 3, 4, 10), _token("0x1", 4, 3, 10)],
        )
        assert [(e.currency, e.ordering_key.position) for e in events] == [
            ("cGLD", 6), ("cUSD", 4), ("cGLD", 3), ("cUSD", 3),
        ]

    def test_internal_filters_apply(self):
        events = self._merge(
            internal=[
                _internal("0x1", 500, 0, 10),
                _internal("0x1", 50, 2, 10, call_type="delegatecall"),
                _internal("0x1", -5, 3, 10),
                _internal("0x1", 5, 4, 10, call_type=None),
            ],
        )
        assert events == []

    def test_secondary_token_without_amount_absent(self):
        nft = _token("0x1", 0, 5, 10).model_copy(update={"amount": None})
        events = self._merge(secondary_tokens=[nft, _token("0x1", 6, 2, 10)])
        assert [(e.currency, e.value) for e in events] == [("cUSD", Decimal(-6))]


class TestParticipants:
    def test_both_sides_of_every_source(self):
        participants = collect_participants(
            native=[_native("0x1", 10, 0, 5, frm="0xa", to="0xb")],
            internal=[_internal("0x1", 3, 1, 5, frm="0xb", to="0xc")],
            primary_tokens=[_token("0x2", 1, 0, 6, frm="0xd", to="0xe")],
            secondary_tokens=[_token("0x3", 1, 1, 6, frm="0xf", to="0xa")],
        )
        pairs = {(p.transaction_hash, p.address_hash) for p in participants}
        assert pairs == {
            ("0x1", "0xa"), ("0x1", "0xb"), ("0x1", "0xc"),
            ("0x2", "0xd"), ("0x2", "0xe"),
            ("0x3", "0xf"), ("0x3", "0xa"),
        }
        assert len(participants) == len(pairs)

    def test_unqualified_transfers_do_not_contribute(self):
        participants = collect_participants(
            native=[_native("0x1", 0, 0, 5)],
            internal=[_internal("0x2", 9, 0, 5)],
            primary_tokens=[],
            secondary_tokens=[],
        )
        assert participants == []

    def test_contract_creation_has_no_receiver(self):
        creation = NativeTransfer(
            transaction_hash="0x1", from_address_hash="0xa", to_address_hash=None,
            value=Decimal(1), transaction_index=0, block_number=1,
        )
        participants = collect_participants([creation], [], [], [])
        assert [(p.transaction_hash, p.address_hash) for p in participants] == [("0x1", "0xa")]
