"""ledger view tables

Revision ID: 0001_ledger
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001_ledger"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "blocks",
        sa.Column("number", sa.BigInteger(), nullable=False),
        sa.Column("hash", sa.String(length=66), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("inserted_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("number", name=op.f("pk_blocks")),
        sa.UniqueConstraint("hash", name=op.f("uq_blocks_hash")),
    )
    op.create_table(
        "transactions",
        sa.Column("hash", sa.String(length=66), nullable=False),
        sa.Column("block_number", sa.BigInteger(), nullable=True),
        sa.Column("index", sa.Integer(), nullable=True),
        sa.Column("from_address_hash", sa.String(length=42), nullable=False),
        sa.Column("to_address_hash", sa.String(length=42), nullable=True),
        sa.Column("created_contract_address_hash", sa.String(length=42), nullable=True),
        sa.Column("value", sa.Numeric(precision=100, scale=0), nullable=False),
        sa.Column("inserted_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(
            ["block_number"], ["blocks.number"], name=op.f("fk_transactions_block_number_blocks")
        ),
        sa.PrimaryKeyConstraint("hash", name=op.f("pk_transactions")),
    )
    op.create_index("ix_transactions_block_number_index", "transactions", ["block_number", "index"])
    op.create_index(op.f("ix_transactions_from_address_hash"), "transactions", ["from_address_hash"])
    op.create_index(op.f("ix_transactions_to_address_hash"), "transactions", ["to_address_hash"])
    op.create_index(
        op.f("ix_transactions_created_contract_address_hash"), "transactions", ["created_contract_address_hash"]
    )

    op.create_table(
        "internal_transactions",
        sa.Column("transaction_hash", sa.String(length=66), nullable=False),
        sa.Column("index", sa.Integer(), nullable=False),
        sa.Column("block_number", sa.BigInteger(), nullable=True),
        sa.Column("call_type", sa.String(length=20), nullable=True),
        sa.Column("from_address_hash", sa.String(length=42), nullable=False),
        sa.Column("to_address_hash", sa.String(length=42), nullable=True),
        sa.Column("value", sa.Numeric(precision=100, scale=0), nullable=False),
        sa.Column("inserted_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(
            ["transaction_hash"], ["transactions.hash"],
            name=op.f("fk_internal_transactions_transaction_hash_transactions"),
        ),
        sa.PrimaryKeyConstraint("transaction_hash", "index", name=op.f("pk_internal_transactions")),
    )
    op.create_index(op.f("ix_internal_transactions_block_number"), "internal_transactions", ["block_number"])
    op.create_index(
        op.f("ix_internal_transactions_from_address_hash"), "internal_transactions", ["from_address_hash"]
    )
    op.create_index(op.f("ix_internal_transactions_to_address_hash"), "internal_transactions", ["to_address_hash"])

    op.create_table(
        "tokens",
        sa.Column("contract_address_hash", sa.String(length=42), nullable=False),
        sa.Column("symbol", sa.String(length=20), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("decimals", sa.Integer(), nullable=True),
        sa.Column("inserted_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("contract_address_hash", name=op.f("pk_tokens")),
    )
    op.create_index(op.f("ix_tokens_symbol"), "tokens", ["symbol"])

    op.create_table(
        "token_transfers",
        sa.Column("transaction_hash", sa.String(length=66), nullable=False),
        sa.Column("log_index", sa.Integer(), nullable=False),
        sa.Column("token_contract_address_hash", sa.String(length=42), nullable=False),
        sa.Column("from_address_hash", sa.String(length=42), nullable=False),
        sa.Column("to_address_hash", sa.String(length=42), nullable=False),
        sa.Column("amount", sa.Numeric(precision=100, scale=0), nullable=True),
        sa.Column("block_number", sa.BigInteger(), nullable=True),
        sa.Column("inserted_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.ForeignKeyConstraint(
            ["transaction_hash"], ["transactions.hash"],
            name=op.f("fk_token_transfers_transaction_hash_transactions"),
        ),
        sa.ForeignKeyConstraint(
            ["token_contract_address_hash"], ["tokens.contract_address_hash"],
            name=op.f("fk_token_transfers_token_contract_address_hash_tokens"),
        ),
        sa.PrimaryKeyConstraint("transaction_hash", "log_index", name=op.f("pk_token_transfers")),
    )
    op.create_index(
        "ix_token_transfers_block_number_log_index", "token_transfers", ["block_number", "log_index"]
    )
    op.create_index(
        op.f("ix_token_transfers_token_contract_address_hash"), "token_transfers", ["token_contract_address_hash"]
    )
    op.create_index(op.f("ix_token_transfers_from_address_hash"), "token_transfers", ["from_address_hash"])
    op.create_index(op.f("ix_token_transfers_to_address_hash"), "token_transfers", ["to_address_hash"])

    op.create_table(
        "address_coin_balances",
        sa.Column("address_hash", sa.String(length=42), nullable=False),
        sa.Column("block_number", sa.BigInteger(), nullable=False),
        sa.Column("value", sa.Numeric(precision=100, scale=0), nullable=True),
        sa.Column("value_fetched_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("inserted_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("address_hash", "block_number", name=op.f("pk_address_coin_balances")),
    )


def downgrade() -> None:
    op.drop_table("address_coin_balances")
    op.drop_index(op.f("ix_token_transfers_to_address_hash"), table_name="token_transfers")
    op.drop_index(op.f("ix_token_transfers_from_address_hash"), table_name="token_transfers")
    op.drop_index(op.f("ix_token_transfers_token_contract_address_hash"), table_name="token_transfers")
    op.drop_index("ix_token_transfers_block_number_log_index", table_name="token_transfers")
    op.drop_table("token_transfers")
    op.drop_index(op.f("ix_tokens_symbol"), table_name="tokens")
    op.drop_table("tokens")
    op.drop_index(op.f("ix_internal_transactions_to_address_hash"), table_name="internal_transactions")
    op.drop_index(op.f("ix_internal_transactions_from_address_hash"), table_name="internal_transactions")
    op.drop_index(op.f("ix_internal_transactions_block_number"), table_name="internal_transactions")
    op.drop_table("internal_transactions")
    op.drop_index(op.f("ix_transactions_created_contract_address_hash"), table_name="transactions")
    op.drop_index(op.f("ix_transactions_to_address_hash"), table_name="transactions")
    op.drop_index(op.f("ix_transactions_from_address_hash"), table_name="transactions")
    op.drop_index("ix_transactions_block_number_index", table_name="transactions")
    op.drop_table("transactions")
    op.drop_table("blocks")
