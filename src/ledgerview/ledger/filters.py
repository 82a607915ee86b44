"""Post-merge predicates. Applied to an already ordered ledger so the global order is kept."""

from ledgerview.domain.models.ledger import TransactionParticipant, TransferEvent


def _same_address(a: str | None, b: str) -> bool:
    return a is not None and a.lower() == b.lower()


def for_address(events: list[TransferEvent], address_hash: str) -> list[TransferEvent]:
    return [
        e for e in events
        if _same_address(e.from_address_hash, address_hash) or _same_address(e.to_address_hash, address_hash)
    ]


def for_transaction(events: list[TransferEvent], transaction_hash: str) -> list[TransferEvent]:
    return [e for e in events if e.transaction_hash.lower() == transaction_hash.lower()]


def participants_for_address(
    participants: list[TransactionParticipant], address_hash: str
) -> list[TransactionParticipant]:
    return [p for p in participants if _same_address(p.address_hash, address_hash)]


def participants_for_transaction(
    participants: list[TransactionParticipant], transaction_hash: str
) -> list[TransactionParticipant]:
    return [p for p in participants if p.transaction_hash.lower() == transaction_hash.lower()]
