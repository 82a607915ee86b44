"""Balance delta series as one forward fold over ascending snapshots."""

from decimal import Decimal
from typing import Iterable

from ledgerview.domain.models.ledger import BalanceDelta, BalanceSnapshot


def balance_deltas(snapshots: Iterable[BalanceSnapshot]) -> list[BalanceDelta]:
    """Annotate every snapshot with ``value - previous value`` of the same address.

    Snapshots without a value are dropped before the scan; the next present
    snapshot is compared against the last present one. The first snapshot of an
    address is compared against 0. Result is ordered by block number descending.
    """
    present = sorted((s for s in snapshots if s.value is not None), key=lambda s: s.block_number)

    previous: dict[str, Decimal] = {}
    deltas: list[BalanceDelta] = []
    for snap in present:
        last = previous.get(snap.address_hash, Decimal(0))
        deltas.append(BalanceDelta(
            address_hash=snap.address_hash,
            block_number=snap.block_number,
            value=snap.value,
            block_timestamp=snap.block_timestamp,
            delta=snap.value - last,
        ))
        previous[snap.address_hash] = snap.value

    deltas.reverse()
    return deltas
