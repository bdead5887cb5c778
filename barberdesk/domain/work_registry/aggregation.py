"""Aggregation over a fetched work record set"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ...models import WorkRecord
from .schemas import AggregateStats

NO_CLIENT_LABEL = "Sin cliente"
CENT = Decimal("0.01")


def client_label(record: WorkRecord) -> str:
    """Display identity of the client a record was billed to"""
    if record.client is not None:
        return f"{record.client.name} / {record.client.id_number}"
    if record.client_name:
        return record.client_name
    return NO_CLIENT_LABEL


def compute_stats(records: Iterable[WorkRecord]) -> AggregateStats:
    """Count, sum and mean of amount_charged using exact decimal arithmetic"""
    amounts = [Decimal(record.amount_charged or 0) for record in records]
    total = sum(amounts, Decimal("0"))
    count = len(amounts)
    average = (total / count).quantize(CENT, rounding=ROUND_HALF_UP) if count else Decimal("0")
    return AggregateStats(total=total, count=count, average=average)
