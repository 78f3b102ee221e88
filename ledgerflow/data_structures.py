from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from ledgerflow.exceptions import ObserverFailure


@dataclass
class TransactionReceipt:
    """DTO returned by the orchestrator after a transaction is processed."""
    transaction_id: str
    description: str
    amount: Decimal
    fee: Decimal
    status: str
    observers_notified: int
    failures: List[ObserverFailure] = field(default_factory=list)

@dataclass
class HistorySnapshot:
    """Descriptions on both history stacks, most recent last."""
    done: List[str]
    undone: List[str]

    @property
    def next_undo(self):
        return self.done[-1] if self.done else None

    @property
    def next_redo(self):
        return self.undone[-1] if self.undone else None
