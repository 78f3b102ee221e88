"""LedgerFlow: transaction command and history engine.

Typical use from a front end:

    orchestrator = TransactionOrchestrator()
    payment = orchestrator.create_payment(100, "Bob", "rent")
    orchestrator.process(payment)
    orchestrator.undo_last()
"""

from .audit import AuditEntry, AuditLog
from .exceptions import (
    EmptyHistoryError,
    InvalidStateError,
    LedgerFlowError,
    ObserverFailure,
    ValidationError,
)
from .fees import FeeStrategy, FixedFeeStrategy, PercentageFeeStrategy
from .notifications import EmailNotification, NotificationBus, SmsNotification, TransactionObserver
from .result import ErrorType, Result
from .transactions import (
    AuditDecorator,
    DepositTransaction,
    PaymentTransaction,
    Transaction,
    TransactionStatus,
    TransferTransaction,
    create_deposit,
    create_payment,
    create_transfer,
)
from .services import TransactionOrchestrator, UndoManager

__version__ = "0.1.0"

__all__ = [
    'AuditEntry', 'AuditLog',
    'LedgerFlowError', 'ValidationError', 'InvalidStateError', 'EmptyHistoryError', 'ObserverFailure',
    'FeeStrategy', 'PercentageFeeStrategy', 'FixedFeeStrategy',
    'TransactionObserver', 'EmailNotification', 'SmsNotification', 'NotificationBus',
    'Result', 'ErrorType',
    'Transaction', 'TransactionStatus', 'PaymentTransaction', 'TransferTransaction', 'DepositTransaction',
    'AuditDecorator', 'create_payment', 'create_transfer', 'create_deposit',
    'TransactionOrchestrator', 'UndoManager',
]
