"""Transaction types for LedgerFlow.

This module holds the transaction hierarchy (payment, transfer, deposit), the
status lifecycle each transaction goes through, and the audit decorator that
wraps execution with begin/end audit lines.

Settlement itself is not performed here: execute and undo only move the
status along and describe what would have been settled.
"""
import uuid
from abc import ABC, abstractmethod
from decimal import Decimal
from enum import Enum
from typing import Optional

from ledgerflow.audit import AuditLog
from ledgerflow.exceptions import InvalidStateError, ValidationError
from ledgerflow.fees import to_decimal


class TransactionStatus(str, Enum):
    """Lifecycle of a transaction."""
    CREATED = "Created"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    CANCELLING = "Cancelling"
    CANCELLED = "Cancelled"


# A cancelled transaction may be executed again (redo).
EXECUTABLE_STATUSES = (TransactionStatus.CREATED, TransactionStatus.CANCELLED)


class TransactionLike(ABC):
    """Capability set shared by transactions and everything that wraps them."""

    @property
    @abstractmethod
    def amount(self) -> Decimal:
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @abstractmethod
    def execute(self) -> bool:
        """Run the transaction. Returns True on success."""
        pass

    @abstractmethod
    def undo(self) -> bool:
        """Reverse the transaction. Returns True on success."""
        pass


class Transaction(TransactionLike):
    """Base class for concrete transactions.

    Subclasses only describe themselves; the status machine lives here.

    Attributes:
        transaction_id: Opaque handle, unique per instance.
        status: Current TransactionStatus.
        audit_log: AuditLog receiving status changes (may be bound later).
    """

    def __init__(self, amount, description: str, audit_log: Optional[AuditLog] = None):
        amount = to_decimal(amount)
        if amount < 0:
            raise ValidationError('amount', amount)
        self._amount = amount
        self._description = description
        self.status = TransactionStatus.CREATED
        self.audit_log = audit_log
        self.transaction_id = uuid.uuid4().hex

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def description(self) -> str:
        return self._description

    def bind_audit_log(self, audit_log: AuditLog):
        """Attach an audit log if none was given at construction."""
        if self.audit_log is None:
            self.audit_log = audit_log

    def change_status(self, new_status: TransactionStatus):
        self.status = new_status
        self._log(f"{self.description}: status changed to '{new_status.value}'")

    def execute(self) -> bool:
        if self.status not in EXECUTABLE_STATUSES:
            raise InvalidStateError(self.transaction_id, self.status.value, "execute")
        self.change_status(TransactionStatus.IN_PROGRESS)
        self._log(self.describe_execute())
        self.change_status(TransactionStatus.COMPLETED)
        return True

    def undo(self) -> bool:
        if self.status != TransactionStatus.COMPLETED:
            raise InvalidStateError(self.transaction_id, self.status.value, "undo")
        self.change_status(TransactionStatus.CANCELLING)
        self._log(self.describe_undo())
        self.change_status(TransactionStatus.CANCELLED)
        return True

    @abstractmethod
    def describe_execute(self) -> str:
        """Audit line describing the amount and parties being settled."""
        pass

    @abstractmethod
    def describe_undo(self) -> str:
        """Audit line describing the reversal."""
        pass

    def _log(self, message: str):
        if self.audit_log is not None:
            self.audit_log.log(message)

    def __repr__(self):
        return (f"{type(self).__name__}(amount={self.amount}, "
                f"description={self.description!r}, status={self.status.value})")


class PaymentTransaction(Transaction):
    """Payment to a recipient."""

    def __init__(self, amount, recipient: str, description: str, audit_log: Optional[AuditLog] = None):
        super().__init__(amount, description, audit_log)
        self.recipient = recipient

    def describe_execute(self) -> str:
        return f"Payment of {self.amount} to {self.recipient}: {self.description}"

    def describe_undo(self) -> str:
        return f"Payment of {self.amount} to {self.recipient} reversed"


class TransferTransaction(Transaction):
    """Transfer between two accounts."""

    def __init__(self, amount, from_account: str, to_account: str, description: str,
                 audit_log: Optional[AuditLog] = None):
        super().__init__(amount, description, audit_log)
        self.from_account = from_account
        self.to_account = to_account

    def describe_execute(self) -> str:
        return f"Transfer of {self.amount} from {self.from_account} to {self.to_account}: {self.description}"

    def describe_undo(self) -> str:
        return f"Transfer of {self.amount} from {self.from_account} to {self.to_account} reversed"


class DepositTransaction(Transaction):
    """Deposit into an account."""

    def __init__(self, amount, account: str, description: str, audit_log: Optional[AuditLog] = None):
        super().__init__(amount, description, audit_log)
        self.account = account

    def describe_execute(self) -> str:
        return f"Deposit of {self.amount} to {self.account}: {self.description}"

    def describe_undo(self) -> str:
        return f"Deposit of {self.amount} to {self.account} reversed"


class AuditDecorator(TransactionLike):
    """Wraps a transaction with begin/end audit lines around execute and undo.

    Holds no state of its own besides the wrapped object and the log. If the
    wrapped call raises, the end line is not written.
    """

    def __init__(self, wrapped: TransactionLike, audit_log: AuditLog):
        self.wrapped = wrapped
        self.audit_log = audit_log

    @property
    def amount(self) -> Decimal:
        return self.wrapped.amount

    @property
    def description(self) -> str:
        return self.wrapped.description

    @property
    def status(self) -> TransactionStatus:
        return unwrap(self).status

    @property
    def transaction_id(self) -> str:
        return unwrap(self).transaction_id

    def execute(self) -> bool:
        self.audit_log.log(f"Begin execute: {self.description}")
        result = self.wrapped.execute()
        self.audit_log.log(f"End execute: {self.description}")
        return result

    def undo(self) -> bool:
        self.audit_log.log(f"Begin undo: {self.description}")
        result = self.wrapped.undo()
        self.audit_log.log(f"End undo: {self.description}")
        return result


def unwrap(obj: TransactionLike) -> Transaction:
    """Return the innermost transaction behind any number of decorators."""
    while isinstance(obj, AuditDecorator):
        obj = obj.wrapped
    return obj


def create_payment(amount, recipient: str, description: str, audit_log: Optional[AuditLog] = None) -> PaymentTransaction:
    return PaymentTransaction(amount, recipient, description, audit_log)


def create_transfer(amount, from_account: str, to_account: str, description: str,
                    audit_log: Optional[AuditLog] = None) -> TransferTransaction:
    return TransferTransaction(amount, from_account, to_account, description, audit_log)


def create_deposit(amount, account: str, description: str, audit_log: Optional[AuditLog] = None) -> DepositTransaction:
    return DepositTransaction(amount, account, description, audit_log)
