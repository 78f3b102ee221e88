"""Transaction orchestrator for LedgerFlow.

This module provides the TransactionOrchestrator class, the facade a front end
talks to. It ties together the fee strategy, the audit decorator, the command
history and the notification bus:

    transaction -> AuditDecorator -> TransactionCommand -> UndoManager
                                                        -> NotificationBus
"""
from typing import Optional

from ledgerflow.audit import AuditLog
from ledgerflow.config import CLEAR_REDO_ON_PROCESS, DEFAULT_FEE_PERCENTAGE, MAX_HISTORY_DEPTH
from ledgerflow.data_structures import HistorySnapshot, TransactionReceipt
from ledgerflow.exceptions import EmptyHistoryError, InvalidStateError
from ledgerflow.fees import FeeStrategy, PercentageFeeStrategy
from ledgerflow.notifications import EmailNotification, NotificationBus, SmsNotification
from ledgerflow.result import ErrorType, Result
from ledgerflow.transactions import (
    AuditDecorator,
    Transaction,
    TransactionStatus,
    create_deposit,
    create_payment,
    create_transfer,
    unwrap,
)
from ledgerflow.services.undo_manager import TransactionCommand, UndoManager


class TransactionOrchestrator:
    """Processes transactions and keeps their undo/redo history.

    Attributes:
        audit_log: Shared AuditLog for every component assembled here.
        notifier: NotificationBus receiving a message per processed transaction.
        undo_manager: UndoManager holding the done/undone history.
    """

    def __init__(self, audit_log: Optional[AuditLog] = None,
                 fee_strategy: Optional[FeeStrategy] = None,
                 notifier: Optional[NotificationBus] = None,
                 clear_redo_on_process: bool = CLEAR_REDO_ON_PROCESS,
                 max_history_depth: Optional[int] = MAX_HISTORY_DEPTH,
                 default_observers: bool = True):
        self.audit_log = audit_log if audit_log is not None else AuditLog()
        self._fee_strategy = fee_strategy or PercentageFeeStrategy(DEFAULT_FEE_PERCENTAGE)
        self.notifier = notifier if notifier is not None else NotificationBus()
        self.undo_manager = UndoManager(
            max_depth=max_history_depth,
            clear_redo_on_execute=clear_redo_on_process
        )

        if default_observers:
            self.notifier.attach(EmailNotification())
            self.notifier.attach(SmsNotification())

    # ------------------------------------------------------------------
    # Fee strategy
    # ------------------------------------------------------------------

    @property
    def fee_strategy(self) -> FeeStrategy:
        return self._fee_strategy

    def set_fee_strategy(self, strategy: FeeStrategy):
        """Replace the fee strategy used by subsequent process() calls."""
        self._fee_strategy = strategy
        self.audit_log.log(f"Fee strategy set to {strategy}")

    # ------------------------------------------------------------------
    # Factories bound to this orchestrator's audit log
    # ------------------------------------------------------------------

    def create_payment(self, amount, recipient: str, description: str):
        return create_payment(amount, recipient, description, audit_log=self.audit_log)

    def create_transfer(self, amount, from_account: str, to_account: str, description: str):
        return create_transfer(amount, from_account, to_account, description, audit_log=self.audit_log)

    def create_deposit(self, amount, account: str, description: str):
        return create_deposit(amount, account, description, audit_log=self.audit_log)

    # ------------------------------------------------------------------
    # Workflow
    # ------------------------------------------------------------------

    def process(self, transaction: Transaction) -> Result[TransactionReceipt]:
        """Execute a transaction, record it for undo and notify observers.

        Args:
            transaction: A freshly created transaction. Transactions that were
                already processed (including undone ones) are only re-run
                through redo_last().

        Returns:
            Result.ok(TransactionReceipt) on success, or Result.fail with
            ErrorType.INVALID_STATE if the transaction is not in Created status.
        """
        inner = unwrap(transaction)
        if inner.status is not TransactionStatus.CREATED:
            error = InvalidStateError(inner.transaction_id, inner.status.value, "process")
            self.audit_log.log(f"Transaction rejected: {error.message}")
            return Result.fail(error.message, ErrorType.INVALID_STATE)

        inner.bind_audit_log(self.audit_log)
        command = TransactionCommand(AuditDecorator(transaction, self.audit_log))

        fee = self._fee_strategy.calculate_fee(transaction.amount)
        self.audit_log.log(f"Transaction fee: {fee}")

        self.undo_manager.execute(command)

        failures = self.notifier.notify(
            transaction,
            f"Transaction completed. Amount: {transaction.amount}, fee: {fee}"
        )
        for failure in failures:
            self.audit_log.log(f"Notification failed: {failure.message}")

        return Result.ok(TransactionReceipt(
            transaction_id=transaction.transaction_id,
            description=transaction.description,
            amount=transaction.amount,
            fee=fee,
            status=transaction.status.value,
            observers_notified=len(self.notifier) - len(failures),
            failures=failures
        ))

    def undo_last(self) -> Result[Transaction]:
        """Undo the most recently executed transaction.

        Returns:
            Result.ok(transaction), or Result.fail with ErrorType.EMPTY_HISTORY
            when there is nothing to undo.
        """
        return self._step('undo')

    def redo_last(self) -> Result[Transaction]:
        """Re-execute the most recently undone transaction."""
        return self._step('redo')

    def _step(self, operation: str) -> Result[Transaction]:
        move = self.undo_manager.undo if operation == 'undo' else self.undo_manager.redo
        try:
            command = move()
        except InvalidStateError as e:
            self.audit_log.log(f"{operation.capitalize()} rejected: {e.message}")
            return Result.fail(e.message, ErrorType.INVALID_STATE)

        if command is None:
            return Result.fail(EmptyHistoryError(operation).message, ErrorType.EMPTY_HISTORY)
        return Result.ok(command.transaction)

    # ------------------------------------------------------------------
    # History inspection
    # ------------------------------------------------------------------

    def can_undo(self) -> bool:
        return self.undo_manager.can_undo()

    def can_redo(self) -> bool:
        return self.undo_manager.can_redo()

    @property
    def done_count(self) -> int:
        return self.undo_manager.undo_count

    @property
    def undone_count(self) -> int:
        return self.undo_manager.redo_count

    def history(self) -> HistorySnapshot:
        return HistorySnapshot(
            done=[c.description for c in self.undo_manager.undo_commands()],
            undone=[c.description for c in self.undo_manager.redo_commands()]
        )
