"""Tests for transaction status transitions and the audit decorator."""
import unittest
from decimal import Decimal

from ledgerflow.audit import AuditLog
from ledgerflow.exceptions import InvalidStateError, ValidationError
from ledgerflow.transactions import (
    AuditDecorator,
    DepositTransaction,
    PaymentTransaction,
    TransactionStatus,
    TransferTransaction,
    create_deposit,
    create_payment,
    create_transfer,
    unwrap,
)


def status_lines(log):
    return [m for m in log.messages() if "status changed to" in m]


class TestTransactionLifecycle(unittest.TestCase):
    """Execute/undo transitions for every variant."""

    def setUp(self):
        self.log = AuditLog()

    def make_all(self):
        return [
            create_payment(100, "Bob", "rent", audit_log=self.log),
            create_transfer(250, "ACC-1", "ACC-2", "savings", audit_log=self.log),
            create_deposit(75, "ACC-3", "salary", audit_log=self.log),
        ]

    def test_factories_build_variants(self):
        payment, transfer, deposit = self.make_all()

        self.assertIsInstance(payment, PaymentTransaction)
        self.assertEqual(payment.recipient, "Bob")
        self.assertIsInstance(transfer, TransferTransaction)
        self.assertEqual((transfer.from_account, transfer.to_account), ("ACC-1", "ACC-2"))
        self.assertIsInstance(deposit, DepositTransaction)
        self.assertEqual(deposit.account, "ACC-3")

    def test_new_transaction_is_created(self):
        for transaction in self.make_all():
            self.assertEqual(transaction.status, TransactionStatus.CREATED)
        self.assertEqual(len(self.log), 0)

    def test_execute_completes_with_two_status_entries(self):
        for transaction in self.make_all():
            with self.subTest(kind=type(transaction).__name__):
                log = AuditLog()
                transaction.audit_log = log

                self.assertTrue(transaction.execute())

                self.assertEqual(transaction.status, TransactionStatus.COMPLETED)
                self.assertEqual(status_lines(log), [
                    f"{transaction.description}: status changed to 'InProgress'",
                    f"{transaction.description}: status changed to 'Completed'",
                ])
                self.assertEqual(len(log), 3)

    def test_undo_cancels_with_symmetric_entries(self):
        for transaction in self.make_all():
            with self.subTest(kind=type(transaction).__name__):
                transaction.execute()
                log = AuditLog()
                transaction.audit_log = log

                self.assertTrue(transaction.undo())

                self.assertEqual(transaction.status, TransactionStatus.CANCELLED)
                self.assertEqual(status_lines(log), [
                    f"{transaction.description}: status changed to 'Cancelling'",
                    f"{transaction.description}: status changed to 'Cancelled'",
                ])
                self.assertEqual(len(log), 3)

    def test_domain_lines(self):
        payment, transfer, deposit = self.make_all()
        for transaction in (payment, transfer, deposit):
            transaction.execute()
            transaction.undo()

        messages = self.log.messages()
        self.assertIn("Payment of 100 to Bob: rent", messages)
        self.assertIn("Payment of 100 to Bob reversed", messages)
        self.assertIn("Transfer of 250 from ACC-1 to ACC-2: savings", messages)
        self.assertIn("Transfer of 250 from ACC-1 to ACC-2 reversed", messages)
        self.assertIn("Deposit of 75 to ACC-3: salary", messages)
        self.assertIn("Deposit of 75 to ACC-3 reversed", messages)

    def test_second_execute_rejected(self):
        payment = create_payment(100, "Bob", "rent", audit_log=self.log)
        payment.execute()
        entries_before = len(self.log)

        with self.assertRaises(InvalidStateError) as context:
            payment.execute()

        self.assertEqual(context.exception.status, "Completed")
        self.assertEqual(context.exception.operation, "execute")
        self.assertEqual(payment.status, TransactionStatus.COMPLETED)
        self.assertEqual(len(self.log), entries_before)

    def test_undo_before_execute_rejected(self):
        deposit = create_deposit(10, "ACC", "tip", audit_log=self.log)

        with self.assertRaises(InvalidStateError):
            deposit.undo()
        self.assertEqual(deposit.status, TransactionStatus.CREATED)

    def test_double_undo_rejected(self):
        deposit = create_deposit(10, "ACC", "tip", audit_log=self.log)
        deposit.execute()
        deposit.undo()

        with self.assertRaises(InvalidStateError):
            deposit.undo()

    def test_cancelled_transaction_can_be_executed_again(self):
        transfer = create_transfer(5, "A", "B", "split", audit_log=self.log)
        transfer.execute()
        transfer.undo()

        transfer.execute()

        self.assertEqual(transfer.status, TransactionStatus.COMPLETED)

    def test_amount_is_decimal(self):
        payment = create_payment(0.1, "Bob", "coffee")
        self.assertEqual(payment.amount, Decimal("0.1"))

    def test_negative_amount_rejected(self):
        with self.assertRaises(ValidationError):
            create_payment(-1, "Bob", "refund")

    def test_empty_description_accepted(self):
        payment = create_payment(1, "Bob", "")
        self.assertEqual(payment.description, "")

    def test_unbound_transaction_executes_silently(self):
        payment = create_payment(1, "Bob", "no log")
        self.assertTrue(payment.execute())
        self.assertEqual(payment.status, TransactionStatus.COMPLETED)

    def test_bind_audit_log_does_not_override(self):
        payment = create_payment(1, "Bob", "bound", audit_log=self.log)
        payment.bind_audit_log(AuditLog())
        self.assertIs(payment.audit_log, self.log)

    def test_transaction_ids_are_unique(self):
        ids = {t.transaction_id for t in self.make_all()}
        self.assertEqual(len(ids), 3)


class TestAuditDecorator(unittest.TestCase):
    """Begin/end audit lines around execute and undo."""

    def setUp(self):
        self.log = AuditLog()
        self.payment = create_payment(100, "Bob", "rent", audit_log=self.log)
        self.decorated = AuditDecorator(self.payment, self.log)

    def test_execute_wraps_with_begin_end(self):
        self.decorated.execute()

        self.assertEqual(self.log.messages(), [
            "Begin execute: rent",
            "rent: status changed to 'InProgress'",
            "Payment of 100 to Bob: rent",
            "rent: status changed to 'Completed'",
            "End execute: rent",
        ])

    def test_undo_wraps_with_begin_end(self):
        self.decorated.execute()
        self.decorated.undo()

        messages = self.log.messages()
        self.assertEqual(messages[5], "Begin undo: rent")
        self.assertEqual(messages[-1], "End undo: rent")
        self.assertEqual(self.payment.status, TransactionStatus.CANCELLED)

    def test_passes_through_fields(self):
        self.assertEqual(self.decorated.amount, Decimal("100"))
        self.assertEqual(self.decorated.description, "rent")
        self.assertEqual(self.decorated.status, TransactionStatus.CREATED)
        self.assertEqual(self.decorated.transaction_id, self.payment.transaction_id)

    def test_nested_decorators(self):
        outer = AuditDecorator(self.decorated, self.log)

        outer.execute()

        messages = self.log.messages()
        self.assertEqual(messages[:2], ["Begin execute: rent", "Begin execute: rent"])
        self.assertEqual(messages[-2:], ["End execute: rent", "End execute: rent"])
        self.assertIs(unwrap(outer), self.payment)

    def test_failure_skips_end_line(self):
        self.payment.execute()
        self.log = AuditLog()
        decorated = AuditDecorator(self.payment, self.log)

        with self.assertRaises(InvalidStateError):
            decorated.execute()

        self.assertEqual(self.log.messages(), ["Begin execute: rent"])


if __name__ == '__main__':
    unittest.main()
