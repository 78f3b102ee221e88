"""Tests for structured errors and the Result type."""
import unittest

from ledgerflow.exceptions import (
    EmptyHistoryError,
    InvalidStateError,
    LedgerFlowError,
    ObserverFailure,
    ValidationError,
)
from ledgerflow.result import ErrorType, Result


class TestExceptions(unittest.TestCase):

    def test_hierarchy(self):
        for exc_type in (ValidationError, InvalidStateError, EmptyHistoryError, ObserverFailure):
            self.assertTrue(issubclass(exc_type, LedgerFlowError))

    def test_base_str_includes_details(self):
        error = LedgerFlowError("Something failed", {'key': 'value'})
        self.assertEqual(str(error), "Something failed - {'key': 'value'}")
        self.assertEqual(str(LedgerFlowError("Plain")), "Plain")

    def test_invalid_state_error(self):
        error = InvalidStateError("abc123", "Completed", "execute")
        self.assertEqual(error.message, "Cannot execute transaction in status 'Completed'")
        self.assertEqual(error.details['transaction_id'], "abc123")

    def test_empty_history_messages(self):
        self.assertEqual(EmptyHistoryError("undo").message, "No executed transactions to undo.")
        self.assertEqual(EmptyHistoryError("redo").message, "No undone transactions to redo.")

    def test_validation_error(self):
        error = ValidationError('amount', -5)
        self.assertIn("amount", str(error))
        self.assertEqual(error.details['value'], -5)

    def test_observer_failure_wraps_error(self):
        cause = RuntimeError("boom")
        failure = ObserverFailure(object(), cause)
        self.assertIs(failure.error, cause)
        self.assertEqual(failure.details['observer'], 'object')


class TestResult(unittest.TestCase):

    def test_ok(self):
        result = Result.ok(42)
        self.assertTrue(result)
        self.assertEqual(result.value, 42)
        self.assertIsNone(result.error)

    def test_fail(self):
        result = Result.fail("Nothing to undo", ErrorType.EMPTY_HISTORY)
        self.assertFalse(result)
        self.assertIsNone(result.value)
        self.assertEqual(result.error, "Nothing to undo")
        self.assertEqual(result.error_type, ErrorType.EMPTY_HISTORY)


if __name__ == '__main__':
    unittest.main()
