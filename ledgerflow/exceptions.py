"""Custom exceptions for LedgerFlow."""


class LedgerFlowError(Exception):
    """Base exception for all LedgerFlow errors."""
    
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(LedgerFlowError):
    """Raised when a value handed to the core is out of range."""
    
    def __init__(self, field: str, value, reason: str = "must be non-negative"):
        details = {
            'field': field,
            'value': value
        }
        super().__init__(f"Invalid {field}: {reason}", details)


class InvalidStateError(LedgerFlowError):
    """Raised when execute or undo is called in a status that does not allow it."""
    
    def __init__(self, transaction_id: str, status: str, operation: str):
        details = {
            'transaction_id': transaction_id,
            'status': status,
            'operation': operation
        }
        message = f"Cannot {operation} transaction in status '{status}'"
        super().__init__(message, details)
        self.transaction_id = transaction_id
        self.status = status
        self.operation = operation


class EmptyHistoryError(LedgerFlowError):
    """Raised when there is nothing to undo or redo."""
    
    def __init__(self, operation: str):
        message = "No executed transactions to undo."
        if operation == "redo":
            message = "No undone transactions to redo."
        super().__init__(message, {'operation': operation})
        self.operation = operation


class ObserverFailure(LedgerFlowError):
    """Wraps an exception raised by a notification observer."""
    
    def __init__(self, observer, error: Exception):
        details = {
            'observer': type(observer).__name__,
            'error': repr(error)
        }
        super().__init__(f"Observer {type(observer).__name__} failed: {error}", details)
        self.observer = observer
        self.error = error
