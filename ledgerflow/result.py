"""Result pattern for consistent return types in LedgerFlow.

The orchestrator reports user-visible failures (empty history, rejected
transactions) as values rather than exceptions, so a front end can show the
error text and carry on.
"""
from dataclasses import dataclass
from typing import Optional, TypeVar, Generic

T = TypeVar('T')


@dataclass
class Result(Generic[T]):
    """Represents the outcome of an operation.
    
    Attributes:
        success: Whether the operation succeeded.
        value: The return value on success, None on failure.
        error: Error message on failure, None on success.
        error_type: Category of error (see ErrorType).
        
    Usage:
        result = orchestrator.undo_last()
        if result.success:
            print(f"Undone: {result.value.description}")
        else:
            print(result.error)
    """
    success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    
    @classmethod
    def ok(cls, value: T = None) -> 'Result[T]':
        """Create a successful result."""
        return cls(success=True, value=value)
    
    @classmethod
    def fail(cls, error: str, error_type: str = None) -> 'Result[T]':
        """Create a failure result.
        
        Args:
            error: Error message describing what went wrong.
            error_type: Optional error category for programmatic handling.
        """
        return cls(success=False, error=error, error_type=error_type)
    
    def __bool__(self) -> bool:
        return self.success


# Common error types for consistency
class ErrorType:
    """Standard error type constants."""
    EMPTY_HISTORY = "EMPTY_HISTORY"
    INVALID_STATE = "INVALID_STATE"
