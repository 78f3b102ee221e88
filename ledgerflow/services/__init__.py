"""Services package for LedgerFlow.

This package contains the command history and the orchestrator facade built
on top of the transaction types.
"""

from .undo_manager import UndoManager, UndoableCommand, TransactionCommand
from .orchestrator import TransactionOrchestrator

__all__ = ['UndoManager', 'UndoableCommand', 'TransactionCommand', 'TransactionOrchestrator']
