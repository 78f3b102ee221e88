"""Undo/Redo management service for LedgerFlow.

This module implements a command pattern for undo/redo of processed
transactions. Each transaction is wrapped in a command; the UndoManager keeps
the commands in a registry keyed by the transaction handle, and the two
history stacks hold handles only.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ledgerflow.transactions import Transaction, TransactionLike, unwrap


class UndoableCommand(ABC):
    """Abstract base class for undoable commands."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the command."""
        pass

    @property
    @abstractmethod
    def handle(self) -> str:
        """Registry key identifying the command."""
        pass

    @abstractmethod
    def execute(self) -> bool:
        """Execute the command. Returns True on success."""
        pass

    @abstractmethod
    def undo(self) -> bool:
        """Undo the command. Returns True on success."""
        pass

    def redo(self) -> bool:
        """Redo the command. Default implementation re-executes."""
        return self.execute()


class TransactionCommand(UndoableCommand):
    """Adapts a (possibly decorated) transaction to the command interface."""

    def __init__(self, transaction: TransactionLike):
        self.target = transaction

    @property
    def description(self) -> str:
        return self.target.description

    @property
    def handle(self) -> str:
        return self.transaction.transaction_id

    @property
    def transaction(self) -> Transaction:
        """The innermost transaction, without decorators."""
        return unwrap(self.target)

    def execute(self) -> bool:
        return self.target.execute()

    def undo(self) -> bool:
        return self.target.undo()


class UndoManager:
    """Manages undo/redo stacks of transaction commands.

    A handle is on at most one stack at a time. Commands that fall off both
    stacks (depth eviction, redo history cleared) leave the registry too.
    """

    def __init__(self, max_depth: Optional[int] = None, clear_redo_on_execute: bool = True):
        self._registry: Dict[str, UndoableCommand] = {}
        self._undo_stack: List[str] = []
        self._redo_stack: List[str] = []
        self._max_depth = max_depth
        self.clear_redo_on_execute = clear_redo_on_execute

    def execute(self, command: UndoableCommand) -> bool:
        """Execute a command and add it to the undo stack.

        Exceptions raised by the command propagate and leave the stacks as
        they were.
        """
        if not command.execute():
            return False

        handle = command.handle
        self._forget_handle(handle)
        self._registry[handle] = command
        self._undo_stack.append(handle)
        if self._max_depth is not None and len(self._undo_stack) > self._max_depth:
            self._discard(self._undo_stack.pop(0))  # Remove oldest
        if self.clear_redo_on_execute:
            stale = list(self._redo_stack)
            self._redo_stack.clear()  # New action clears redo history
            for old_handle in stale:
                self._discard(old_handle)
        return True

    def undo(self) -> Optional[UndoableCommand]:
        """Undo the last command.

        Returns the undone command on success, None if stack is empty.
        """
        return self._move(self._undo_stack, self._redo_stack, 'undo')

    def redo(self) -> Optional[UndoableCommand]:
        """Redo the last undone command.

        Returns the redone command on success, None if stack is empty.
        """
        return self._move(self._redo_stack, self._undo_stack, 'redo')

    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    @property
    def undo_count(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_count(self) -> int:
        return len(self._redo_stack)

    def undo_commands(self) -> List[UndoableCommand]:
        """Commands on the undo stack, oldest first."""
        return [self._registry[h] for h in self._undo_stack]

    def redo_commands(self) -> List[UndoableCommand]:
        """Commands on the redo stack, oldest first."""
        return [self._registry[h] for h in self._redo_stack]

    def get_undo_description(self) -> Optional[str]:
        if self._undo_stack:
            return self._registry[self._undo_stack[-1]].description
        return None

    def get_redo_description(self) -> Optional[str]:
        if self._redo_stack:
            return self._registry[self._redo_stack[-1]].description
        return None

    def clear(self):
        """Clear both stacks and the registry."""
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._registry.clear()

    def _move(self, source: List[str], target: List[str], operation: str) -> Optional[UndoableCommand]:
        if not source:
            return None

        handle = source.pop()
        command = self._registry[handle]
        try:
            done = command.undo() if operation == 'undo' else command.redo()
        except Exception:
            # Failed, put it back
            source.append(handle)
            raise
        if not done:
            source.append(handle)
            return None
        target.append(handle)
        return command

    def _forget_handle(self, handle: str):
        # A re-executed handle must not linger on either stack
        if handle in self._undo_stack:
            self._undo_stack.remove(handle)
        if handle in self._redo_stack:
            self._redo_stack.remove(handle)

    def _discard(self, handle: str):
        if handle not in self._undo_stack and handle not in self._redo_stack:
            self._registry.pop(handle, None)
