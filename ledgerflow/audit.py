"""Audit trail for LedgerFlow.

The audit log is an append-only, ordered record of timestamped messages. One
instance is shared by every component assembled around an orchestrator; it is
passed in explicitly rather than reached through a global.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, List, Optional

import pandas as pd
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from ledgerflow.config import AUDIT_ECHO, AUDIT_TIMESTAMP_FORMAT


@dataclass(frozen=True)
class AuditEntry:
    """A single audit record."""
    timestamp: datetime
    message: str

    def __iter__(self):
        # Allows `timestamp, message = entry`
        return iter((self.timestamp, self.message))

    def format(self, fmt: str = AUDIT_TIMESTAMP_FORMAT) -> str:
        return f"{self.timestamp.strftime(fmt)}: {self.message}"


class AuditLog:
    """Append-only event sink.
    
    Entries are never removed or rewritten; the log lives as long as whatever
    assembled the orchestrator keeps it.
    
    Attributes:
        clock: Zero-argument callable returning the timestamp for new entries.
        echo: When True, each entry is also printed to the console.
    """
    
    def __init__(self, clock: Callable[[], datetime] = None, echo: bool = AUDIT_ECHO):
        self.clock = clock or datetime.now
        self.echo = echo
        self._entries: List[AuditEntry] = []
    
    def log(self, message: str) -> AuditEntry:
        """Append a message stamped with the current clock value."""
        entry = AuditEntry(timestamp=self.clock(), message=message)
        self._entries.append(entry)
        if self.echo:
            print(f"LOG: {message}")
        return entry
    
    def entries(self, start_date=None, end_date=None) -> List[AuditEntry]:
        """Return entries in recording order, optionally limited to a date range.
        
        Args:
            start_date: Inclusive lower bound (datetime, date or string).
            end_date: Inclusive upper bound. A bare date covers the whole day.
            
        Returns:
            A new list; mutating it does not affect the log.
        """
        lower = self._as_datetime(start_date) if start_date else None
        upper = None
        whole_day = False
        if end_date:
            upper = self._as_datetime(end_date)
            whole_day = self._is_bare_date(end_date)
            if whole_day:
                upper = upper + relativedelta(days=1)

        selected = []
        for entry in self._entries:
            if lower and entry.timestamp < lower:
                continue
            if upper and whole_day and entry.timestamp >= upper:
                continue
            if upper and not whole_day and entry.timestamp > upper:
                continue
            selected.append(entry)
        return selected
    
    def messages(self) -> List[str]:
        """Messages only, in recording order."""
        return [entry.message for entry in self._entries]
    
    def format_lines(self, fmt: str = AUDIT_TIMESTAMP_FORMAT) -> List[str]:
        """Render every entry as '<timestamp>: <message>' for display."""
        return [entry.format(fmt) for entry in self._entries]
    
    def to_dataframe(self, start_date=None, end_date=None) -> pd.DataFrame:
        """Export entries as a DataFrame with 'timestamp' and 'message' columns."""
        rows = [
            {'timestamp': entry.timestamp, 'message': entry.message}
            for entry in self.entries(start_date, end_date)
        ]
        return pd.DataFrame(rows, columns=['timestamp', 'message'])
    
    def last(self) -> Optional[AuditEntry]:
        if self._entries:
            return self._entries[-1]
        return None
    
    def __len__(self):
        return len(self._entries)
    
    def __iter__(self):
        return iter(list(self._entries))
    
    @staticmethod
    def _is_bare_date(value) -> bool:
        if isinstance(value, datetime):
            return False
        if isinstance(value, date):
            return True
        # 'YYYY-MM-DD' without a time component
        return isinstance(value, str) and len(value.strip()) == 10
    
    @staticmethod
    def _as_datetime(value) -> datetime:
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        return date_parser.parse(value)
