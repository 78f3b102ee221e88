"""Centralized configuration for LedgerFlow.

This module contains the default values and policy switches used by the
orchestrator, the audit log and the fee strategies.
"""

# =============================================================================
# FEE DEFAULTS
# =============================================================================

# Default percentage fee applied until a front end picks another strategy (1%)
DEFAULT_FEE_PERCENTAGE = 1.0

# =============================================================================
# HISTORY
# =============================================================================

# Processing a new transaction discards the redo history.
# Set to False to keep undone transactions redoable after a new one.
CLEAR_REDO_ON_PROCESS = True

# Maximum number of executed transactions kept for undo (None = unbounded)
MAX_HISTORY_DEPTH = None

# =============================================================================
# AUDIT LOG
# =============================================================================

# Echo every audit entry to the console as it is recorded
AUDIT_ECHO = False

# Timestamp format used when rendering audit entries
AUDIT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

