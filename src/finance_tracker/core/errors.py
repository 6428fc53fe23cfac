#!/usr/bin/env python3
"""
Error Types for the Finance Tracker Engine

Every error raised by the engine derives from FinanceTrackerError so callers
can catch the whole family in one place.

- ValidationError: malformed numeric, date or enum input. The mutation is
  never partially applied; the caller fixes the input and resubmits.
- NotFoundError: an operation referenced an id absent from its collection.
  No mutation occurs.
- PersistenceError: the storage collaborator failed to load or save. The
  in-memory state remains authoritative.
"""


class FinanceTrackerError(Exception):
    """Base class for all finance tracker errors."""


class ValidationError(FinanceTrackerError, ValueError):
    """Input rejected before any state was changed."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(FinanceTrackerError, LookupError):
    """Referenced record does not exist."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class PersistenceError(FinanceTrackerError):
    """
    Storage collaborator failed.

    When raised after a mutation, the mutation has succeeded in memory but is
    not yet durable.
    """

    def __init__(self, message: str, key: str | None = None, result: object = None):
        super().__init__(message)
        self.key = key
        # Return value of the mutation that succeeded in memory, if any
        self.result = result
