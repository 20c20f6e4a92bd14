"""Stateful review of change units."""

from .session import (
    CommitSink,
    Complete,
    ReviewSession,
    ReviewSnapshot,
    Reviewing,
    SessionState,
)

__all__ = [
    "CommitSink",
    "Complete",
    "ReviewSession",
    "ReviewSnapshot",
    "Reviewing",
    "SessionState",
]
