"""Interactive review of change units, one decision at a time.

A :class:`ReviewSession` is created for one ``(original, corrected)`` pair and
is owned by whoever drives the review loop. It moves from ``Reviewing`` to
``Complete`` exactly once, either when every unit has a decision or when the
reviewer exits early. On completion the final text is handed to the commit
sink (clipboard, editor buffer, ...). A failing sink is logged and reported on
the snapshot; it never undoes the computed text.

A pair without differences yields a session that is already complete, with
the original as its final text; nothing is committed for it. Operations on a
completed session are no-ops that return the final snapshot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Protocol, Sequence, Union

from grammr.diffing import compute_spans, replay_spans, units_from_spans
from grammr.models import (
    ChangeUnit,
    CorrectionResult,
    Decision,
    DiffGranularity,
    ReviewStatus,
    Span,
)

logger = logging.getLogger(__name__)


class CommitSink(Protocol):
    """Destination for the final text of a completed review."""

    def commit(self, text: str) -> None: ...


@dataclass(frozen=True)
class Reviewing:
    cursor: int


@dataclass(frozen=True)
class Complete:
    final_text: str


SessionState = Union[Reviewing, Complete]


@dataclass(frozen=True)
class ReviewSnapshot:
    """Read-only projection of a session for the host to render."""

    preview_text: str
    cursor: int
    total: int
    status: ReviewStatus
    final_text: str | None = None
    commit_error: Exception | None = None

    @property
    def is_complete(self) -> bool:
        return self.status is ReviewStatus.COMPLETE


class ReviewSession:
    """Walk the change units of one correction and record decisions."""

    def __init__(
        self,
        original: str,
        corrected: str,
        *,
        sink: CommitSink | None = None,
        granularity: DiffGranularity | str = DiffGranularity.WORD,
    ) -> None:
        self._original = original
        self._corrected = corrected
        self._sink = sink
        self._spans: list[Span] = compute_spans(
            original, corrected, granularity=granularity
        )
        self._units: list[ChangeUnit] = units_from_spans(self._spans)
        self._preview = self._replay()
        # Nothing to review: complete from the start, without a commit.
        self._state: SessionState = (
            Reviewing(cursor=0) if self._units else Complete(final_text=self._preview)
        )
        self._commit_error: Exception | None = None

    @classmethod
    def from_correction(
        cls,
        result: CorrectionResult,
        *,
        sink: CommitSink | None = None,
        granularity: DiffGranularity | str = DiffGranularity.WORD,
    ) -> "ReviewSession":
        return cls(
            result.original, result.corrected, sink=sink, granularity=granularity
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def original(self) -> str:
        return self._original

    @property
    def corrected(self) -> str:
        return self._corrected

    @property
    def spans(self) -> Sequence[Span]:
        return tuple(self._spans)

    @property
    def change_units(self) -> Sequence[ChangeUnit]:
        return tuple(replace(unit) for unit in self._units)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def total(self) -> int:
        return len(self._units)

    @property
    def has_changes(self) -> bool:
        return bool(self._units)

    @property
    def cursor(self) -> int:
        if isinstance(self._state, Complete):
            return len(self._units)
        return self._state.cursor

    @property
    def status(self) -> ReviewStatus:
        if isinstance(self._state, Complete):
            return ReviewStatus.COMPLETE
        return ReviewStatus.REVIEWING

    @property
    def is_complete(self) -> bool:
        return isinstance(self._state, Complete)

    @property
    def current_unit(self) -> ChangeUnit | None:
        """The unit awaiting a decision, or ``None`` once nothing is pending."""
        if isinstance(self._state, Reviewing) and self._state.cursor < len(self._units):
            return replace(self._units[self._state.cursor])
        return None

    @property
    def preview_text(self) -> str:
        return self._preview

    @property
    def final_text(self) -> str | None:
        if isinstance(self._state, Complete):
            return self._state.final_text
        return None

    @property
    def commit_error(self) -> Exception | None:
        return self._commit_error

    def snapshot(self) -> ReviewSnapshot:
        return ReviewSnapshot(
            preview_text=self._preview,
            cursor=self.cursor,
            total=self.total,
            status=self.status,
            final_text=self.final_text,
            commit_error=self._commit_error,
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def apply(self) -> ReviewSnapshot:
        """Accept the current unit and advance."""
        return self._decide(Decision.APPLIED)

    def skip(self) -> ReviewSnapshot:
        """Reject the current unit and advance."""
        return self._decide(Decision.SKIPPED)

    def exit(self) -> ReviewSnapshot:
        """Finish now; units not yet reviewed stay undecided."""
        if isinstance(self._state, Complete):
            return self.snapshot()
        logger.debug(
            "Review exited at %d/%d; remaining units stay undecided",
            self._state.cursor,
            len(self._units),
        )
        self._finalise()
        return self.snapshot()

    def retry_commit(self) -> ReviewSnapshot:
        """Hand the final text to the sink again after an earlier failure."""
        if isinstance(self._state, Complete):
            self._commit(self._state.final_text)
        return self.snapshot()

    def _decide(self, decision: Decision) -> ReviewSnapshot:
        state = self._state
        if isinstance(state, Complete):
            return self.snapshot()

        self._units[state.cursor].decision = decision
        logger.debug(
            "Unit %d/%d %s: %s",
            state.cursor + 1,
            len(self._units),
            decision.value,
            self._units[state.cursor].describe(),
        )
        next_cursor = state.cursor + 1
        self._state = Reviewing(cursor=next_cursor)
        self._preview = self._replay()

        if next_cursor == len(self._units):
            self._finalise()
        return self.snapshot()

    def _finalise(self) -> None:
        final_text = self._replay()
        self._preview = final_text
        self._state = Complete(final_text=final_text)
        self._commit(final_text)

    def _commit(self, text: str) -> None:
        if self._sink is None:
            return
        try:
            self._sink.commit(text)
        except Exception as exc:
            self._commit_error = exc
            logger.warning("Failed to commit reviewed text: %s", exc)
        else:
            self._commit_error = None

    def _replay(self) -> str:
        return replay_spans(self._spans, self._units)
