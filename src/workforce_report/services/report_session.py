"""In-memory session holding the current report document.

Only one report exists at a time. A successful processing run replaces the
whole document; the executive summary is the only part that can be edited
afterwards, and each edit stores a new document rather than mutating the
current one. A failed run never touches the session.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import UTC, datetime

from workforce_report.report_document import ReportDocument
from workforce_report.utils.exceptions import ReportNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionEntry:
    """The stored document with its bookkeeping timestamps."""

    document: ReportDocument
    created_at: datetime
    updated_at: datetime


class ReportSession:
    """Thread-safe holder of the single current report."""

    def __init__(self) -> None:
        self._entry: SessionEntry | None = None
        self._lock = threading.RLock()

    @property
    def has_report(self) -> bool:
        """Whether a report has been generated and not cleared."""
        with self._lock:
            return self._entry is not None

    @property
    def current(self) -> ReportDocument:
        """The current document.

        Raises:
            ReportNotFoundError: If no report has been generated.
        """
        with self._lock:
            if self._entry is None:
                raise ReportNotFoundError()
            return self._entry.document

    @property
    def updated_at(self) -> datetime | None:
        with self._lock:
            return self._entry.updated_at if self._entry else None

    def replace(self, document: ReportDocument) -> ReportDocument:
        """Store a newly generated document, discarding the previous one.

        Args:
            document: Document produced by a successful run.

        Returns:
            The stored document.
        """
        now = datetime.now(UTC)
        with self._lock:
            self._entry = SessionEntry(document=document, created_at=now, updated_at=now)

        logger.info(
            f"Report stored: type={document.type.value}, "
            f"file_name={document.file_name}, period={document.period_label}"
        )
        return document

    def update_executive_summary(self, text: str) -> ReportDocument:
        """Patch the executive summary of the current document.

        Args:
            text: New executive summary.

        Returns:
            The patched document, now current.

        Raises:
            ReportNotFoundError: If no report has been generated.
        """
        with self._lock:
            if self._entry is None:
                raise ReportNotFoundError()
            patched = self._entry.document.with_executive_summary(text)
            self._entry = SessionEntry(
                document=patched,
                created_at=self._entry.created_at,
                updated_at=datetime.now(UTC),
            )

        logger.info(f"Executive summary updated ({len(text)} chars)")
        return patched

    def clear(self) -> None:
        """Discard the current report, if any."""
        with self._lock:
            self._entry = None
        logger.info("Report session cleared")

