"""Structured audit logger for JSONL event logging.

Events are appended one JSON object per line and flushed after each write,
so a log stays readable even when a run is interrupted.
"""

import json
import threading
from dataclasses import asdict
from pathlib import Path
from typing import Any

from bibresolve.audit.helpers import get_package_version
from bibresolve.audit.models import LogEvent
from bibresolve.utils import get_iso_timestamp

__all__ = ["AuditLogger", "RESOLVE_STAGE"]

RESOLVE_STAGE = "resolve"


class AuditLogger:
    """JSONL audit logger with persistent file handle.

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    log_path : Path
        Path to JSONL log file.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        """Initialize audit logger and open file handle.

        Parameters
        ----------
        run_id : str
            Unique run identifier.
        log_path : Path
            Path to JSONL log file; parent directories are created.
        """
        self.run_id = run_id
        self.log_path = Path(log_path)

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")
        self._lock = threading.Lock()

    def __enter__(self) -> "AuditLogger":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close file."""
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        job: int | None = None,
    ) -> None:
        """Write structured event to log.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "job_started").
        data : dict[str, Any] | None, optional
            Event-specific data payload.
        level : str, optional
            Log level ("DEBUG", "INFO", "WARN", "ERROR").
        stage : str | None, optional
            Stage identifier.
        job : int | None, optional
            Job index if the event is job-specific.
        """
        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data or {},
            stage=stage,
            job=job,
        )
        self._write_event(log_event)

    def _write_event(self, event: LogEvent) -> None:
        line = json.dumps(asdict(event), ensure_ascii=False, separators=(",", ":"))
        with self._lock:
            self._file.write(line + "\n")
            self._file.flush()

    def run_started(self, command: list[str], parameters: dict[str, Any]) -> None:
        """Log run_started event.

        Parameters
        ----------
        command : list[str]
            Command-line arguments.
        parameters : dict[str, Any]
            Configuration snapshot.
        """
        self.event(
            "run_started",
            data={
                "command": command,
                "parameters": parameters,
                "version": get_package_version(),
            },
        )

    def job_started(self, index: int, identifier: str) -> None:
        """Log job_started event."""
        self.event(
            "job_started",
            data={"identifier": identifier},
            stage=RESOLVE_STAGE,
            job=index,
        )

    def job_finished(
        self,
        index: int,
        identifier: str,
        family: str | None,
        ok: bool,
        error: str | None = None,
    ) -> None:
        """Log job_finished event.

        Failed jobs are logged at ERROR level with their message.
        """
        data: dict[str, Any] = {
            "identifier": identifier,
            "family": family,
            "status": "ok" if ok else "failed",
        }
        if error is not None:
            data["error"] = error

        self.event(
            "job_finished",
            data=data,
            level="INFO" if ok else "ERROR",
            stage=RESOLVE_STAGE,
            job=index,
        )

    def run_finished(
        self,
        succeeded: int,
        failed: int,
        total: int,
        duration_seconds: float,
    ) -> None:
        """Log run_finished event.

        Status is "success" when every job succeeded, "failed" when none
        did and "partial" otherwise. An empty run is a success.
        """
        if failed == 0:
            status = "success"
        elif succeeded == 0:
            status = "failed"
        else:
            status = "partial"

        self.event(
            "run_finished",
            data={
                "status": status,
                "succeeded": succeeded,
                "failed": failed,
                "total": total,
                "duration_seconds": duration_seconds,
            },
        )
