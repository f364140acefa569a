"""Resolver configuration and batch result dataclasses."""

from dataclasses import asdict, dataclass, field
from typing import Any

from bibresolve.fetch import (
    API_TIMEOUT_SECONDS,
    CONNECT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    READ_TIMEOUT_SECONDS,
)
from bibresolve.models import JobResult


@dataclass
class ResolverConfig:
    """Configuration for a resolution batch.

    Attributes
    ----------
    user_agent : str
        ``User-Agent`` header sent with every request.
    connect_timeout : float
        Seconds to wait for a connection (default: 5).
    read_timeout : float
        Seconds to wait for a page response (default: 15).
    api_timeout : float
        Seconds to wait for a metadata API response (default: 10).
    max_workers : int | None
        Cap on concurrent jobs. If None, one worker per identifier.
    """

    user_agent: str = DEFAULT_USER_AGENT
    connect_timeout: float = CONNECT_TIMEOUT_SECONDS
    read_timeout: float = READ_TIMEOUT_SECONDS
    api_timeout: float = API_TIMEOUT_SECONDS
    max_workers: int | None = None

    def __post_init__(self) -> None:
        """Validate."""
        if not self.user_agent or not self.user_agent.strip():
            raise ValueError("user_agent must not be empty")

        for name in ("connect_timeout", "read_timeout", "api_timeout"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")

    def workers_for(self, job_count: int) -> int:
        """Number of pool workers to start for ``job_count`` jobs."""
        workers = job_count if self.max_workers is None else min(self.max_workers, job_count)
        return max(workers, 1)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class BatchResult:
    """Results from one batch run.

    Attributes
    ----------
    results : list[JobResult]
        One result per submitted identifier, in submission order.
    succeeded : int
        Jobs that produced a record.
    failed : int
        Jobs that ended with an error message.
    total : int
        Jobs submitted.
    elapsed_seconds : float
        Wall-clock time of the whole batch.
    """

    results: list[JobResult] = field(default_factory=list)
    succeeded: int = 0
    failed: int = 0
    total: int = 0
    elapsed_seconds: float = 0.0

    @property
    def outputs(self) -> list[str]:
        """Serialized records of the successful jobs, in submission order."""
        return [result.output for result in self.results if result.ok and result.output]

    @property
    def errors(self) -> list[JobResult]:
        """Failed jobs, in submission order."""
        return [result for result in self.results if not result.ok]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
