"""Error taxonomy for the analysis engine.

InputError is surfaced to the caller (HTTP 400). RemoteServiceError never
reaches the caller: the resilient client swallows it after exhausting its
retries and the orchestrator switches to the local heuristics.
"""


class AnalysisError(Exception):
    """Base class for analysis failures."""


class InputError(AnalysisError):
    """Resume or job description text is missing or empty."""


class RemoteServiceError(AnalysisError):
    """The remote classifier/generator failed or returned unusable data."""

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.retryable = retryable
        self.status_code = status_code
