from typing import Protocol


class MetricsSinkProtocol(Protocol):
    """Append-only counter sink. Implementations must never raise."""

    def increment_counter(self, name: str) -> None: ...
