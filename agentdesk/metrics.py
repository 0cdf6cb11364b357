"""In-process metrics for dispatch activity.

Tracks:
- Dispatch counts per agent
- Lifecycle transition counts per status
- Matcher confidence distribution
- Artifact time-to-completion
"""

from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock
from typing import Any

DURATION_BUCKETS = [0.01, 0.1, 0.5, 1.0, 2.5, 5.0, 7.5, 10.0, 30.0]
CONFIDENCE_BUCKETS = [10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0, 80.0, 90.0, 100.0]


@dataclass
class Histogram:
    """Simple cumulative histogram."""

    buckets: list[float] = field(default_factory=lambda: list(DURATION_BUCKETS))
    counts: dict[float, int] = field(default_factory=lambda: defaultdict(int))
    sum: float = 0.0
    count: int = 0

    def observe(self, value: float) -> None:
        """Record an observation."""
        self.sum += value
        self.count += 1
        for bucket in self.buckets:
            if value <= bucket:
                self.counts[bucket] += 1

    def to_prometheus(self, name: str, labels: str = "") -> str:
        """Generate Prometheus histogram format."""
        lines = []
        label_str = f"{{{labels}}}" if labels else ""
        extra = ", " + labels if labels else ""

        for bucket in self.buckets:
            lines.append(f'{name}_bucket{{le="{bucket}"{extra}}} {self.counts[bucket]}')
        lines.append(f'{name}_bucket{{le="+Inf"{extra}}} {self.count}')
        lines.append(f"{name}_sum{label_str} {self.sum}")
        lines.append(f"{name}_count{label_str} {self.count}")

        return "\n".join(lines)


class MetricsRegistry:
    """Counters and histograms keyed by metric name and labels."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._counters: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))
        self._histograms: dict[str, dict[str, Histogram]] = defaultdict(dict)

    def inc_counter(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """Increment a counter metric."""
        label_key = self._labels_to_key(labels)
        with self._lock:
            self._counters[name][label_key] += value

    def observe_histogram(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
        buckets: list[float] | None = None,
    ) -> None:
        """Record a histogram observation."""
        label_key = self._labels_to_key(labels)
        with self._lock:
            if label_key not in self._histograms[name]:
                self._histograms[name][label_key] = Histogram(
                    buckets=list(buckets or DURATION_BUCKETS)
                )
            self._histograms[name][label_key].observe(value)

    def counter_value(self, name: str, labels: dict[str, str] | None = None) -> int:
        """Read a single counter value (0 when never incremented)."""
        label_key = self._labels_to_key(labels)
        with self._lock:
            return self._counters.get(name, {}).get(label_key, 0)

    def reset(self) -> None:
        """Drop all recorded values."""
        with self._lock:
            self._counters.clear()
            self._histograms.clear()

    def _labels_to_key(self, labels: dict[str, str] | None) -> str:
        if not labels:
            return ""
        return ",".join(f'{k}="{v}"' for k, v in sorted(labels.items()))

    def to_prometheus(self) -> str:
        """Generate Prometheus text format output."""
        lines = []

        with self._lock:
            for name, label_values in self._counters.items():
                lines.append(f"# TYPE {name} counter")
                for label_key, value in label_values.items():
                    label_str = f"{{{label_key}}}" if label_key else ""
                    lines.append(f"{name}{label_str} {value}")
                lines.append("")

            for name, label_histograms in self._histograms.items():
                lines.append(f"# TYPE {name} histogram")
                for label_key, histogram in label_histograms.items():
                    lines.append(histogram.to_prometheus(name, label_key))
                lines.append("")

        return "\n".join(lines)

    def get_stats(self) -> dict[str, Any]:
        """Get metrics as a dictionary."""
        with self._lock:
            return {
                "counters": {k: dict(v) for k, v in self._counters.items()},
                "histograms": {
                    k: {lk: {"count": h.count, "sum": h.sum} for lk, h in v.items()}
                    for k, v in self._histograms.items()
                },
            }


# Process-wide metrics registry
metrics = MetricsRegistry()


def record_dispatch(agent_id: str) -> None:
    """Record a dispatched request."""
    metrics.inc_counter("agentdesk_dispatches_total", {"agent": agent_id})


def record_transition(agent_id: str, status: str) -> None:
    """Record a lifecycle transition."""
    metrics.inc_counter("agentdesk_transitions_total", {"agent": agent_id, "status": status})


def record_completion(agent_id: str, duration: float) -> None:
    """Record the time an artifact took to reach completed."""
    metrics.observe_histogram(
        "agentdesk_artifact_duration_seconds", duration, {"agent": agent_id}
    )


def record_match(agent_id: str, confidence: int) -> None:
    """Record a matcher confidence score."""
    metrics.observe_histogram(
        "agentdesk_match_confidence",
        float(confidence),
        {"agent": agent_id},
        buckets=CONFIDENCE_BUCKETS,
    )
