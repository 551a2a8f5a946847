"""
svc-notes: Prometheus Metrics Registry
========================================

What:  An explicitly constructed metrics registry for one service instance.
How:   Wraps a private prometheus_client CollectorRegistry with the default
       runtime collectors (process, platform, GC) and the business counter.
Who:   Built once at boot, stored on `app.state.metrics`; the note service
       increments the counter and GET /metrics renders the registry.

Exported series (besides process_*, python_info, python_gc_*):
    svc_notes_note_created_total   notes successfully created
"""

from typing import Tuple

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)


class MetricsRegistry:
    """Holds every metric the service exports."""

    def __init__(self) -> None:
        self.registry = CollectorRegistry(auto_describe=True)
        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)

        # prometheus_client appends the _total suffix on exposition
        self.notes_created = Counter(
            "svc_notes_note_created",
            "Total number of notes created",
            registry=self.registry,
        )

    def note_created(self) -> None:
        self.notes_created.inc()

    def render(self) -> Tuple[bytes, str]:
        """Serialize the registry in the Prometheus text exposition format."""
        return generate_latest(self.registry), CONTENT_TYPE_LATEST
