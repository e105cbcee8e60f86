"""Event consumers: listener protocol, aggregator and replay helpers."""

from __future__ import annotations

from runsummary.exec.aggregator import NodeRecord, NodeStatus, SummaryAggregator
from runsummary.exec.listener import ExecutionListener, LoggingListener
from runsummary.exec.replay import (
    EventType,
    RecordedRun,
    RunEvent,
    replay,
    summarize_run,
)

__all__ = [
    "EventType",
    "ExecutionListener",
    "LoggingListener",
    "NodeRecord",
    "NodeStatus",
    "RecordedRun",
    "RunEvent",
    "SummaryAggregator",
    "replay",
    "summarize_run",
]
