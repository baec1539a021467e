"""
Metrics definitions for KVQ.

This module defines Prometheus metrics for monitoring
the command translation layer and the backing store.
"""

from prometheus_client import Counter, Histogram

# 카운터 메트릭
commands_total = Counter(
    "kvq_commands_total",
    "Number of commands handled, by response outcome",
    ["command", "outcome"]
)

store_errors = Counter(
    "kvq_store_errors_total",
    "Backing store errors",
    ["operation", "kind"]
)

# 히스토그램 메트릭
command_seconds = Histogram(
    "kvq_command_duration_seconds",
    "Time spent handling a command including the store round trip",
    ["command"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0]
)
