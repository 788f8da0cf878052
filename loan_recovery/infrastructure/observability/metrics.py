"""Prometheus metrics for remote scoring calls, refreshes and loan analyses"""

from prometheus_client import Counter, Histogram

# Remote scoring service metrics
remote_call_latency_histogram = Histogram(
    "scoring_remote_call_seconds",
    "Scoring service response time",
    ["operation"],  # borrowers | loans | train | predict | strategy
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

remote_failure_counter = Counter(
    "scoring_remote_failures_total",
    "Failed scoring service calls",
    ["operation", "kind"],  # kind: transport | rejected | malformed
)

# Dashboard operation metrics
refresh_counter = Counter(
    "dashboard_refresh_total",
    "Collection refreshes by outcome",
    ["outcome"],  # success | failure
)

training_counter = Counter(
    "dashboard_training_total",
    "Model training requests by outcome",
    ["outcome"],
)

analysis_step_counter = Counter(
    "dashboard_analysis_steps_total",
    "Loan analysis steps by outcome",
    ["step", "outcome"],  # step: predict | strategy
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_outcome(counter: Counter, succeeded: bool, **labels: str) -> None:
    """Increment an outcome-labelled counter"""
    counter.labels(outcome="success" if succeeded else "failure", **labels).inc()
