from prometheus_client import (
    Counter,
    Histogram,
    CollectorRegistry,
    generate_latest,
)

registry = CollectorRegistry()

# Outcome is "success" or the `kind` of the raised DeepSeekError
client_requests_total = Counter(
    "deepseek_client_requests_total",
    "Total API calls by method, path and outcome",
    ["method", "path", "outcome"],
    registry=registry,
)

client_request_duration_seconds = Histogram(
    "deepseek_client_request_duration_seconds",
    "API call latency in seconds",
    ["method", "path", "outcome"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30),
    registry=registry,
)


def observe_request(method: str, path: str, outcome: str, duration: float) -> None:
    client_requests_total.labels(method=method, path=path, outcome=outcome).inc()
    client_request_duration_seconds.labels(
        method=method, path=path, outcome=outcome
    ).observe(duration)


__all__ = [
    "registry",
    "client_requests_total",
    "client_request_duration_seconds",
    "observe_request",
    "generate_latest",
]
