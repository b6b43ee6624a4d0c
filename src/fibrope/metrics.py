"""metrics.py - Prometheus counters for rope edits, splits and rebalances"""

from __future__ import annotations

from typing import Any

from prometheus_client import CollectorRegistry, Counter, Gauge

from .config import METRICS_NAMESPACE, get_config


def create_rope_metrics(registry: CollectorRegistry | None = None) -> dict[str, Any]:
    """Create the rope metric family on ``registry``.

    None registers on the default global prometheus_client registry.
    """
    kwargs: dict[str, Any] = {"namespace": METRICS_NAMESPACE}
    if registry is not None:
        kwargs["registry"] = registry
    edit_operations = Counter(
        "edit_operations_total",
        "Total number of rope edit operations applied",
        ["operation"],
        **kwargs,
    )
    splits = Counter(
        "splits_total",
        "Total number of split_at calls on rope nodes",
        **kwargs,
    )
    concatenations = Counter(
        "concatenations_total",
        "Total number of internal nodes created by concatenation",
        **kwargs,
    )
    rebalances = Counter(
        "rebalances_total",
        "Total number of rebalances that rebuilt a rope tree",
        **kwargs,
    )
    index_errors = Counter(
        "index_errors_total",
        "Total number of operations rejected for out-of-range indices",
        ["operation"],
        **kwargs,
    )
    last_rebalance_depth = Gauge(
        "last_rebalance_depth",
        "Tree depth produced by the most recent rebalance",
        **kwargs,
    )
    return {
        "edit_operations": edit_operations,
        "splits": splits,
        "concatenations": concatenations,
        "rebalances": rebalances,
        "index_errors": index_errors,
        "last_rebalance_depth": last_rebalance_depth,
    }


# Default global metrics (for production)
_default_metrics = create_rope_metrics()
edit_operations = _default_metrics["edit_operations"]
splits = _default_metrics["splits"]
concatenations = _default_metrics["concatenations"]
rebalances = _default_metrics["rebalances"]
index_errors = _default_metrics["index_errors"]
last_rebalance_depth = _default_metrics["last_rebalance_depth"]


def get_rope_prometheus_metrics() -> list[Any]:
    """Return the default metric objects, e.g. for a custom exporter."""
    return list(_default_metrics.values())


def record_edit(operation: str) -> None:
    if get_config().metrics_enabled:
        edit_operations.labels(operation=operation).inc()


def record_split() -> None:
    if get_config().metrics_enabled:
        splits.inc()


def record_concat() -> None:
    if get_config().metrics_enabled:
        concatenations.inc()


def record_rebalance(depth: int) -> None:
    if get_config().metrics_enabled:
        rebalances.inc()
        last_rebalance_depth.set(depth)


def record_index_error(operation: str) -> None:
    if get_config().metrics_enabled:
        index_errors.labels(operation=operation).inc()
