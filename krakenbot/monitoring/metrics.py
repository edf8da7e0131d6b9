# krakenbot/monitoring/metrics.py

from typing import Optional
from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, push_to_gateway, start_http_server

_metrics_started = False

# Objets de métriques (initialisés au premier start_metrics())
REGISTRY: Optional[CollectorRegistry] = None
API_LATENCY: Optional[Histogram] = None          # labels: endpoint, status
ORDERS_TOTAL: Optional[Counter] = None           # labels: status
WITHDRAWALS_TOTAL: Optional[Counter] = None      # labels: status
BALANCE_GAUGE: Optional[Gauge] = None            # labels: asset


def start_metrics(
    *,
    enabled: bool,
    namespace: str = "kraken_bot",
    port: Optional[int] = None,
    addr: str = "0.0.0.0",
) -> None:
    global _metrics_started, REGISTRY, API_LATENCY, ORDERS_TOTAL, WITHDRAWALS_TOTAL, BALANCE_GAUGE
    if not enabled or _metrics_started:
        return

    REGISTRY = CollectorRegistry()
    API_LATENCY = Histogram(f"{namespace}_api_latency_seconds", "Latence des appels API", ["endpoint", "status"], registry=REGISTRY)
    ORDERS_TOTAL = Counter(f"{namespace}_orders_total", "Total des ordres envoyés", ["status"], registry=REGISTRY)
    WITHDRAWALS_TOTAL = Counter(f"{namespace}_withdrawals_total", "Total des retraits demandés", ["status"], registry=REGISTRY)
    BALANCE_GAUGE = Gauge(f"{namespace}_balance", "Dernier solde lu", ["asset"], registry=REGISTRY)

    if port:
        start_http_server(port, addr=addr, registry=REGISTRY)  # expose /metrics

    _metrics_started = True


def observe_api_latency(endpoint: str, status: str, seconds: float) -> None:
    if API_LATENCY is None:
        return
    API_LATENCY.labels(endpoint=endpoint, status=status).observe(max(0.0, seconds))


def inc_order(status: str) -> None:
    if ORDERS_TOTAL is None:
        return
    ORDERS_TOTAL.labels(status=status or "unknown").inc()


def inc_withdrawal(status: str) -> None:
    if WITHDRAWALS_TOTAL is None:
        return
    WITHDRAWALS_TOTAL.labels(status=status or "unknown").inc()


def set_balance(asset: str, value: float) -> None:
    if BALANCE_GAUGE is None:
        return
    BALANCE_GAUGE.labels(asset=asset).set(float(value))


def push_metrics(*, gateway: Optional[str], job: str = "kraken_bot") -> bool:
    """
    Pousse le registre vers un Pushgateway (run one-shot : pas de scrape possible).
    """
    if REGISTRY is None or not gateway:
        return False
    push_to_gateway(gateway, job=job, registry=REGISTRY)
    return True
