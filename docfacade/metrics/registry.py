from prometheus_client import Counter, Histogram

OPERATION_TOTAL = Counter(
    "docfacade_operations_total",
    "Operations submitted to an executor",
    ["database", "op_type", "status"],
)

OPERATION_LATENCY_SECONDS = Histogram(
    "docfacade_operation_latency_seconds",
    "Time spent executing an operation",
    ["database", "op_type"],
)
