from ..metrics.registry import OPERATION_LATENCY_SECONDS, OPERATION_TOTAL


def observe_operation(database: str, op_type: str, status: str, latency_s: float) -> None:
    """
    Record one executed operation.

    status is "success" or "error".
    """
    OPERATION_TOTAL.labels(database=database, op_type=op_type, status=status).inc()
    OPERATION_LATENCY_SECONDS.labels(database=database, op_type=op_type).observe(latency_s)
