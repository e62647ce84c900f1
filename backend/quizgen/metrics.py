"""
In-process counters for observability. Process-local; for multi-worker use external metrics (e.g. Prometheus).
Written by the generator after each call; nothing in the pipeline reads them.
"""
import threading

# Blocks found in model output that could not be parsed into a question.
mcq_blocks_dropped_total: int = 0
# Questions successfully parsed and returned to callers.
mcq_questions_parsed_total: int = 0
_lock = threading.Lock()


def record_parse_result(parsed: int, dropped: int) -> tuple[int, int]:
    """Add one generation's counts; return the new (parsed, dropped) totals. Thread-safe."""
    global mcq_blocks_dropped_total, mcq_questions_parsed_total
    with _lock:
        mcq_questions_parsed_total += parsed
        mcq_blocks_dropped_total += dropped
        return mcq_questions_parsed_total, mcq_blocks_dropped_total
