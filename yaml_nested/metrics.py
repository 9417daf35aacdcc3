"""
Description:
Prometheus metrics for the converter.

Defines counters and summaries for tracking document flow and conversion durations.
"""

from prometheus_client import REGISTRY, Counter, Summary, write_to_textfile

DOCUMENTS_IN = Counter(
    'documents_in_total', 'Total number of documents read by the converter'
)
DOCUMENTS_OUT = Counter(
    'documents_out_total', 'Total number of documents successfully converted'
)
CONVERSION_ERRORS = Counter(
    'conversion_errors_total', 'Total number of documents that resulted in an error'
)

CONVERSION_DURATION = Summary(
    'conversion_duration_seconds', 'Time spent flattening or unflattening a document'
)


def write_metrics(path: str) -> None:
    """Write the current metrics for the textfile collector."""
    write_to_textfile(path, REGISTRY)
