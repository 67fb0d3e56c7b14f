"""Logging filters for stream routing."""

import logging

STDOUT = "stdout"
STDERR = "stderr"


class StreamRoutingFilter(logging.Filter):
    """Pass only the records destined for one output stream.

    A record picks its stream with ``extra={"stream": "stdout"}``. Untagged
    records are diagnostics and belong to stderr, which keeps the candidate
    table and prompt on stdout free of log noise.

    Parameters
    ----------
    stream_type : str
        ``"stdout"`` or ``"stderr"``
    """

    def __init__(self, stream_type: str) -> None:
        if stream_type not in (STDOUT, STDERR):
            raise ValueError(f"Unknown stream type: {stream_type}")
        super().__init__()
        self.stream_type = stream_type

    def filter(self, record: logging.LogRecord) -> bool:
        return getattr(record, "stream", STDERR) == self.stream_type
