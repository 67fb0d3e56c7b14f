"""Logging formatters for stream routing."""

import logging


class ProgramFormatter(logging.Formatter):
    """Logging formatter that prefixes every line with the program name.

    Parameters
    ----------
    prog : str
        Program name written before each line, e.g. ``ec2ssh``
    fmt : str | None
        Format string passed to :class:`logging.Formatter`
    """

    def __init__(self, prog: str, fmt: str | None = "%(message)s") -> None:
        super().__init__(fmt)
        self.prog = prog

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with the program prefix on each line.

        Records tagged with ``stream="stdout"`` are user-facing output and are
        left unprefixed.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format

        Returns
        -------
        str
            Formatted log message
        """
        msg = super().format(record)

        if getattr(record, "stream", None) == "stdout":
            return msg

        return "\n".join(f"{self.prog}: {line}" for line in msg.splitlines())
