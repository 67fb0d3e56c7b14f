"""Interactive choice between several matching instances."""

from __future__ import annotations

import logging
import re
import sys
from typing import Any, TextIO

from ec2ssh.constants import DEFAULT_SELECTION, SELECTION_PROMPT
from ec2ssh.core.resolution import Candidate, find_record, project
from ec2ssh.display import format_candidate_table
from ec2ssh.exceptions import InvalidSelectionError, SelectionCancelled

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class Disambiguator:
    """Ask the user which of several matching instances to connect to.

    The candidates are shown as a numbered table followed by a prompt. One
    line is read: a blank line picks the first candidate, an integer picks
    that 1-based index. End of input cancels the whole invocation.

    Parameters
    ----------
    input_stream : TextIO | None
        Stream the answer is read from (default: sys.stdin)
    output_stream : TextIO | None
        Stream the table and prompt are written to (default: sys.stdout)
    """

    def __init__(
        self,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
    ) -> None:
        self.input_stream = input_stream
        self.output_stream = output_stream

    @property
    def _input(self) -> TextIO:
        return self.input_stream or sys.stdin

    @property
    def _output(self) -> TextIO:
        return self.output_stream or sys.stdout

    def choose(self, lookup: str, records: list[dict[str, Any]]) -> dict[str, Any]:
        """Prompt for one of ``records`` and return it.

        Parameters
        ----------
        lookup : str
            Lookup key that matched the records, echoed in the prompt
        records : list[dict[str, Any]]
            Two or more inventory records

        Returns
        -------
        dict[str, Any]
            The record the user selected

        Raises
        ------
        SelectionCancelled
            If input ends before a line is read
        InvalidSelectionError
            If the answer is not an integer or is out of range
        InstanceDataError
            If a record lacks the fields needed for display
        """
        candidates = project(records)

        self._output.write(self.render_prompt(lookup, candidates))
        self._output.flush()

        answer = self._input.readline()
        if answer == "":
            # Cursor sits after the prompt; end the line before exiting.
            self._output.write("\n")
            self._output.flush()
            raise SelectionCancelled(f"Selection for '{lookup}' cancelled")

        index = self.parse_selection(answer, len(candidates))
        chosen = candidates[index - 1]
        logger.debug("selected %d: %s (%s)", index, chosen.display_name, chosen.instance_id)

        return find_record(chosen, records)

    @staticmethod
    def render_prompt(lookup: str, candidates: list[Candidate]) -> str:
        return (
            f"Found more than one instance for '{lookup}'.\n"
            "\n"
            "Available instances:\n"
            "\n"
            f"{format_candidate_table(candidates)}\n"
            "\n"
            f"{SELECTION_PROMPT.format(default=DEFAULT_SELECTION)}"
        )

    @staticmethod
    def parse_selection(answer: str, count: int) -> int:
        """Convert one answer line to a 1-based candidate index.

        Parameters
        ----------
        answer : str
            Line read from the prompt, newline included
        count : int
            Number of candidates

        Returns
        -------
        int
            Index between 1 and ``count``

        Raises
        ------
        InvalidSelectionError
            If the answer is not an integer or is out of range
        """
        value = answer.strip()

        if not value:
            index = DEFAULT_SELECTION
        else:
            if not _INTEGER_RE.fullmatch(value):
                raise InvalidSelectionError(
                    f"Invalid selection '{value}': not an integer", value
                )
            index = int(value)

        if index < 1 or index > count:
            raise InvalidSelectionError(f"Invalid index {index}", value)

        return index
