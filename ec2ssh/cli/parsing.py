"""Command-line argument splitting ahead of Fire."""

from __future__ import annotations

VALUE_FLAGS = {
    "command": "command",
    "c": "command",
    "pem_path": "pem_path",
    "p": "pem_path",
    "user": "user",
    "u": "user",
    "region": "region",
    "r": "region",
    "aws_profile": "aws_profile",
    "a": "aws_profile",
}
"""Flags taking a value, short and long spellings mapped to the run parameter."""

BOOL_FLAGS = {
    "verbose": "verbose",
    "v": "verbose",
    "list_instances": "list_instances",
    "l": "list_instances",
}
"""Switches, short and long spellings mapped to the run parameter."""


def split_arguments(argv: list[str]) -> tuple[list[str], list[str]]:
    """Separate free-form arguments from flags.

    Fire evaluates bare arguments as Python literals and lets surplus
    arguments fill later parameters by position. The lookup key has to reach
    the classifier exactly as typed, so positional arguments are pulled out
    here and every known flag is rewritten as ``--name=value``.

    Parameters
    ----------
    argv : list[str]
        Arguments without the program name

    Returns
    -------
    tuple[list[str], list[str]]
        Positional arguments as typed, and flag arguments for Fire

    Raises
    ------
    ValueError
        If a flag that takes a value is the last argument
    """
    positionals: list[str] = []
    flags: list[str] = []

    args = iter(argv)
    for arg in args:
        if arg == "--":
            positionals.extend(args)
            break

        if arg == "-" or not arg.startswith("-"):
            positionals.append(arg)
            continue

        name, sep, value = arg.lstrip("-").partition("=")
        key = name.replace("-", "_")

        if key in VALUE_FLAGS:
            if not sep:
                value = next(args, None)
                if value is None:
                    raise ValueError(f"flag needs an argument: {arg}")
            flags.append(f"--{VALUE_FLAGS[key]}={value}")
        elif key in BOOL_FLAGS:
            flags.append(f"--{BOOL_FLAGS[key]}" + (f"={value}" if sep else ""))
        else:
            flags.append(arg)

    return positionals, flags
