"""Exceptions raised for caller-contract violations.

Environmental problems (stale or corrupt caches, unreadable config,
unknown files or areas) are recovered locally and never raise; only
misuse such as a missing required target does.
"""


class CodemapError(Exception):
    """Base class for codemap errors."""


class MissingTargetError(CodemapError):
    """A command that needs a target was called without one.

    ``str(err)`` is the short reason; ``err.usage`` holds the formatted
    usage text with examples for the command.
    """

    def __init__(self, command: str, usage: str = ""):
        self.command = command
        self.usage = usage
        super().__init__(f'"target" is required for the "{command}" command')
