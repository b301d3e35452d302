# -*- coding: utf-8 -*-
"""Exceptions raised while interpreting commands and storing tasks.

The message of each exception is the text shown to the user.
"""


def _article(word):
    return "an" if word[:1].lower() in "aeiou" else "a"


class DukeError(Exception):
    """Base class for all errors reported back to the user."""


class EmptyDescriptionError(DukeError):
    """A task was requested without a description."""
    def __init__(self, kind="todo"):
        super().__init__(
            f"The description of {_article(kind)} {kind} cannot be empty")
        self.kind = kind


class UnknownCommandError(DukeError):
    """The command keyword is not one the parser understands."""
    def __init__(self, command=None):
        if command:
            msg = f"Unexpected command: {command}"
        else:
            msg = "I'm sorry but I don't know what that means :("
        super().__init__(msg)
        self.command = command


class MalformedPositionError(DukeError):
    """A task number is not an integer or is out of range."""
    def __init__(self, position, size=None):
        if size is None:
            msg = f"'{position}' is not a valid task number"
        else:
            msg = (f"There is no task number {position}; "
                   f"you have {size} tasks in the list")
        super().__init__(msg)
        self.position = position
        self.size = size


class MalformedTemporalPayloadError(DukeError):
    """A deadline or event is missing its '/by' time."""
    EXAMPLES = {
        'deadline': "deadline Submit report /by 2024-01-01 1800",
        'event': "event Team meeting /by 2024-01-01 1400-1500"
    }

    def __init__(self, kind):
        example = self.EXAMPLES.get(kind, kind)
        super().__init__(
            f"{_article(kind).capitalize()} {kind} needs a time after '/by', e.g. {example}")
        self.kind = kind


class StorageError(DukeError):
    """The task file could not be read or written."""
