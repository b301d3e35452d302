# -*- coding: utf-8 -*-
"""Command interpreter: turns one line of user input into a change to
the task list and a response for the user.

Grammar (keyword first, then its payload after a single space):

    list
    help
    todo <description>
    deadline <description> /by <YYYY-MM-DD HHMM>
    event <description> /by <YYYY-MM-DD HHMM-HHMM>
    done <number>
    delete <number>
    find <word>

Task numbers are 1-based. Any error is rendered as its message followed
by the help hint, and the task list is left untouched.
"""
import re
from collections import namedtuple

from duke.errors import DukeError
from duke.errors import EmptyDescriptionError
from duke.errors import MalformedPositionError
from duke.errors import MalformedTemporalPayloadError
from duke.errors import UnknownCommandError
from duke.task import Deadline, Event, ToDo

HELP_MESSAGE = "Type 'help' for the commands that I can process!"
COMMAND_GUIDE = (
    "Hello! Here are the commands that I can understand:\n"
    "• 'list' - to list all tasks stored\n"
    "• 'delete' [index] - to delete the task of the particular index "
    "from the storage\n"
    "• 'done' [index] -  to mark the task of the particular index "
    "as done\n"
    "• 'todo' [name of todo] - adds a todo to storage\n"
    "• 'deadline' [name of deadline] /by [YYYY-MM-DD HHMM] - adds a "
    "deadline to storage\n"
    "• 'event' [name of event] /by [YYYY-MM-DD HHMM-HHMM] - adds an "
    "event to storage\n"
    "• 'find' [name of task] - returns all the tasks with the "
    "particular name"
)
READ_ONLY = ('list', 'help', 'find')
TIME_DELIMITER = re.compile(r'(?:^|\s)/by(?:\s|$)')

Command = namedtuple('Command', ['keyword', 'args'])
Response = namedtuple('Response', ['text', 'ok'])


def _parse_position(payload, size):
    """Convert a 1-based task number typed by the user to a 0-based
    index into the task list.

    Args:
        payload (str):  the task number as typed.
        size (int):     the number of tasks in the list.

    Returns:
        index (int):    the 0-based index.

    """
    try:
        position = int(payload.strip())
    except ValueError:
        raise MalformedPositionError(payload.strip()) from None
    if not 1 <= position <= size:
        raise MalformedPositionError(position, size)
    return position - 1


def _parse_timed(kind, payload):
    """Split a deadline or event payload at its '/by' delimiter.

    Args:
        kind (str):     'deadline' or 'event'.
        payload (str):  the text after the keyword.

    Returns:
        description, when (tuple): both stripped of surrounding spaces.

    """
    parts = TIME_DELIMITER.split(payload, maxsplit=1)
    if len(parts) != 2:
        raise MalformedTemporalPayloadError(kind)
    description, when = parts[0].strip(), parts[1].strip()
    if not description:
        raise EmptyDescriptionError(kind)
    if not when:
        raise MalformedTemporalPayloadError(kind)
    return description, when


def parse(command, size):
    """Classify a line of input and validate its arguments.

    Args:
        command (str):  the raw command line.
        size (int):     the number of tasks, to range-check task numbers.

    Returns:
        command (Command):  the keyword and its parsed arguments.

    """
    text = command.strip()
    if text in ('list', 'help'):
        return Command(text, ())
    if not text:
        raise UnknownCommandError()
    keyword, space, payload = text.partition(' ')
    if not space:
        if keyword == 'todo':
            raise EmptyDescriptionError('todo')
        raise UnknownCommandError(command)

    if keyword in ('delete', 'done'):
        args = (_parse_position(payload, size),)
    elif keyword in ('deadline', 'event'):
        args = _parse_timed(keyword, payload)
    elif keyword == 'todo':
        # stray spaces around the description are not part of it
        description = payload.strip()
        if not description:
            raise EmptyDescriptionError('todo')
        args = (description,)
    elif keyword == 'find':
        args = (payload.strip().lower(),)
    else:
        raise UnknownCommandError(command)
    return Command(keyword, args)


class Parser():
    """Interprets commands against a task list and stores the list
    after each successful command.

    Attributes:
        tasks (TaskList):   the task list commands act on.
        storage (obj):      anything with a store(tasks) method.
        save_on_read (bool): also store after list, help and find.

    """
    def __init__(self, tasks, storage, save_on_read=True):
        """Initializes a Parser() object."""
        self.tasks = tasks
        self.storage = storage
        self.save_on_read = save_on_read

    def record(self, command):
        """Run a command and return the response text.

        Args:
            command (str):  the raw command line.

        Returns:
            response (str): what to show the user.

        """
        return self.run(command).text

    interpret = record

    def run(self, command):
        """Run a command and return the response with a success flag.

        Args:
            command (str):  the raw command line.

        Returns:
            response (Response):    the text and whether it succeeded.

        """
        try:
            cmd = parse(command, self.tasks.size)
            body = self._dispatch(cmd)
        except DukeError as err:
            return Response(f"{err}\n\n{HELP_MESSAGE}", False)
        if self.save_on_read or cmd.keyword not in READ_ONLY:
            self.storage.store(self.tasks)
        return Response(f"{body}\n\n{HELP_MESSAGE}", True)

    def _dispatch(self, cmd):
        handler = getattr(self, f"_do_{cmd.keyword}")
        return handler(*cmd.args)

    def _do_list(self):
        return self._numbered(
            "Here are the tasks in your list:", self.tasks)

    @staticmethod
    def _do_help():
        return COMMAND_GUIDE

    def _do_delete(self, index):
        task = self.tasks.remove(index)
        return (
            "Noted. I've removed this task:\n"
            f"{task}\n"
            f"Now you have {self.tasks.size} tasks in the list."
        )

    def _do_done(self, index):
        task = self.tasks.mark_done(index)
        return f"Nice! I've marked this task as done:\n{task}"

    def _do_deadline(self, description, by):
        return self._added(Deadline(description, by))

    def _do_event(self, description, at):
        return self._added(Event(description, at))

    def _do_todo(self, description):
        return self._added(ToDo(description))

    def _do_find(self, word):
        matches = self.tasks.find(word)
        if not matches:
            return "Sorry there are no such tasks."
        return self._numbered(
            "Here are the matching tasks in your list:", matches)

    def _added(self, task):
        self.tasks.add(task)
        return (
            "Got it. I've added this task:\n"
            f"{task}\n"
            f"Now you have {self.tasks.size} tasks in the list."
        )

    @staticmethod
    def _numbered(header, tasks):
        lines = [header]
        for number, task in enumerate(tasks, start=1):
            lines.append(f"{number}.{task}")
        return "\n".join(lines)
