# -*- coding: utf-8 -*-
"""Task entities: todos, deadlines and events."""
import re
from datetime import datetime

import tzlocal
from dateutil import parser as dtparser

TIME_FORMAT = "%Y-%m-%d %H%M"
RANGE_RE = re.compile(r'^(?P<start>.*\d{4})-(?P<end>\d{4})$')


def datetime_or_none(timestr):
    """Verify a datetime object or a datetime string and return a
    timezone-aware datetime object or None.

    Accepts the "YYYY-MM-DD HHMM" form used on the command line as well
    as anything dateutil understands.

    Args:
        timestr (str): a datetime formatted string.

    Returns:
        timeobj (datetime): a valid datetime object or None.

    """
    ltz = tzlocal.get_localzone()
    if isinstance(timestr, datetime):
        if timestr.tzinfo is None:
            return timestr.replace(tzinfo=ltz)
        return timestr.astimezone(tz=ltz)
    if not timestr:
        return None
    try:
        timeobj = datetime.strptime(str(timestr).strip(), TIME_FORMAT)
    except ValueError:
        try:
            timeobj = dtparser.parse(str(timestr))
        except (TypeError, ValueError, OverflowError,
                dtparser.ParserError):
            return None
    if timeobj.tzinfo is None:
        timeobj = timeobj.replace(tzinfo=ltz)
    else:
        timeobj = timeobj.astimezone(tz=ltz)
    return timeobj


class Task():
    """A unit of work tracked by duke.

    Attributes:
        description (str):  free text description.
        done (bool):        completion flag.
        created (datetime): when the task was created.

    """
    TAG = "?"
    KIND = None

    def __init__(self, description, done=False, created=None):
        """Initializes a Task() object."""
        self.description = description
        self.done = bool(done)
        self.created = (datetime_or_none(created)
                        or datetime.now(tz=tzlocal.get_localzone()))

    def __str__(self):
        return f"[{self.TAG}][{self.status_icon}] {self.description}"

    def __repr__(self):
        return (f"{type(self).__name__}(description={self.description!r}, "
                f"done={self.done})")

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.to_dict(created=False) == other.to_dict(created=False)

    __hash__ = None

    @property
    def status_icon(self):
        """The completion marker shown between brackets."""
        return "X" if self.done else " "

    @property
    def when(self):
        """The datetime used to flag late or upcoming tasks, if any."""
        return None

    def mark_as_done(self):
        """Mark the task complete."""
        self.done = True

    def has_word(self, word):
        """Check whether a space-delimited word of the description
        equals `word` exactly.

        Args:
            word (str): the word to look for.

        Returns:
            found (bool): the word is in the description.

        """
        return word in self.description.split(" ")

    def to_dict(self, created=True):
        """Structured data for storage.

        Args:
            created (bool): include the creation timestamp.

        Returns:
            data (dict):    the task fields.

        """
        data = {
            "type": self.KIND,
            "description": self.description,
            "done": self.done
        }
        data.update(self._extra_fields())
        if created:
            data["created"] = self.created
        return data

    def _extra_fields(self):
        return {}


class ToDo(Task):
    """A task without any date attached."""
    TAG = "T"
    KIND = "todo"


class Deadline(Task):
    """A task that must be done by a given time.

    Attributes:
        by (str):   the due-by timestamp ("YYYY-MM-DD HHMM").

    """
    TAG = "D"
    KIND = "deadline"

    def __init__(self, description, by, done=False, created=None):
        """Initializes a Deadline() object."""
        super().__init__(description, done=done, created=created)
        self.by = by

    def __str__(self):
        return f"{super().__str__()} (by: {self.by})"

    @property
    def due(self):
        """The due-by time as a datetime, or None if it can't be parsed."""
        return datetime_or_none(self.by)

    @property
    def when(self):
        return self.due

    def _extra_fields(self):
        return {"by": self.by}


class Event(Task):
    """A task happening during a time range.

    Attributes:
        at (str):   the time range ("YYYY-MM-DD HHMM-HHMM").

    """
    TAG = "E"
    KIND = "event"

    def __init__(self, description, at, done=False, created=None):
        """Initializes an Event() object."""
        super().__init__(description, done=done, created=created)
        self.at = at

    def __str__(self):
        return f"{super().__str__()} (at: {self.at})"

    @property
    def start(self):
        """The start of the range as a datetime, or None."""
        match = RANGE_RE.match(self.at.strip())
        if match:
            return datetime_or_none(match.group('start'))
        return datetime_or_none(self.at)

    @property
    def end(self):
        """The end of the range as a datetime, or None."""
        match = RANGE_RE.match(self.at.strip())
        start = self.start
        if not match or not start:
            return None
        return datetime_or_none(
            f"{start.strftime('%Y-%m-%d')} {match.group('end')}")

    @property
    def when(self):
        return self.start

    def _extra_fields(self):
        return {"at": self.at}


TASK_TYPES = {
    ToDo.KIND: ToDo,
    Deadline.KIND: Deadline,
    Event.KIND: Event
}


def task_from_dict(data):
    """Build a task from its stored form.

    Args:
        data (dict):    the stored task fields.

    Returns:
        task (Task):    the task, or None if the data is not a valid task.

    """
    if not isinstance(data, dict):
        return None
    kind = str(data.get("type", "")).lower()
    description = data.get("description")
    if kind not in TASK_TYPES or not description:
        return None
    done = bool(data.get("done", False))
    created = data.get("created")
    if kind == Deadline.KIND:
        return Deadline(str(description), str(data.get("by") or ""),
                        done=done, created=created)
    if kind == Event.KIND:
        return Event(str(description), str(data.get("at") or ""),
                     done=done, created=created)
    return ToDo(str(description), done=done, created=created)
