# -*- coding: utf-8 -*-
"""YAML persistence for the task list."""
import os
import tempfile

import yaml

from duke.errors import StorageError
from duke.task import task_from_dict
from duke.tasklist import TaskList

TASKS_FILE = "tasks.yml"


class Storage():
    """Reads and writes the task list to a YAML file.

    Attributes:
        filename (str): the task file.

    """
    def __init__(self, filename):
        """Initializes a Storage() object."""
        self.filename = filename

    @staticmethod
    def _error_pass(errormsg):
        """Print an error message but don't exit.

        Args:
            errormsg (str): the error message to display.

        """
        print(f'ERROR: {errormsg}.')

    def load(self):
        """Read the task file. A missing file is an empty list; entries
        that aren't valid tasks are skipped.

        Returns:
            tasks (TaskList):   the stored tasks.

        """
        if not os.path.exists(self.filename):
            return TaskList()
        try:
            with open(self.filename, "r",
                      encoding="utf-8") as task_file:
                data = yaml.safe_load(task_file)
        except (OSError, yaml.YAMLError) as err:
            raise StorageError(
                f"failure reading or parsing {self.filename}") from err
        tasks = TaskList()
        if not data:
            return tasks
        entries = data.get("tasks") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            self._error_pass(f"no task list in {self.filename}")
            return tasks
        for number, entry in enumerate(entries, start=1):
            task = task_from_dict(entry)
            if task:
                tasks.add(task)
            else:
                self._error_pass(
                    f"invalid task #{number} in {self.filename} "
                    "- SKIPPING")
        return tasks

    def store(self, tasks):
        """Write the task list. The file is replaced only once the new
        content has been written in full.

        Args:
            tasks (TaskList):   the tasks to write.

        """
        data = {"tasks": [task.to_dict() for task in tasks]}
        directory = os.path.dirname(os.path.abspath(self.filename))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=".tasks-", suffix=".yml")
        except OSError as err:
            raise StorageError(f"failure writing {self.filename}") from err
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as out_file:
                yaml.dump(
                    data,
                    out_file,
                    default_flow_style=False,
                    sort_keys=False)
            os.replace(tmp_name, self.filename)
        except (OSError, yaml.YAMLError) as err:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise StorageError(f"failure writing {self.filename}") from err
