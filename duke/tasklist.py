# -*- coding: utf-8 -*-
"""The ordered collection of tasks."""


class TaskList():
    """An ordered, index-addressable list of tasks. Indices are
    0-based; translating from the 1-based numbers users type is the
    caller's job.

    Attributes:
        tasks (list):   the tasks, in insertion order.

    """
    def __init__(self, tasks=None):
        """Initializes a TaskList() object."""
        self.tasks = list(tasks) if tasks else []

    def __len__(self):
        return len(self.tasks)

    def __iter__(self):
        return iter(self.tasks)

    @property
    def size(self):
        """The number of tasks in the list."""
        return len(self.tasks)

    def add(self, task):
        """Append a task to the end of the list.

        Args:
            task (Task):    the task to add.

        """
        self.tasks.append(task)

    def get(self, index):
        """Return the task at a 0-based index.

        Args:
            index (int):    the task index.

        Returns:
            task (Task):    the task at that index.

        """
        self._check_index(index)
        return self.tasks[index]

    def remove(self, index):
        """Remove and return the task at a 0-based index.

        Args:
            index (int):    the task index.

        Returns:
            task (Task):    the removed task.

        """
        self._check_index(index)
        return self.tasks.pop(index)

    def mark_done(self, index):
        """Mark the task at a 0-based index as done.

        Args:
            index (int):    the task index.

        Returns:
            task (Task):    the updated task.

        """
        task = self.get(index)
        task.mark_as_done()
        return task

    def find(self, word):
        """Find the tasks with `word` as a whole word of their
        description, keeping list order.

        Args:
            word (str):     the word to search for.

        Returns:
            matches (list): the matching tasks.

        """
        return [task for task in self.tasks if task.has_word(word)]

    def replace(self, tasks):
        """Swap the contents of the list in place.

        Args:
            tasks (iterable):   the new tasks.

        """
        self.tasks[:] = list(tasks)

    def _check_index(self, index):
        # negative indices would silently address from the end
        if not 0 <= index < len(self.tasks):
            raise IndexError(f"task index {index} out of range")
