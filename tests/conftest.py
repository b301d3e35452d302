# tests/conftest.py

from pathlib import Path

import pytest

from duke.duke import Duke
from duke.parser import Parser
from duke.tasklist import TaskList


class FakeStorage:
    """Records every store() call instead of writing a file."""

    def __init__(self):
        self.stored = []

    def store(self, tasks):
        self.stored.append([str(task) for task in tasks])

    @property
    def calls(self):
        return len(self.stored)


@pytest.fixture()
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture()
def tasks() -> TaskList:
    return TaskList()


@pytest.fixture()
def parser(tasks: TaskList, storage: FakeStorage) -> Parser:
    return Parser(tasks, storage)


@pytest.fixture()
def make_config(tmp_path: Path):
    """Write a config file pointing the data dir into tmp_path."""

    def _make(extra_main: str = "", colors: str = "") -> Path:
        config_file = tmp_path / "config" / "duke" / "config"
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(
            "[main]\n"
            f"data_dir = {tmp_path / 'data'}\n"
            f"{extra_main}"
            "\n"
            "[colors]\n"
            f"{colors}",
            encoding="utf-8",
        )
        return config_file

    return _make


@pytest.fixture()
def duke(tmp_path: Path, make_config) -> Duke:
    return Duke(str(make_config()), str(tmp_path / "unused"), "")
