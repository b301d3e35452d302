# tests/test_duke.py

import io
from pathlib import Path
from types import SimpleNamespace

import pytest
from rich.console import Console

from duke.duke import DEFAULT_CONFIG, Duke, DukeShell, FSHandler
from duke.parser import HELP_MESSAGE
from duke.storage import Storage


def _console() -> Console:
    return Console(file=io.StringIO(), width=120, color_system=None)


def _shell(duke: Duke) -> DukeShell:
    out = io.StringIO()
    shell = DukeShell(duke, stdin=io.StringIO(), stdout=out, watch=False)
    shell.use_rawinput = False
    return shell


def test_default_config_is_created(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    config_file = tmp_path / "cfg" / "config"

    duke = Duke(str(config_file), str(tmp_path / "data"), DEFAULT_CONFIG)

    assert config_file.read_text(encoding="utf-8") == DEFAULT_CONFIG
    assert duke.data_dir == str(tmp_path / ".local" / "share" / "duke")
    assert Path(duke.data_dir).is_dir()
    assert duke.save_on_read is True


def test_execute_persists_to_data_dir(duke: Duke, tmp_path: Path) -> None:
    response = duke.execute("todo Buy milk")

    assert response.ok
    reloaded = Storage(str(tmp_path / "data" / "tasks.yml")).load()
    assert [str(task) for task in reloaded] == ["[T][ ] Buy milk"]


def test_tasks_survive_restart(tmp_path: Path, make_config) -> None:
    config_file = str(make_config())
    first = Duke(config_file, "", "")
    first.execute("deadline Submit report /by 2024-01-01 1800")
    first.execute("done 1")

    second = Duke(config_file, "", "")

    assert second.execute("list").text.startswith(
        "Here are the tasks in your list:\n"
        "1.[D][X] Submit report (by: 2024-01-01 1800)"
    )


def test_list_writes_file_by_default(duke: Duke, tmp_path: Path) -> None:
    duke.execute("list")

    assert (tmp_path / "data" / "tasks.yml").exists()


def test_save_on_read_option(tmp_path: Path, make_config) -> None:
    duke = Duke(str(make_config("save_on_read = false\n")), "", "")

    duke.execute("list")
    assert not (tmp_path / "data" / "tasks.yml").exists()

    duke.execute("todo x")
    assert (tmp_path / "data" / "tasks.yml").exists()


def test_invalid_days_soon_falls_back(tmp_path: Path, make_config, capsys) -> None:
    duke = Duke(str(make_config("days_soon = soonish\n")), "", "")

    assert duke.days_soon == 1
    assert "NOTICE: invalid config option 'days_soon'" in capsys.readouterr().out


def test_invalid_color_is_ignored(make_config) -> None:
    duke = Duke(str(make_config(colors="error = not_a_color\ndone = blue\n")), "", "")

    assert duke.styles["error"].color.name == "default"
    assert duke.styles["done"].color.name == "blue"


def test_disable_colors(make_config) -> None:
    duke = Duke(str(make_config(colors="disable_colors = true\n")), "", "")

    assert duke.color_enabled is False
    assert all(style.color.name == "default" for style in duke.styles.values())


def test_refresh_reloads_in_place(duke: Duke) -> None:
    tasks = duke.tasks
    duke.execute("todo a")
    Storage(duke.storage.filename).store([])

    duke.refresh()

    assert duke.tasks is tasks
    assert duke.tasks.size == 0
    assert duke.parser.tasks is tasks


def test_table_lists_tasks(duke: Duke) -> None:
    duke.execute("todo Buy milk")
    duke.execute("deadline Submit report /by 2024-01-01 1800")
    duke.execute("done 1")
    console = _console()

    duke.table(console=console)

    output = console.file.getvalue()
    assert "Buy milk" in output
    assert "[X]" in output
    assert "Submit report" in output
    assert "2024-01-01 1800" in output


def test_table_empty(duke: Duke) -> None:
    console = _console()

    duke.table(console=console)

    assert "None" in console.file.getvalue()


def test_shell_routes_lines_to_parser(duke: Duke) -> None:
    shell = _shell(duke)

    shell.onecmd("todo Buy milk")
    shell.onecmd("help")
    shell.onecmd("frobnicate")

    output = shell.stdout.getvalue()
    assert "Got it. I've added this task:" in output
    assert "Hello! Here are the commands that I can understand:" in output
    assert "Unexpected command: frobnicate" in output
    assert output.count(HELP_MESSAGE) == 3
    assert duke.tasks.size == 1


def test_shell_exit_words(duke: Duke) -> None:
    shell = _shell(duke)

    assert shell.onecmd("exit")
    assert shell.onecmd("quit")
    assert shell.onecmd("bye")
    assert not shell.onecmd("list")


def test_shell_cmdloop(duke: Duke) -> None:
    out = io.StringIO()
    shell = DukeShell(
        duke,
        stdin=io.StringIO("todo a\n\ndone 1\nlist\nexit\n"),
        stdout=out,
        watch=False,
    )
    shell.use_rawinput = False

    shell.cmdloop()

    assert "1.[T][X] a" in out.getvalue()


def test_shell_eof_exits(duke: Duke) -> None:
    out = io.StringIO()
    shell = DukeShell(duke, stdin=io.StringIO("todo a\n"), stdout=out, watch=False)
    shell.use_rawinput = False

    shell.cmdloop()

    assert "Unexpected command: EOF" not in out.getvalue()
    assert duke.tasks.size == 1


def test_fs_handler_only_reacts_to_task_file(duke: Duke) -> None:
    refreshed = []
    shell = SimpleNamespace(duke=duke, do_refresh=refreshed.append)
    handler = FSHandler(shell)

    handler.on_any_event(
        SimpleNamespace(event_type="modified", src_path=duke.storage.filename)
    )
    handler.on_any_event(
        SimpleNamespace(event_type="modified", src_path=duke.storage.filename + ".bak")
    )
    handler.on_any_event(
        SimpleNamespace(event_type="moved", src_path="/tmp/.tasks-x.yml", dest_path=duke.storage.filename)
    )
    handler.on_any_event(
        SimpleNamespace(event_type="opened", src_path=duke.storage.filename)
    )

    assert refreshed == ["silent", "silent"]


def test_unreadable_task_file_exits(tmp_path: Path, make_config) -> None:
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "tasks.yml").write_text("tasks: [oops\n", encoding="utf-8")

    with pytest.raises(SystemExit):
        Duke(str(make_config()), "", "")


def _run_main(monkeypatch, tmp_path: Path, *argv) -> None:
    from duke import duke as app

    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setattr("sys.argv", ["duke", *argv])
    app.main()


def test_main_do_runs_one_command(monkeypatch, tmp_path: Path, capsys) -> None:
    _run_main(monkeypatch, tmp_path, "do", "todo", "Buy", "milk")

    assert "[T][ ] Buy milk" in capsys.readouterr().out
    assert (tmp_path / "xdg-config" / "duke" / "config").exists()
    assert (tmp_path / ".local" / "share" / "duke" / "tasks.yml").exists()


def test_main_do_failure_exits_nonzero(monkeypatch, tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        _run_main(monkeypatch, tmp_path, "do", "todo")

    assert exc.value.code == 1
    assert "The description of a todo cannot be empty" in capsys.readouterr().out


def test_main_without_command_prints_help(monkeypatch, tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        _run_main(monkeypatch, tmp_path)

    assert exc.value.code == 1
    assert "usage: duke" in capsys.readouterr().err
