#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""duke
Version:  0.1.0
License:  MIT
About:
A personal task-tracking assistant driven by one-line commands, with
local file-based storage.

usage: duke [-h] [-c <file>] for more help: duke <command> -h ...

Personal task tracking from the terminal.

commands:
  (for more help: duke <command> -h)
    config              edit configuration file
    do                  run a single command (todo, deadline, ...)
    list (ls)           show tasks in a table
    shell               interactive shell
    version             show version info

optional arguments:
  -h, --help            show this help message and exit
  -c <file>, --config <file>
                        config file

"""
import argparse
import configparser
import os
import subprocess
import sys
import threading
from cmd import Cmd
from datetime import datetime, timedelta

import tzlocal
from rich import box
from rich.color import ColorParseError
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from duke.errors import StorageError
from duke.parser import Parser
from duke.storage import Storage, TASKS_FILE

APP_NAME = "duke"
APP_VERS = "0.1.0"
APP_LICENSE = "Released under MIT license."
DEFAULT_DAYS_SOON = 1
DEFAULT_DATA_DIR = f"$HOME/.local/share/{APP_NAME}"
DEFAULT_CONFIG_FILE = f"$HOME/.config/{APP_NAME}/config"
DEFAULT_CONFIG = (
    "[main]\n"
    f"data_dir = {DEFAULT_DATA_DIR}\n"
    "# write the task file after read-only commands too\n"
    "# (list, help, find)\n"
    "save_on_read = true\n"
    "# how many days before a deadline is 'soon'\n"
    f"#days_soon = {DEFAULT_DAYS_SOON}\n"
    "\n"
    "[colors]\n"
    "disable_colors = false\n"
    "disable_bold = false\n"
    "# set to 'true' if your terminal pager supports color\n"
    "# output and you would like color output when using\n"
    "# the '--pager' ('-p') option\n"
    "color_pager = false\n"
    "# custom colors\n"
    "#title = bright_blue\n"
    "#response = default\n"
    "#error = red\n"
    "#done = green\n"
    "#pending = default\n"
    "#date = green\n"
    "#date_soon = yellow\n"
    "#date_late = red\n"
    "#tag = cyan\n"
)
COLOR_OPTIONS = ('title', 'response', 'error', 'done', 'pending', 'date',
                 'date_soon', 'date_late', 'tag')


class Duke():
    """Owns the configuration, the task list and its storage, and runs
    commands against them.

    Attributes:
        config_file (str):  application config file.
        data_dir (str):     directory containing the task file.
        dflt_config (str):  the default config if none is present.

    """
    def __init__(
            self,
            config_file,
            data_dir,
            dflt_config):
        """Initializes a Duke() object."""
        self.config_file = config_file
        self.data_dir = data_dir
        self.config_dir = os.path.dirname(self.config_file)
        self.dflt_config = dflt_config
        self.interactive = False

        # default colors
        self.color_title = "bright_blue"
        self.color_response = "default"
        self.color_error = "red"
        self.color_done = "green"
        self.color_pending = "default"
        self.color_date = "green"
        self.color_date_soon = "yellow"
        self.color_date_late = "red"
        self.color_tag = "cyan"
        self.color_bold = True
        self.color_pager = False
        self.color_enabled = True

        # default settings
        self.ltz = tzlocal.get_localzone()
        self.days_soon = DEFAULT_DAYS_SOON
        self.save_on_read = True

        # editor (required for some functions)
        self.editor = os.environ.get("EDITOR")

        # styles are built from the colors once the config is parsed
        self.styles = {}

        # one command or reload at a time
        self.lock = threading.Lock()

        self._default_config()
        self._parse_config()
        self._verify_data_dir()
        self.storage = Storage(os.path.join(self.data_dir, TASKS_FILE))
        self.tasks = self._load_tasks()
        self.parser = Parser(
            self.tasks,
            self.storage,
            save_on_read=self.save_on_read)

    def _default_config(self):
        """Create a default configuration directory and file if they
        do not already exist.
        """
        if not os.path.exists(self.config_file):
            try:
                os.makedirs(self.config_dir, exist_ok=True)
                with open(self.config_file, "w",
                          encoding="utf-8") as config_file:
                    config_file.write(self.dflt_config)
            except IOError:
                self._error_exit(
                    "Config file doesn't exist "
                    "and can't be created.")

    @staticmethod
    def _error_exit(errormsg):
        """Print an error message and exit with a status of 1

        Args:
            errormsg (str): the error message to display.

        """
        print(f'ERROR: {errormsg}.')
        sys.exit(1)

    @staticmethod
    def _error_pass(errormsg):
        """Print an error message but don't exit.

        Args:
            errormsg (str): the error message to display.

        """
        print(f'ERROR: {errormsg}.')

    def _handle_error(self, msg):
        """Reports an error message and conditionally handles error exit
        or notification.

        Args:
            msg (str):  the error message.

        """
        if self.interactive:
            self._error_pass(msg)
        else:
            self._error_exit(msg)

    def _load_tasks(self):
        try:
            return self.storage.load()
        except StorageError as err:
            self._error_exit(str(err))

    def _parse_config(self):
        """Read and parse the configuration file."""
        config = configparser.ConfigParser()
        if os.path.isfile(self.config_file):
            try:
                config.read(self.config_file)
            except configparser.Error:
                self._error_exit("Error reading config file")

            if "main" in config:
                if config["main"].get("data_dir"):
                    self.data_dir = os.path.expandvars(
                        os.path.expanduser(
                            config["main"].get("data_dir")))
                try:
                    self.save_on_read = config["main"].getboolean(
                        "save_on_read", True)
                except ValueError:
                    print(
                        "NOTICE: invalid config option 'save_on_read', "
                        "defaulting to true."
                    )
                    self.save_on_read = True
                self.days_soon = config["main"].get(
                    "days_soon", DEFAULT_DAYS_SOON)
                try:
                    self.days_soon = int(self.days_soon)
                except (ValueError, TypeError):
                    print(
                        "NOTICE: invalid config option 'days_soon', "
                        f"defaulting to {DEFAULT_DAYS_SOON}."
                    )
                    self.days_soon = DEFAULT_DAYS_SOON

            if "colors" in config:
                # custom colors
                for option in COLOR_OPTIONS:
                    value = config["colors"].get(option)
                    if value:
                        setattr(self, f"color_{option}", value)

                # color paging (disabled by default)
                self.color_pager = config["colors"].getboolean(
                    "color_pager", False)

                # disable colors
                if bool(config["colors"].getboolean("disable_colors")):
                    self.color_enabled = False
                    for option in COLOR_OPTIONS:
                        setattr(self, f"color_{option}", "default")

                # disable bold
                if bool(config["colors"].getboolean("disable_bold")):
                    self.color_bold = False
        else:
            self._error_exit("Config file not found")

        self._apply_colors()

    def _apply_colors(self):
        """Build styles from the configured colors, skipping invalid
        color names.
        """
        bold = ('title', 'error', 'done', 'date_soon', 'date_late')
        for option in COLOR_OPTIONS:
            try:
                self.styles[option] = Style(
                    color=getattr(self, f"color_{option}"),
                    bold=self.color_bold and option in bold)
            except ColorParseError:
                self.styles[option] = Style(color="default")

    def _verify_data_dir(self):
        """Create the data directory if it doesn't exist."""
        if not os.path.exists(self.data_dir):
            try:
                os.makedirs(self.data_dir)
            except IOError:
                self._error_exit(
                    f"{self.data_dir} doesn't exist "
                    "and can't be created")
        elif not os.path.isdir(self.data_dir):
            self._error_exit(f"{self.data_dir} is not a directory")
        elif not os.access(self.data_dir,
                           os.R_OK | os.W_OK | os.X_OK):
            self._error_exit(
                "You don't have read/write/execute permissions to "
                f"{self.data_dir}")

    def _format_when(self, task):
        """Stylize the date column for a task based on how close it is.

        Args:
            task (Task):    the task to format.

        Returns:
            output (obj):   rich Text() object.

        """
        text = getattr(task, 'by', None) or getattr(task, 'at', None) or ""
        styled = Text(text)
        when = task.when
        if not text:
            return styled
        if task.done or not when:
            styled.stylize(self.styles['date'])
            return styled
        now = datetime.now(tz=self.ltz)
        soon = now + timedelta(days=self.days_soon)
        if when <= now:
            styled.stylize(self.styles['date_late'])
        elif when <= soon:
            styled.stylize(self.styles['date_soon'])
        else:
            styled.stylize(self.styles['date'])
        return styled

    def execute(self, command):
        """Run one command through the parser.

        Args:
            command (str):  the command line.

        Returns:
            response (Response):    the response text and success flag.

        """
        with self.lock:
            return self.parser.run(command)

    def refresh(self):
        """Reload the task list from the task file, in place."""
        with self.lock:
            try:
                tasks = self.storage.load()
            except StorageError as err:
                self._handle_error(str(err))
            else:
                self.tasks.replace(tasks)

    def edit_config(self):
        """Edit the config file (using $EDITOR) and then reload config."""
        if self.editor:
            try:
                subprocess.run(
                    [self.editor, self.config_file], check=True)
            except subprocess.SubprocessError:
                self._handle_error("failure editing config file")
            else:
                if self.interactive:
                    self._parse_config()
                    self.parser.save_on_read = self.save_on_read
                    self.refresh()
        else:
            self._handle_error("$EDITOR is required and not set")

    def print_response(self, response, console=None):
        """Print a command response, errors in the error color.

        Args:
            response (Response):    the parser response.
            console (obj):          rich Console() to print to.

        """
        console = console or Console()
        style = self.styles['response'] if response.ok \
            else self.styles['error']
        console.print(Text(response.text, style=style), soft_wrap=True)

    def table(self, pager=False, console=None):
        """Print the task list as a table.

        Args:
            pager (bool):   paginate output.
            console (obj):  rich Console() to print to.

        """
        console = console or Console()
        task_table = Table(
            title="Tasks",
            title_style=self.styles['title'],
            title_justify="left",
            box=box.SIMPLE,
            show_header=True,
            show_lines=False,
            pad_edge=False)
        task_table.add_column("#", justify="right")
        task_table.add_column("type")
        task_table.add_column("done")
        task_table.add_column("description")
        task_table.add_column("when")
        with self.lock:
            rows = list(self.tasks)
        for number, task in enumerate(rows, start=1):
            tagtxt = Text(task.TAG, style=self.styles['tag'])
            if task.done:
                donetxt = Text("[X]", style=self.styles['done'])
            else:
                donetxt = Text("[ ]", style=self.styles['pending'])
            task_table.add_row(
                str(number),
                tagtxt,
                donetxt,
                Text(task.description),
                self._format_when(task))
        if not rows:
            task_table.add_row("", "", "", "None", "")

        # render the output with a pager if -p
        if pager:
            if self.color_pager:
                with console.pager(styles=True):
                    console.print(task_table)
            else:
                with console.pager():
                    console.print(task_table)
        else:
            console.print(task_table)


class FSHandler(FileSystemEventHandler):
    """Handler to watch for changes to the task file and refresh data.

    Attributes:
        shell (obj):    the calling shell object.

    """
    def __init__(self, shell):
        """Initializes an FSHandler() object."""
        self.shell = shell

    def on_any_event(self, event):
        """Refresh data in memory on task file changes.

        Args:
            event (obj):    file system event.

        """
        if event.event_type not in [
                'created', 'modified', 'deleted', 'moved']:
            return
        filename = os.path.abspath(self.shell.duke.storage.filename)
        paths = [event.src_path, getattr(event, 'dest_path', None)]
        if any(path and os.path.abspath(os.fsdecode(path)) == filename
               for path in paths):
            self.shell.do_refresh("silent")


class DukeShell(Cmd):
    """Provides methods for interactive shell use. Anything that isn't
    a shell command is handed to the parser.

    Attributes:
        duke (obj):     an instance of Duke().

    """
    def __init__(
            self,
            duke,
            completekey='tab',
            stdin=None,
            stdout=None,
            watch=True):
        """Initializes a DukeShell() object."""
        super().__init__(completekey=completekey, stdin=stdin, stdout=stdout)
        self.duke = duke
        self.console = Console(file=self.stdout)

        # start watchdog for task file changes
        # and perform refresh() on changes
        self.observer = None
        if watch:
            self.observer = Observer()
            self.observer.schedule(
                    FSHandler(self),
                    self.duke.data_dir,
                    recursive=False)
            self.observer.daemon = True
            self.observer.start()

        self.doc_header = (
            "Commands (for more info type: help):"
        )
        self.ruler = "―"

        self._set_prompt()

        self.intro = (
            f"{APP_NAME} {APP_VERS}\n\n"
            f"Enter command (or 'help')\n"
        )

    # class method overrides
    def default(self, args):
        """Hand the line to the parser and print its response.

        Args:
            args (str): the command line.

        """
        if args.strip() in ['quit', 'bye']:
            return self.do_exit("")
        try:
            response = self.duke.execute(args)
        except StorageError as err:
            self.duke._handle_error(str(err))
        else:
            self.duke.print_response(response, self.console)
        return None

    def emptyline(self):
        """Ignore empty line entry."""

    def postloop(self):
        """Stop watching the data directory."""
        if self.observer:
            self.observer.stop()
            self.observer.join()

    def _set_prompt(self):
        """Set the prompt string."""
        if self.duke.color_bold:
            self.prompt = "\033[1mduke\033[0m> "
        else:
            self.prompt = "duke> "

    def do_help(self, args):
        """Show the command guide.

        Args:
            args (str): the command arguments, ignored.

        """
        self.default("help")

    @staticmethod
    def do_clear(args):
        """Clear the terminal.

        Args:
            args (str): the command arguments, ignored.

        """
        os.system("cls" if os.name == "nt" else "clear")

    def do_config(self, args):
        """Edit the config file and reload the configuration.

        Args:
            args (str): the command arguments, ignored.

        """
        self.duke.edit_config()
        self._set_prompt()

    @staticmethod
    def do_exit(args):
        """Exit the shell.

        Args:
            args (str): the command arguments, ignored.

        """
        return True

    def do_EOF(self, args):
        """Exit the shell at end of input (Ctrl-D).

        Args:
            args (str): the command arguments, ignored.

        """
        print("", file=self.stdout)
        return True

    def do_refresh(self, args):
        """Refresh task data from the task file.

        Args:
            args (str): 'silent' to suppress the notice.

        """
        self.duke.refresh()
        if args != 'silent':
            print("Data refreshed.", file=self.stdout)

    def do_table(self, args):
        """Show the tasks in a table.

        Args:
            args (str): '|' to page output.

        """
        self.duke.table(pager=args.strip() == '|', console=self.console)


def parse_args():
    """Parse command line arguments.

    Returns:
        args (dict):    the command line arguments provided.

    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description='Personal task tracking from the terminal.')
    parser._positionals.title = 'commands'
    parser.set_defaults(command=None)
    subparsers = parser.add_subparsers(
        metavar=f'(for more help: {APP_NAME} <command> -h)')
    config = subparsers.add_parser(
        'config',
        help='edit configuration file')
    config.set_defaults(command='config')
    run = subparsers.add_parser(
        'do',
        help='run a single command (todo, deadline, ...)')
    run.add_argument(
        'words',
        nargs=argparse.REMAINDER,
        metavar='<command>',
        help="e.g. 'todo Buy milk' or 'done 1'")
    run.set_defaults(command='do')
    listcmd = subparsers.add_parser(
        'list',
        aliases=['ls'],
        help='show tasks in a table')
    listcmd.add_argument(
        '-p',
        '--page',
        dest='page',
        action='store_true',
        help="page output")
    listcmd.set_defaults(command='list')
    shell = subparsers.add_parser(
        'shell',
        help='interactive shell')
    shell.set_defaults(command='shell')
    version = subparsers.add_parser(
        'version',
        help='show version info')
    version.set_defaults(command='version')
    parser.add_argument(
        '-c',
        '--config',
        dest='config',
        metavar='<file>',
        help='config file')
    args = parser.parse_args()
    return parser, args


def main():
    """Entry point. Parses arguments, creates Duke() object, calls
    requested method and parameters.

    """
    if os.environ.get("XDG_CONFIG_HOME"):
        config_file = os.path.join(
            os.path.expandvars(os.path.expanduser(
                os.environ["XDG_CONFIG_HOME"])), APP_NAME, "config")
    else:
        config_file = os.path.expandvars(
            os.path.expanduser(DEFAULT_CONFIG_FILE))

    if os.environ.get("XDG_DATA_HOME"):
        data_dir = os.path.join(
            os.path.expandvars(os.path.expanduser(
                os.environ["XDG_DATA_HOME"])), APP_NAME)
    else:
        data_dir = os.path.expandvars(
            os.path.expanduser(DEFAULT_DATA_DIR))

    parser, args = parse_args()

    if args.config:
        config_file = os.path.expandvars(
            os.path.expanduser(args.config))

    if not args.command:
        parser.print_help(sys.stderr)
        sys.exit(1)
    elif args.command == "version":
        print(f"{APP_NAME} {APP_VERS}")
        print(APP_LICENSE)
        return

    duke = Duke(
        config_file,
        data_dir,
        DEFAULT_CONFIG)

    if args.command == "config":
        duke.edit_config()
    elif args.command == "do":
        try:
            response = duke.execute(' '.join(args.words))
        except StorageError as err:
            duke._error_exit(str(err))
        duke.print_response(response)
        if not response.ok:
            sys.exit(1)
    elif args.command == "list":
        duke.table(pager=args.page)
    elif args.command == "shell":
        duke.interactive = True
        shell = DukeShell(duke)
        try:
            shell.cmdloop()
        except KeyboardInterrupt:
            shell.postloop()
            print("\nInterrupted.")
            sys.exit(1)
    else:
        sys.exit(1)


# entry point
if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)
