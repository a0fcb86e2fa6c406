"""The list of active jobs and punishments, and the actions taken on them."""

from __future__ import annotations

import configparser
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import (
    Callable,
    Iterable,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Union,
)

NO_DEADLINE = "No Deadline"
JOB = "Job"
PUNISHMENT = "Punishment"

IniData = Mapping[str, Mapping[str, str]]
Confirm = Callable[[str], bool]
LineWriter = Callable[[Sequence[str], int], bool]


class PunishmentSectionLike(Protocol):
    name: str
    is_line_writing: bool
    lines: Sequence[str]


class ScriptParserLike(Protocol):
    def get_punishment_sections(self) -> Iterable[PunishmentSectionLike]: ...


class MainApp(Protocol):
    """What the assignment list needs from the running application."""

    def get_active_jobs(self) -> Iterable[str]: ...
    def get_job_deadlines(self) -> Mapping[str, datetime]: ...
    def get_ini_data(self) -> IniData: ...
    def get_punishment_amount(self, name: str) -> int: ...
    def start_assignment(self, name: str, is_punishment: bool, new_status: str) -> None: ...
    def mark_assignment_done(self, name: str, is_punishment: bool) -> bool: ...
    def delete_assignment(self, name: str, is_punishment: bool) -> None: ...
    def is_flag_set(self, flag: str) -> bool: ...
    def remove_flag(self, flag: str) -> None: ...
    def update_status(self, status: str) -> None: ...
    def get_resources_in_use(self) -> Iterable[str]: ...
    def get_assignment_resources(self, name: str, is_punishment: bool) -> Iterable[str]: ...
    def has_active_blocking_punishment(self) -> bool: ...
    def get_script_parser(self) -> Optional[ScriptParserLike]: ...
    def get_settings_file_path(self) -> str: ...


class AssignmentError(Exception):
    """Raised when an action on an assignment cannot be carried out."""


@dataclass(frozen=True)
class AssignmentRow:
    """One line of the assignment list."""

    deadline: str
    name: str
    key: str
    kind: str

    @property
    def is_punishment(self) -> bool:
        return self.kind.lower() == "punishment"

    @property
    def assignment_name(self) -> str:
        return self.key or self.name

    @property
    def flag_prefix(self) -> str:
        return "punishment_" if self.is_punishment else "job_"

    @property
    def started_flag(self) -> str:
        return f"{self.flag_prefix}{self.assignment_name}_started"


def format_deadline(deadline: Optional[datetime]) -> str:
    """Format a deadline as ``MM-dd-yyyy h:mm AM/PM``, or say there is none."""
    if deadline is None:
        return NO_DEADLINE
    hour = deadline.hour % 12 or 12
    suffix = "AM" if deadline.hour < 12 else "PM"
    return f"{deadline:%m-%d-%Y} {hour}:{deadline.minute:02d} {suffix}"


def find_section(ini_data: IniData, section_name: str) -> Optional[str]:
    """The key of ``section_name`` in the script data, matched exactly or ignoring case."""
    if section_name in ini_data:
        return section_name
    wanted = section_name.lower()
    return next((key for key in ini_data if key.lower() == wanted), None)


def _display_punishment_name(name: str, amount: int) -> str:
    display = name.replace("#", str(amount))
    return display[:1].upper() + display[1:]


class Assignments:
    """The active jobs and punishments, and starting, finishing, aborting or deleting them."""

    def __init__(
        self,
        app: Optional[MainApp],
        settings_file: Optional[Union[str, Path]] = None,
    ) -> None:
        self.app = app
        if settings_file is None:
            if app is not None:
                settings_file = app.get_settings_file_path()
            else:
                settings_file = Path.home() / ".cyberdom" / "settings.ini"
        self.settings_file = Path(settings_file)
        self.rows: list[AssignmentRow] = []
        self.notes = ""
        self.populate_job_list()

    def populate_job_list(self) -> list[AssignmentRow]:
        """Rebuild the list: jobs first, then punishments."""
        self.rows = []
        if self.app is None:
            return self.rows

        jobs = sorted(self.app.get_active_jobs())
        deadlines = self.app.get_job_deadlines()
        ini_data = self.app.get_ini_data()

        for name in jobs:
            if f"punishment-{name}" in ini_data:
                continue
            self.rows.append(AssignmentRow(format_deadline(deadlines.get(name)), name, name, JOB))

        for name in jobs:
            if f"punishment-{name}" not in ini_data:
                continue
            amount = self.app.get_punishment_amount(name)
            self.rows.append(
                AssignmentRow(
                    format_deadline(deadlines.get(name)),
                    _display_punishment_name(name, amount),
                    name,
                    PUNISHMENT,
                )
            )
        return self.rows

    def _row(self, row: int, action: str) -> AssignmentRow:
        if not 0 <= row < len(self.rows):
            raise AssignmentError(f"Please select an assignment to {action}.")
        return self.rows[row]

    def _app(self) -> MainApp:
        if self.app is None:
            raise AssignmentError("Application reference lost.")
        return self.app

    def _details(self, app: MainApp, entry: AssignmentRow, missing: str) -> Mapping[str, str]:
        ini_data = app.get_ini_data()
        prefix = "punishment-" if entry.is_punishment else "job-"
        section = find_section(ini_data, prefix + entry.assignment_name)
        if section is None:
            raise AssignmentError(missing.format(entry.kind))
        return ini_data[section]

    def can_start(self, row: int) -> bool:
        """Whether the assignment in ``row`` may be started now."""
        if self.app is None or not 0 <= row < len(self.rows):
            return False
        entry = self.rows[row]
        if self.app.is_flag_set(entry.started_flag):
            return False
        used = set(self.app.get_resources_in_use())
        needed = self.app.get_assignment_resources(entry.assignment_name, entry.is_punishment)
        if any(resource in used for resource in needed):
            return False
        return not self.app.has_active_blocking_punishment()

    def start(self, row: int, line_writer: Optional[LineWriter] = None) -> str:
        """Start the assignment in ``row`` and return its instructions.

        For a line-writing punishment ``line_writer(lines, count)`` is called;
        when it returns true the punishment is marked done.
        """
        entry = self._row(row, "start")
        app = self._app()
        details = self._details(app, entry, "{} not found in the script.")
        instructions = details.get("Text", "No specific instructions available.")
        self.notes = instructions
        new_status = details.get("NewStatus", "")

        app.start_assignment(entry.assignment_name, entry.is_punishment, new_status)

        if entry.is_punishment and line_writer is not None:
            parser = app.get_script_parser()
            if parser is not None:
                wanted = entry.assignment_name.lower()
                for section in parser.get_punishment_sections():
                    if section.name.lower() == wanted and section.is_line_writing:
                        count = app.get_punishment_amount(entry.assignment_name)
                        if line_writer(list(section.lines), count):
                            app.mark_assignment_done(entry.assignment_name, True)
                        break

        self.populate_job_list()
        return instructions

    def mark_done(self, row: int, confirm: Optional[Confirm] = None) -> bool:
        """Mark the assignment in ``row`` done; false if declined or refused by the app."""
        entry = self._row(row, "mark as done")
        app = self._app()
        details = self._details(app, entry, "{} not found in the script.")
        kind = entry.kind.lower()
        if details.get("muststart") == "1" and not app.is_flag_set(entry.started_flag):
            raise AssignmentError(f"This {kind} must be started before it can be marked done.")
        if confirm is not None and not confirm(
            f"Are you sure you want to mark this {kind} as done?"
        ):
            return False
        completed = app.mark_assignment_done(entry.assignment_name, entry.is_punishment)
        self.populate_job_list()
        return bool(completed)

    def abort(self, row: int, confirm: Optional[Confirm] = None) -> bool:
        """Abort a started assignment, restoring the status it replaced."""
        entry = self._row(row, "abort")
        app = self._app()
        self._details(app, entry, "{} not found in the script.")
        kind = entry.kind.lower()
        if not app.is_flag_set(entry.started_flag):
            raise AssignmentError(f"This {kind} is not currently started.")
        if confirm is not None and not confirm(
            f"Are you sure you want to abort this {kind}?\n\n"
            "It will remain in your assignments list and you'll need to start over."
        ):
            return False

        app.remove_flag(entry.started_flag)

        status_key = f"{entry.flag_prefix}{entry.assignment_name}_prev_status"
        settings = configparser.ConfigParser(interpolation=None)
        settings.optionxform = str  # type: ignore[assignment]
        if self.settings_file.exists():
            settings.read(self.settings_file, encoding="utf-8")
        prev_status = settings.get("Assignments", status_key, fallback="")
        if prev_status:
            app.update_status(prev_status)
            settings.remove_option("Assignments", status_key)
            with self.settings_file.open("w", encoding="utf-8") as handle:
                settings.write(handle)

        self.populate_job_list()
        return True

    def delete(self, row: int, confirm: Optional[Confirm] = None) -> bool:
        """Delete the assignment in ``row`` unless its script forbids it."""
        entry = self._row(row, "delete")
        app = self._app()
        details = self._details(app, entry, "{} not found in script.")
        kind = entry.kind.lower()
        if details.get("DeleteAllowed") == "0":
            raise AssignmentError(f"This {kind} cannot be deleted.")
        if confirm is not None and not confirm(f"Are you sure you want to delete this {kind}?"):
            return False
        app.delete_assignment(entry.assignment_name, entry.is_punishment)
        self.populate_job_list()
        return True