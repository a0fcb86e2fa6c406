"""Small pieces of logic behind the simple dialogs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union


def _read_ini_value(path: Path, section: str, key: str) -> Optional[str]:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    current = "General"
    found: Optional[str] = None
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith((";", "#")):
            continue
        if line.startswith("[") and line.endswith("]"):
            current = line[1:-1].strip()
            continue
        if "=" not in line:
            continue
        name, _, value = line.partition("=")
        if current == section and name.strip() == key:
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] == '"':
                value = value[1:-1]
            found = value
    return found


@dataclass
class ScriptInfo:
    """The location, file name and version of a loaded script."""

    path: str
    script_name: str
    version: str

    @classmethod
    def from_ini(cls, ini_path: Union[str, Path], version: str = "Unknown") -> "ScriptInfo":
        """Read the version from the script's [General] section, falling back to ``version``."""
        path = Path(ini_path)
        read = _read_ini_value(path, "General", "Version")
        return cls(str(ini_path), path.name, read if read is not None else version)


def clothing_labels(instructions: Iterable[object]) -> list[str]:
    """Labels of the clothing instruction sections: title, else name."""
    labels = []
    for instr in instructions:
        if not getattr(instr, "is_clothing", False):
            continue
        label = getattr(instr, "title", "") or getattr(instr, "name", "")
        if label:
            labels.append(label)
    return labels


@dataclass
class MeritRange:
    """The allowed range when setting merits by hand."""

    minimum: int = 0
    maximum: int = 100

    def __post_init__(self) -> None:
        if self.maximum < self.minimum:
            self.minimum = self.maximum

    def clamp(self, value: int) -> int:
        return max(self.minimum, min(self.maximum, value))


@dataclass
class PunishmentRange:
    """The severity range offered when asking for a punishment."""

    minimum: int = 25
    maximum: int = 75


def initial_status_index(current: str, available: Sequence[str]) -> Optional[int]:
    """Index of the status selected when the status list opens, or None if empty."""
    if not available:
        return None
    try:
        return list(available).index(current)
    except ValueError:
        return 0