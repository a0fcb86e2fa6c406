from dataclasses import dataclass

from cyberdom.dialogs import (
    MeritRange,
    PunishmentRange,
    ScriptInfo,
    clothing_labels,
    initial_status_index,
)


@dataclass
class Instruction:
    name: str
    title: str = ""
    is_clothing: bool = False


def test_script_info_reads_version(tmp_path):
    path = tmp_path / "script.ini"
    path.write_text("[General]\nMinVersion=1\nVersion=2.5\n[job-feedfish]\nVersion=9\n")
    info = ScriptInfo.from_ini(path)
    assert info.version == "2.5"
    assert info.script_name == "script.ini"
    assert info.path == str(path)


def test_script_info_falls_back_to_given_version(tmp_path):
    path = tmp_path / "script.ini"
    path.write_text("[General]\nMinVersion=1\n")
    assert ScriptInfo.from_ini(path).version == "Unknown"
    assert ScriptInfo.from_ini(path, "1.0").version == "1.0"


def test_script_info_missing_file(tmp_path):
    info = ScriptInfo.from_ini(tmp_path / "absent.ini", "3")
    assert info.version == "3"
    assert info.script_name == "absent.ini"


def test_clothing_labels_prefer_title_and_skip_others():
    instructions = [
        Instruction("dress", "Dress code", True),
        Instruction("shoes", "", True),
        Instruction("homework", "Homework", False),
        Instruction("", "", True),
    ]
    assert clothing_labels(instructions) == ["Dress code", "shoes"]


def test_merit_range_clamps():
    merits = MeritRange(-10, 50)
    assert merits.clamp(-100) == -10
    assert merits.clamp(60) == 50
    assert merits.clamp(20) == 20


def test_merit_range_inverted_collapses_to_maximum():
    merits = MeritRange(80, 40)
    assert merits.minimum == merits.maximum == 40


def test_punishment_range_defaults():
    assert (PunishmentRange().minimum, PunishmentRange().maximum) == (25, 75)


def test_initial_status_index():
    statuses = ["Normal", "Punished", "Away"]
    assert initial_status_index("Punished", statuses) == 1
    assert initial_status_index("punished", statuses) == 0
    assert initial_status_index("Normal", []) is None