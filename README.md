# cyberdom

A library of the core logic behind scripted session games that are driven by
INI scripts. It evaluates script conditions, keeps clothing items and the forms
that build them, and tracks jobs and punishments as a list of assignments. It
uses only the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Script conditions: `cyberdom.scriptutils`

`evaluate_condition(expr, string_vars, counters, time_vars)` evaluates one
condition and returns a `bool`. The function looks for the operators in this
order: `==`, `<=`, `>=`, `<>`, `<`, `>`, `=`, `[[`, `[`. It splits the
expression at the first one it finds. If there is no operator, or either side
is empty, the result is `False`.

- **Counters.** If either side starts with `#`, both sides are compared as
  integers. A `#name` is looked up in `counters`, and is 0 when missing.
  Anything else is parsed as an integer, and is 0 when it cannot be parsed.
  The operators `=`, `<>`, `<`, `<=`, `>` and `>=` apply.
- **Times.** If the left side starts with `!`, both sides are compared as
  times. A `!name` is looked up in `time_vars`. Anything else is parsed as an
  ISO date-time. A missing or unreadable time orders before every valid time.
  The same six operators apply.
- **Strings.** In every other case, a `$name` is looked up in `string_vars`
  and is `""` when missing. Anything else is taken literally.
  - `=` compares ignoring case.
  - `==` compares exactly.
  - `<>` tests for inequality, ignoring case.
  - `[` tests whether the left side contains the right, ignoring case.
  - `[[` does the same test with case counting.

```python
from cyberdom.scriptutils import evaluate_condition

evaluate_condition("#merits >= 50", {}, {"#merits": 60}, {})      # True
evaluate_condition("$name = ALICE", {"$name": "alice"}, {}, {})   # True
evaluate_condition("$text [ Word", {"$text": "a word here"}, {}, {})  # True
```

`random_in_range(minimum, maximum, center_random)` returns a random integer
between `minimum` and `maximum`, both included. When `center_random` is true,
it returns the mean of two draws, rounded toward zero, which favours the middle
of the range. It raises `ValueError` when `minimum > maximum`.

## Clothing: `cyberdom.clothing`

`ClothingItem(name="", type="", attributes={})` is a dataclass.

- `add_attribute(name, value)` sets an attribute.
- `get_attribute(name)` returns the attribute's value, or `""`.
- `to_string()` serialises the item to compact JSON with sorted keys.
- `ClothingItem.from_string(text)` reads that JSON back. Text it cannot read
  gives empty fields.

`ClothingAttribute(name, values=[])` describes one attribute of a clothing
type. A non-empty `values` list restricts the attribute to those choices.

`ClothingForm(clothing_type, attributes=None, existing=None)` holds the fields
for adding a new item, or for editing `existing`.

- Without `attributes` it offers `Colour`, `Style` and `Description`.
- `is_edit`, `initial_name` and `initial_values()` give its starting state.
- `submit(name, values=None)` builds the `ClothingItem`:
  - Names and values are trimmed, and empty values are left out.
  - A blank name raises `MissingNameError`.
  - An unknown attribute name raises `ValueError`.
  - A value that is not one of an attribute's choices also raises `ValueError`.

`validate_cloth_type(name)` returns a trimmed clothing type name. It raises
`MissingNameError` when the name is blank.

## Dialog helpers: `cyberdom.dialogs`

- `ScriptInfo.from_ini(ini_path, version="Unknown")` returns the script's
  `path`, its file name as `script_name`, and its `version`. The version comes
  from `Version` in the `[General]` section, or falls back to `version`.
- `clothing_labels(instructions)` returns the title, or else the name, of each
  instruction object whose `is_clothing` is true.
- `MeritRange(minimum=0, maximum=100)` is the range for setting merits by
  hand. `clamp(value)` keeps a value inside it.
- `PunishmentRange(minimum=25, maximum=75)` is the severity range offered when
  asking for a punishment.
- `initial_status_index(current, available)` returns the index of `current` in
  `available`. It returns 0 when `current` is not there, and `None` when the
  list is empty.

## Assignments: `cyberdom.assignments`

`Assignments(app, settings_file=None)` keeps the list of active assignments as
`AssignmentRow`s in `rows`. Each row has `deadline`, `name`, `key` and `kind`,
where `kind` is `JOB` or `PUNISHMENT`.

- `app` is any object that provides the methods of the `MainApp` protocol.
- If `settings_file` is not given, it is taken from
  `app.get_settings_file_path()`. With no app, it is
  `~/.cyberdom/settings.ini`.
- `populate_job_list()` rebuilds the rows. Jobs come first, then punishments,
  each in name order.
  - A punishment's displayed name has `#` replaced by its amount and its
    first letter in upper case.
  - Deadlines are shown with `format_deadline()`.
- `can_start(row)` tells whether the row may be started. It may not when the
  assignment is already started, when a resource it needs is in use, or when a
  blocking punishment is active.
- `start(row, line_writer=None)` starts the assignment and returns its
  instructions, which are also kept in `notes`. For a line-writing punishment,
  it calls `line_writer(lines, count)`. If that returns true, the punishment is
  marked done.
- `mark_done(row, confirm=None)` marks the assignment done. It refuses an
  assignment with `muststart=1` that has not been started.
- `abort(row, confirm=None)` aborts a started assignment. It restores the
  previous status saved under `[Assignments]` in the settings file.
- `delete(row, confirm=None)` deletes the assignment unless its section has
  `DeleteAllowed=0`.

If `confirm` is given, it is called with a question. When it returns false,
the action is not taken and the method returns `False`. Failures raise
`AssignmentError`. Examples are a bad row index, a missing app, a section
missing from the script, or an action that is not allowed.

Two helper functions go with the list:

- `format_deadline(deadline)` renders a deadline as `MM-dd-yyyy h:mm AM/PM`,
  or `No Deadline` when it is `None`.
- `find_section(ini_data, section_name)` finds a script section. It tries an
  exact match first, then one that ignores case.

## What this package does not do

This package has no windows and no command to run. It does not load or parse
scripts, keep session state, flags, deadlines or merits, or save any of these
itself. `Assignments` works against an application object that you supply,
which must provide all of that through the `MainApp` methods.