"""Parse IntelliJ inspection XML reports into the models in ``models.py``.

Usage:
    report = parse_report(path.read_text(encoding="utf-8"))

Report layout (one file per inspection)::

    <problems>
      <problem>
        <file>file://$PROJECT_DIR$/src/Main.java</file>
        <line>3</line>
        <module>app</module>
        <package>org.company</package>
        <entry_point TYPE="class" FQNAME="org.company.Main" />
        <problem_class severity="WARNING" attribute_key="WARNING_ATTRIBUTES">Text</problem_class>
        <hints><hint value="packageLocal" /></hints>
        <description>Can be package-private</description>
      </problem>
    </problems>

Elements and attributes not listed in the field tables below are ignored, so
newer IntelliJ versions adding fields do not break parsing.
"""

import xml.etree.ElementTree as ET
from typing import Any, Callable, NamedTuple

from intellij_inspect.models import EntryPoint, Hint, Problem, ProblemClass, Report


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ReportParseError(Exception):
    """Raised when a report is not well-formed XML or does not match the schema."""


# ---------------------------------------------------------------------------
# Field tables
# ---------------------------------------------------------------------------

class Field(NamedTuple):
    name: str                   # XML element or attribute name
    dest: str                   # dataclass field
    required: bool = True
    attribute: bool = False     # read from an attribute instead of a child element
    convert: Callable[[ET.Element], Any] | None = None


def _text(elem: ET.Element) -> str:
    return elem.text or ""


def _line(elem: ET.Element) -> int:
    try:
        line = int(_text(elem))
    except ValueError:
        raise ReportParseError(f"<line> is not an integer: {elem.text!r}") from None
    if line < 1:
        raise ReportParseError(f"<line> must be positive: {line}")
    return line


def _entry_point(elem: ET.Element) -> EntryPoint:
    return EntryPoint(**_decode(elem, _ENTRY_POINT_FIELDS))


def _problem_class(elem: ET.Element) -> ProblemClass:
    return ProblemClass(display_text=_text(elem), **_decode(elem, _PROBLEM_CLASS_FIELDS))


def _hints(elem: ET.Element) -> tuple[Hint, ...] | None:
    hints = tuple(Hint(**_decode(h, _HINT_FIELDS)) for h in elem.findall("hint"))
    # An empty <hints/> wrapper means "no hints"
    return hints or None


_ENTRY_POINT_FIELDS = (
    Field("TYPE",   "type",                 attribute=True),
    Field("FQNAME", "fully_qualified_name", attribute=True),
)

_PROBLEM_CLASS_FIELDS = (
    Field("severity",      "severity",      attribute=True),
    Field("attribute_key", "attribute_key", attribute=True),
)

_HINT_FIELDS = (
    Field("value", "value", attribute=True),
)

_PROBLEM_FIELDS = (
    Field("file",          "file"),
    Field("line",          "line",          required=False, convert=_line),
    Field("module",        "module",        required=False),
    Field("package",       "package_name"),
    Field("entry_point",   "entry_point",   convert=_entry_point),
    Field("problem_class", "problem_class", convert=_problem_class),
    Field("hints",         "hints",         required=False, convert=_hints),
    Field("description",   "description"),
)


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------

def _decode(elem: ET.Element, fields: tuple[Field, ...]) -> dict[str, Any]:
    """Collect the mapped fields of *elem* into constructor keyword arguments.

    Optional fields that are absent are left out so the dataclass default applies.
    """
    values: dict[str, Any] = {}
    for field in fields:
        if field.attribute:
            raw = elem.get(field.name)
            if raw is None:
                if field.required:
                    raise ReportParseError(f"<{elem.tag}> is missing attribute '{field.name}'")
                continue
            values[field.dest] = raw
            continue

        child = elem.find(field.name)
        if child is None:
            if field.required:
                raise ReportParseError(f"<{elem.tag}> is missing element <{field.name}>")
            continue
        values[field.dest] = field.convert(child) if field.convert else _text(child)
    return values


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_report(xml: str) -> Report:
    """Parse one report document.

    The root element name is not checked; every ``<problem>`` child becomes a
    Problem, in document order.

    Raises:
        ReportParseError: the document is malformed or a required field is missing.
    """
    try:
        root = ET.fromstring(xml)
    except ET.ParseError as exc:
        raise ReportParseError(f"Malformed report XML: {exc}") from exc

    problems = tuple(Problem(**_decode(p, _PROBLEM_FIELDS)) for p in root.findall("problem"))
    return Report(problems=problems)
