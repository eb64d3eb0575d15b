"""Data model for IntelliJ inspection reports.

Contains frozen dataclasses mirroring one XML report file:
    - Report        list of problems, in document order
    - Problem       one finding
    - EntryPoint    symbol or module the finding is attached to
    - ProblemClass  inspection severity and display text
    - Hint
"""

from dataclasses import dataclass

# Prefix IntelliJ puts in front of project files; stripped for display
FILE_NAME_PREFIX = "file://$PROJECT_DIR$/"


@dataclass(frozen=True)
class EntryPoint:
    type: str
    fully_qualified_name: str


@dataclass(frozen=True)
class ProblemClass:
    severity: str
    attribute_key: str
    display_text: str = ""


@dataclass(frozen=True)
class Hint:
    value: str


@dataclass(frozen=True)
class Problem:
    file: str
    package_name: str
    entry_point: EntryPoint
    problem_class: ProblemClass
    description: str
    line: int | None = None
    module: str | None = None
    # None when the report has no hints; never an empty tuple
    hints: tuple[Hint, ...] | None = None

    @property
    def severity(self) -> str:
        return self.problem_class.severity

    @property
    def location(self) -> str:
        """``<relative file>:<line>`` for file findings, the entry point name otherwise."""
        if self.line is None:
            return self.entry_point.fully_qualified_name
        return f"{self.file[len(FILE_NAME_PREFIX):]}:{self.line}"

    def summary(self) -> str:
        return f"[{self.severity}] {self.location} -- {self.description}"


@dataclass(frozen=True)
class Report:
    problems: tuple[Problem, ...] = ()

    def summary(self, severities) -> list[str]:
        """One line per problem whose severity is in *severities*, in document order."""
        return [p.summary() for p in self.problems if p.severity in severities]
