"""Find the XML reports IntelliJ wrote to an output directory.

Functions:
    iter_report_files(output_dir)    -> Iterator[Path]
"""

from pathlib import Path
from typing import Iterator

REPORT_SUFFIX = ".xml"


def iter_report_files(output_dir: str | Path) -> Iterator[Path]:
    """Yield the visible ``.xml`` files directly inside *output_dir*.

    Subdirectories are not descended into. The result is a one-shot snapshot
    in filesystem order (not sorted); call again for a fresh listing. A
    missing directory yields nothing.
    """
    root = Path(output_dir)
    if not root.is_dir():
        return
    for path in root.iterdir():
        if path.name.startswith("."):
            continue
        if path.suffix == REPORT_SUFFIX and path.is_file():
            yield path
