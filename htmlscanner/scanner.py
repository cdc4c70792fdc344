from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .config import normalize_keywords
from .errors import ConfigurationError, FileAccessWarning
from .report import MatchIndex, ScanResult


logger = logging.getLogger(__name__)

HTML_EXTENSIONS = {".html", ".htm"}


def is_html_file(path: Path) -> bool:
    """True for regular files (symlinks followed) with an .html or .htm suffix.

    Missing or dangling entries are not HTML files. Any other ``stat`` failure,
    such as EACCES inside an unsearchable directory, is raised to the caller.
    """
    if path.suffix.lower() not in HTML_EXTENSIONS:
        return False
    try:
        st = os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    return stat.S_ISREG(st.st_mode)


def match_file(path: Path, keywords: Sequence[str]) -> List[str]:
    """Return the keywords (in the given order) contained in any line of ``path``.

    Comparison is case-insensitive substring containment, one line at a time.
    Raises ``OSError`` if the file cannot be opened or read.
    """
    pending = {k: k.lower() for k in keywords}
    found = set()

    with open(path, "r", encoding="utf-8", errors="replace") as fh:
        for line in fh:
            line = line.lower()
            for keyword, needle in list(pending.items()):
                if needle in line:
                    found.add(keyword)
                    del pending[keyword]
            if not pending:
                break

    return [k for k in keywords if k in found]


def scan_directory(root: str | Path, keywords: Iterable[str]) -> ScanResult:
    root_path = Path(root)
    if not str(root) or not root_path.is_dir():
        raise ConfigurationError(f"Not a valid directory: {root}")
    keywords = normalize_keywords(keywords)

    warnings: List[FileAccessWarning] = []
    matches: MatchIndex = {}
    files_scanned = 0

    for path in _walk_html_files(root_path, warnings):
        try:
            hits = match_file(path, keywords)
        except OSError as e:
            _warn(warnings, str(path), f"Could not read file: {e.strerror or e}")
            continue

        files_scanned += 1
        for keyword in hits:
            matches.setdefault(keyword, []).append(str(path))
            logger.info('Found "%s" in: %s', keyword, path)

    return ScanResult(
        root=str(root_path.absolute()),
        keywords=keywords,
        matches=matches,
        warnings=warnings,
        files_scanned=files_scanned,
    )


def _walk_html_files(root: Path, warnings: List[FileAccessWarning]) -> Iterator[Path]:
    def onerror(err: OSError) -> None:
        _warn(warnings, str(err.filename or root), f"Could not read directory: {err.strerror or err}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=onerror):
        dirnames.sort()
        for name in sorted(filenames):
            p = Path(dirpath) / name
            try:
                selected = is_html_file(p)
            except OSError as e:
                _warn(warnings, str(p), f"Could not stat file: {e.strerror or e}")
                continue
            if selected:
                yield p
            else:
                logger.debug("Skipping %s", p)


def _warn(warnings: List[FileAccessWarning], path: str, message: str) -> None:
    w = FileAccessWarning(path=path, message=message)
    warnings.append(w)
    logger.warning("%s", w)
