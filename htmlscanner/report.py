from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from pathlib import Path
import stat
import tempfile
from typing import Any, Dict, List

from .errors import FileAccessWarning, OutputWriteError


MatchIndex = Dict[str, List[str]]

_RULE = "=" * 50


@dataclass
class ScanResult:
    root: str
    keywords: List[str]
    matches: MatchIndex = field(default_factory=dict)
    warnings: List[FileAccessWarning] = field(default_factory=list)
    files_scanned: int = 0

    @property
    def has_matches(self) -> bool:
        return any(self.matches.values())

    def sorted_matches(self) -> List[tuple[str, List[str]]]:
        return [(k, self.matches[k]) for k in sorted(self.matches) if self.matches[k]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "keywords": list(self.keywords),
            "files_scanned": self.files_scanned,
            "matches": {k: list(files) for k, files in self.sorted_matches()},
            "warnings": [{"path": w.path, "message": w.message} for w in self.warnings],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def to_text(self) -> str:
        lines = [f"Scan results for directory: {self.root}"]

        sections = self.sorted_matches()
        if not sections:
            lines.append("")
            lines.append("No files were found containing the specified keywords.")
        for keyword, files in sections:
            lines.append("")
            lines.append(_RULE)
            lines.append(f'Files containing keyword: "{keyword}"')
            lines.append(_RULE)
            lines.extend(files)

        return "\n".join(lines) + "\n"

    def render(self, fmt: str = "text") -> str:
        if fmt == "text":
            return self.to_text()
        if fmt == "json":
            return self.to_json()
        raise ValueError(f"Unknown report format: {fmt}")

    def write(self, out_path: Path, fmt: str = "text") -> Path:
        """Write the report to ``out_path``, replacing any existing file.

        The content is staged in a temporary file next to the destination and
        moved into place, so a failed write leaves the destination untouched.
        """
        content = self.render(fmt)
        out_path = Path(out_path)

        tmp_name = None
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(out_path.parent),
                prefix=f".{out_path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                fh.write(content)
            os.chmod(tmp_name, _target_mode(out_path))
            os.replace(tmp_name, out_path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise OutputWriteError(f"Could not write report to {out_path}: {e}") from e

        return out_path


def _target_mode(out_path: Path) -> int:
    # Keep an existing report's permissions, otherwise what open() would create.
    try:
        return stat.S_IMODE(os.stat(out_path).st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
