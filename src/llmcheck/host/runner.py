"""File iteration: find checkable files and run the check over each one."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import pathspec

from llmcheck.check import LlmStyleCheck
from llmcheck.config import Settings, language_for_path
from llmcheck.constants import BINARY_DETECTION_BUFFER, Severity
from llmcheck.host.reporter import Diagnostic, DiagnosticReporter
from llmcheck.host.tree import parse_source

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    diagnostics: list[Diagnostic] = field(default_factory=list)
    files_checked: int = 0
    files_skipped: int = 0

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.ERROR)


def is_binary(path: Path) -> bool:
    """Return True if the file appears to be binary (null byte in first N bytes)."""
    try:
        with open(path, "rb") as f:
            chunk = f.read(BINARY_DETECTION_BUFFER)
        return b"\x00" in chunk
    except OSError:
        return True


def collect_files(
    paths: Iterable[Path],
    settings: Settings | None = None,
) -> list[Path]:
    """Expand the given paths into checkable source files.

    * Files named explicitly are kept whatever their suffix.
    * Directories are walked, skipping hidden directories, those in
      ``settings.skip_directories`` and anything the directory's
      ``.gitignore`` excludes; only suffixes with a known language are
      kept.
    """
    cfg = settings or Settings()
    skip_dirs = set(cfg.skip_directories)
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            spec = _load_gitignore(path)
            files.extend(
                f
                for f in _walk_files(path, path, skip_dirs, spec)
                if language_for_path(f) is not None
            )
        elif path.is_file():
            files.append(path)
        else:
            logger.warning("event=path_not_found path=%s", path)
    return files


def _walk_files(
    current: Path,
    root: Path,
    skip_dirs: set[str],
    gitignore_spec: pathspec.PathSpec,
) -> list[Path]:
    """Recursive walk; symlinks resolving outside ``root`` are skipped."""
    resolved_root = root.resolve()
    files: list[Path] = []
    for item in sorted(current.iterdir()):
        if item.is_symlink() and not item.resolve().is_relative_to(resolved_root):
            continue
        rel = str(item.relative_to(root))
        if item.is_dir():
            if item.name.startswith(".") or item.name in skip_dirs:
                continue
            if gitignore_spec.match_file(rel + "/"):
                continue
            files.extend(_walk_files(item, root, skip_dirs, gitignore_spec))
        elif item.is_file() and not gitignore_spec.match_file(rel):
            files.append(item)
    return files


def _load_gitignore(root: Path) -> pathspec.PathSpec:
    """Load .gitignore patterns using pathspec."""
    gitignore = root / ".gitignore"
    try:
        with open(gitignore, encoding="utf-8") as f:
            return pathspec.PathSpec.from_lines("gitignore", f)
    except OSError:
        return pathspec.PathSpec.from_lines("gitignore", [])


def run_checks(files: Iterable[Path], check: LlmStyleCheck) -> RunResult:
    """Check each file in turn; unreadable files are logged and skipped.

    A file whose tree cannot be built is still checked, without a tree.
    """
    result = RunResult()
    for path in files:
        if is_binary(path):
            logger.info("event=file_skipped reason=binary path=%s", path)
            result.files_skipped += 1
            continue
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("event=file_unreadable path=%s error=%s", path, exc)
            result.files_skipped += 1
            continue

        language = language_for_path(path)
        try:
            root = parse_source(source, language) if language else None
        except Exception:  # noqa: BLE001
            logger.exception("event=parse_failed path=%s", path)
            root = None
        reporter = DiagnosticReporter(str(path))
        check.check_file(str(path), source, root, reporter)
        result.diagnostics.extend(reporter.diagnostics)
        result.files_checked += 1
    return result
