"""Discovery of the files to embed from command-line inputs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .errors import InputNotFoundError
from .logging import get_logger
from .models import InputFile

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "__pycache__",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}

_LOGGER = get_logger("discovery")


@dataclass
class ExcludeRule:
    """Glob rule from ``exclude_paths``, matched against paths below an input directory."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            if self.directory_only and rel_path.startswith(f"{self.pattern}/"):
                return True
            return False

        for part in rel_path.split("/"):
            if fnmatchcase(part, self.pattern):
                return True
        return False


def build_exclude_rule(pattern: str) -> ExcludeRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return ExcludeRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def _build_rules(patterns: Iterable[str]) -> List[ExcludeRule]:
    rules: List[ExcludeRule] = []
    for pattern in patterns:
        rule = build_exclude_rule(pattern)
        if rule is not None:
            rules.append(rule)
    return rules


def _is_excluded(rel_path: str, is_dir: bool, rules: Sequence[ExcludeRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


def _iter_directory(root: Path, rules: Sequence[ExcludeRule]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept_dirs = []
        for name in sorted(dirnames):
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _is_excluded(rel_path, True, rules):
                continue
            kept_dirs.append(name)
        # os.walk descends in the order left in dirnames.
        dirnames[:] = kept_dirs

        for filename in sorted(filenames):
            if filename in _EXCLUDED_FILES:
                continue
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _is_excluded(rel_path, False, rules):
                continue
            path = current_dir / filename
            if path.is_file():
                yield path


def discover_inputs(
    inputs: Iterable[str | Path],
    *,
    exclude_paths: Sequence[str] = (),
) -> List[InputFile]:
    """Return the files named by ``inputs`` in command-line order.

    Directories are walked recursively in sorted order. Exclude rules apply
    to files found inside directories; explicitly named files are always kept.
    """
    rules = _build_rules(exclude_paths)
    files: List[InputFile] = []
    for raw in inputs:
        path = Path(raw).expanduser()
        if path.is_dir():
            found = [InputFile.from_path(item) for item in _iter_directory(path, rules)]
            _LOGGER.debug("Found %d file(s) under %s", len(found), path.as_posix())
            files.extend(found)
        elif path.is_file():
            files.append(InputFile.from_path(path))
        else:
            raise InputNotFoundError(f"can't find file or directory '{raw}'")
    return files


__all__ = ["ExcludeRule", "build_exclude_rule", "discover_inputs"]
