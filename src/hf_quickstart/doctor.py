"""
Troubleshooting helpers.

When indexing fails the usual fixes are to check that data/ holds readable
text files and to wipe the LlamaIndex cache directory. These helpers do both.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import platformdirs

from .indexer import make_reader


@dataclass
class FileEntry:
    path: Path
    size_bytes: int

    @property
    def is_empty(self) -> bool:
        return self.size_bytes == 0


@dataclass
class DataDirReport:
    data_dir: Path
    exists: bool
    files: List[FileEntry] = field(default_factory=list)

    @property
    def empty_files(self) -> List[FileEntry]:
        return [f for f in self.files if f.is_empty]

    @property
    def ok(self) -> bool:
        """True when at least one non-empty file is present."""
        return self.exists and any(not f.is_empty for f in self.files)

    def problems(self) -> List[str]:
        if not self.exists:
            return [f"{self.data_dir}/ does not exist"]
        if not self.files:
            return [f"{self.data_dir}/ contains no files"]
        issues = [f"{f.path} is empty" for f in self.empty_files]
        if not self.ok:
            issues.append(f"{self.data_dir}/ has no file with text")
        return issues


def inspect_data_dir(
    data_dir: str,
    required_exts: Optional[List[str]] = None,
    recursive: bool = False,
) -> DataDirReport:
    """List the files SimpleDirectoryReader would see in data_dir."""
    path = Path(data_dir)
    if not path.is_dir():
        return DataDirReport(data_dir=path, exists=False)

    try:
        reader = make_reader(data_dir, required_exts, recursive)
    except FileNotFoundError:
        return DataDirReport(data_dir=path, exists=True)

    files = [
        FileEntry(path=Path(p), size_bytes=Path(p).stat().st_size)
        for p in sorted(reader.input_files)
    ]
    return DataDirReport(data_dir=path, exists=True, files=files)


def cache_dir() -> Path:
    """
    LlamaIndex cache location (honours LLAMA_INDEX_CACHE_DIR).

    Same lookup as llama_index.core.utils.get_cache_dir, without creating
    the directory.
    """
    if os.environ.get("LLAMA_INDEX_CACHE_DIR"):
        return Path(os.environ["LLAMA_INDEX_CACHE_DIR"])
    return Path(platformdirs.user_cache_dir("llama_index"))


def clear_cache(path: Optional[Path] = None) -> bool:
    """Remove the cache directory. Returns True if anything was deleted."""
    target = Path(path) if path is not None else cache_dir()
    if not target.exists():
        return False
    shutil.rmtree(target)
    return True


def print_report(report: DataDirReport, cache: Path) -> None:
    sep = "-" * 60
    print(sep)
    print(f"  Data dir : {report.data_dir}")
    print(f"  Cache dir: {cache}" + ("" if cache.exists() else "  (absent)"))
    print(sep)
    for entry in report.files:
        flag = "  (empty)" if entry.is_empty else ""
        print(f"  {entry.size_bytes:>10,d} B  {entry.path.name}{flag}")
    problems = report.problems()
    if problems:
        print("\nProblems:")
        for p in problems:
            print(f"  - {p}")
    else:
        print("\nData directory looks good.")
    print(sep)
