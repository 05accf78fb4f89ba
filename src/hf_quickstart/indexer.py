"""
Document loading and index construction.

Pipeline:
  1. Load every supported file under data/ with SimpleDirectoryReader
  2. Drop documents with no text
  3. Build an in-memory VectorStoreIndex with Settings.embed_model

Nothing is persisted; the index lives for the duration of the process.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import List, Optional

from llama_index.core import Document, SimpleDirectoryReader, VectorStoreIndex

from .config import QuickstartConfig


def make_reader(
    data_dir: str,
    required_exts: Optional[List[str]] = None,
    recursive: bool = False,
) -> SimpleDirectoryReader:
    """
    Build the directory reader for data_dir.

    Raises FileNotFoundError when the directory is missing or the reader
    selects no files (hidden files and unmatched extensions are skipped).
    """
    data_path = Path(data_dir)
    if not data_path.is_dir():
        raise FileNotFoundError(
            f"Data directory {data_dir}/ does not exist. "
            "Create it and add at least one text file."
        )
    try:
        return SimpleDirectoryReader(
            input_dir=str(data_path),
            required_exts=required_exts,
            recursive=recursive,
        )
    except ValueError as e:
        # SimpleDirectoryReader raises ValueError("No files found in ...")
        raise FileNotFoundError(
            f"No files found in {data_dir}/. Add at least one text file."
        ) from e


def load_documents(cfg: QuickstartConfig) -> list[Document]:
    """Load all readable documents from cfg.data_dir."""
    reader = make_reader(cfg.data_dir, cfg.required_exts, cfg.recursive)
    documents = reader.load_data(show_progress=cfg.verbose)

    non_empty = [doc for doc in documents if doc.text.strip()]
    if cfg.verbose:
        skipped = len(documents) - len(non_empty)
        print(f"Loaded {len(non_empty)} document(s) from {cfg.data_dir}/"
              + (f" (skipped {skipped} empty)" if skipped else ""))
    if not non_empty:
        raise ValueError(
            f"Every file in {cfg.data_dir}/ is empty. "
            "The index needs at least one file with text."
        )
    return non_empty


def build_index(documents: list[Document], show_progress: bool = False) -> VectorStoreIndex:
    """Embed documents with Settings.embed_model and build the vector index."""
    t0 = time.time()
    index = VectorStoreIndex.from_documents(documents, show_progress=show_progress)
    if show_progress:
        print(f"Index built in {time.time() - t0:.1f}s")
    return index
