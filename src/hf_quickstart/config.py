"""
Configuration for the quickstart pipeline.

Defaults reproduce the starter script: read data/, embed with a small BGE
model, answer one query with no generation model configured.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

import yaml
from llama_index.core.response_synthesizers import ResponseMode

RESPONSE_MODES = {mode.value for mode in ResponseMode}


@dataclass
class QuickstartConfig:
    """All knobs for the quickstart in one place."""

    # ── Documents ────────────────────────────────────────────────────────
    data_dir: str = "data"
    required_exts: Optional[List[str]] = None  # e.g. [".txt", ".md"]
    recursive: bool = False

    # ── Embedding model (HuggingFace) ────────────────────────────────────
    embed_model_name: str = "BAAI/bge-small-en-v1.5"
    embed_device: Optional[str] = None  # None = let sentence-transformers pick
    embed_batch_size: int = 10

    # ── Generation model (optional, local GGUF via llama-cpp) ────────────
    gen_model_path: Optional[str] = None  # None = MockLLM, context is echoed
    gen_context_window: int = 4096
    gen_max_tokens: int = 256
    gen_temperature: float = 0.1
    n_gpu_layers: int = 0

    # ── Query engine ─────────────────────────────────────────────────────
    similarity_top_k: int = 2
    response_mode: str = "compact"
    query: str = "What is LlamaIndex?"

    # ── Diagnostics ──────────────────────────────────────────────────────
    log_queries: bool = False
    log_dir: str = "logs/quickstart"
    verbose: bool = False

    # ── Factory ──────────────────────────────────────────────────────────
    @classmethod
    def from_yaml(cls, path: os.PathLike) -> "QuickstartConfig":
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
        # Only keep keys that match our fields
        valid = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**valid)

    def __post_init__(self) -> None:
        if not self.embed_model_name:
            raise ValueError("embed_model_name must be a non-empty model id")
        if self.similarity_top_k < 1:
            raise ValueError(f"similarity_top_k must be >= 1, got {self.similarity_top_k}")
        if self.embed_batch_size < 1:
            raise ValueError(f"embed_batch_size must be >= 1, got {self.embed_batch_size}")
        if self.response_mode not in RESPONSE_MODES:
            raise ValueError(
                f"Unknown response_mode {self.response_mode!r}. "
                f"Choose one of: {', '.join(sorted(RESPONSE_MODES))}"
            )
        if isinstance(self.required_exts, str):
            self.required_exts = [self.required_exts]
        if self.required_exts is not None:
            # SimpleDirectoryReader matches suffixes with the leading dot
            self.required_exts = [
                ext if ext.startswith(".") else f".{ext}" for ext in self.required_exts
            ]
