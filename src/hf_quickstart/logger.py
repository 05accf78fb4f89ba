"""
JSON query logger.

Writes one pretty-printed .json file per session to logs/quickstart/run_<timestamp>.json;
the timestamp carries microseconds so back-to-back sessions never share a file.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from .config import QuickstartConfig


class QueryLogger:
    """Pretty-printed JSON logger for query diagnostics."""

    def __init__(self, cfg: QuickstartConfig) -> None:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        log_dir = Path(cfg.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        self._path = log_dir / f"run_{ts}.json"
        self._data: dict[str, Any] = {
            "session_start": ts,
            "config": {
                "data_dir": cfg.data_dir,
                "embed_model": cfg.embed_model_name,
                "gen_model": cfg.gen_model_path,
                "similarity_top_k": cfg.similarity_top_k,
                "response_mode": cfg.response_mode,
            },
            "queries": [],
        }
        self._flush(mode="x")  # never clobber another session

    @property
    def path(self) -> Path:
        return self._path

    def log_query(
        self,
        question: str,
        answer: str,
        sources: list[dict[str, Any]],
        query_time_s: float,
    ) -> None:
        """Log a single query with its source chunks and timing."""
        self._data["queries"].append({
            "timestamp": datetime.now().isoformat(),
            "question": question,
            "answer": answer,
            "num_sources": len(sources),
            "sources": sources,
            "query_time_s": round(query_time_s, 3),
        })
        self._flush()

    def _flush(self, mode: str = "w") -> None:
        with open(self._path, mode, encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)
