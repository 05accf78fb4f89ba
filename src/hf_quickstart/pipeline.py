"""
Quickstart pipeline: load documents, build the index, answer a query.

Usage:
    from src.hf_quickstart.pipeline import QuickstartPipeline

    pipe = QuickstartPipeline()       # default config, data/ folder
    pipe.index()
    print(pipe.query("What is LlamaIndex?"))
"""

from __future__ import annotations

import time
from typing import Any, Optional

from llama_index.core import Settings, VectorStoreIndex
from llama_index.core.base.response.schema import Response
from llama_index.core.base.base_query_engine import BaseQueryEngine

from .config import QuickstartConfig
from .indexer import build_index, load_documents
from .logger import QueryLogger
from .models import build_embed_model, build_llm


class QuickstartPipeline:
    """The starter script as an object: models, index and query engine."""

    def __init__(
        self,
        config: Optional[QuickstartConfig] = None,
        config_path: Optional[str] = None,
    ) -> None:
        if config is not None:
            self.cfg = config
        elif config_path is not None:
            self.cfg = QuickstartConfig.from_yaml(config_path)
        else:
            self.cfg = QuickstartConfig()

        # Models are built first so a bad embedding model fails before any
        # document is read or query attempted.
        self._embed_model = build_embed_model(self.cfg)
        self._llm = build_llm(self.cfg)
        Settings.embed_model = self._embed_model
        Settings.llm = self._llm

        self._index: Optional[VectorStoreIndex] = None
        self._query_engine: Optional[BaseQueryEngine] = None
        self._logger = QueryLogger(self.cfg) if self.cfg.log_queries else None

    @property
    def logger(self) -> Optional[QueryLogger]:
        return self._logger

    # ── Index management ────────────────────────────────────────────────

    def index(self) -> VectorStoreIndex:
        """Load documents and build a fresh in-memory index."""
        documents = load_documents(self.cfg)
        self._index = build_index(documents, show_progress=self.cfg.verbose)
        self._query_engine = None  # invalidate cached engine
        return self._index

    # ── Query engine construction ───────────────────────────────────────

    def _get_query_engine(self) -> BaseQueryEngine:
        if self._query_engine is not None:
            return self._query_engine

        if self._index is None:
            raise RuntimeError("No index built. Call pipeline.index() first.")

        self._query_engine = self._index.as_query_engine(
            similarity_top_k=self.cfg.similarity_top_k,
            response_mode=self.cfg.response_mode,
        )
        return self._query_engine

    # ── Querying ────────────────────────────────────────────────────────

    def query(self, question: Optional[str] = None) -> Response:
        """
        Answer one question against the index.

        With no generation model the response text is the retrieved context
        as echoed by MockLLM.
        """
        question = question or self.cfg.query
        engine = self._get_query_engine()

        t0 = time.time()
        response = engine.query(question)
        elapsed = time.time() - t0

        if self._logger is not None:
            self._logger.log_query(
                question=question,
                answer=str(response),
                sources=self._collect_sources(response),
                query_time_s=elapsed,
            )
        return response

    def query_with_sources(self, question: Optional[str] = None) -> dict[str, Any]:
        """
        Query and return the answer together with the chunks it was built from.

        Returns:
            {
                "question": str,
                "answer": str,
                "sources": [{"rank": int, "score": float, "text": str, "metadata": dict}, ...],
            }
        """
        question = question or self.cfg.query
        response = self.query(question)
        return {
            "question": question,
            "answer": str(response),
            "sources": self._collect_sources(response),
        }

    def run(self, question: Optional[str] = None) -> Response:
        """Index the data directory and answer a single question."""
        self.index()
        return self.query(question)

    @staticmethod
    def _collect_sources(response: Response) -> list[dict[str, Any]]:
        sources = []
        for rank, node in enumerate(response.source_nodes, 1):
            sources.append({
                "rank": rank,
                "score": round(float(node.score), 4) if node.score is not None else None,
                "text": node.text,
                "metadata": {k: str(v) for k, v in node.metadata.items()},
            })
        return sources
