"""
CLI entry point for the quickstart.

With no arguments this is the starter script: load data/, index it with the
HuggingFace embedding model, answer the default question, print the response.

Usage:
    python main.py                                  # default question
    python main.py query "What is this document about?"
    python main.py chat                             # interactive
    python main.py doctor [--clear-cache]           # troubleshooting
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from .config import QuickstartConfig


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="LlamaIndex quickstart with a HuggingFace embedding model"
    )
    parser.add_argument(
        "mode",
        nargs="?",
        default="query",
        choices=["query", "chat", "doctor"],
        help="'query' answers one question (default), 'chat' is interactive, "
             "'doctor' checks the data and cache directories",
    )
    parser.add_argument(
        "question",
        nargs="?",
        default=None,
        help="question string for 'query' mode (defaults to the configured query)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="path to YAML config file (optional, uses defaults otherwise)",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="override data directory",
    )
    parser.add_argument(
        "--embed-model",
        default=None,
        help="override HuggingFace embedding model name",
    )
    parser.add_argument(
        "--gen-model",
        default=None,
        help="path to a local .gguf generation model (default: none, context is echoed)",
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="number of chunks to retrieve",
    )
    parser.add_argument(
        "--show-sources",
        action="store_true",
        help="print the retrieved chunks after the response",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        help="write a JSON query log to the configured log directory",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="print progress while loading and indexing",
    )
    parser.add_argument(
        "--clear-cache",
        action="store_true",
        help="('doctor' mode) delete the LlamaIndex cache directory",
    )
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> QuickstartConfig:
    """Build config from YAML + CLI overrides."""
    if args.config:
        cfg = QuickstartConfig.from_yaml(args.config)
    else:
        cfg = QuickstartConfig()

    # Apply CLI overrides
    if args.data_dir:
        cfg.data_dir = args.data_dir
    if args.embed_model:
        cfg.embed_model_name = args.embed_model
    if args.gen_model:
        cfg.gen_model_path = args.gen_model
    if args.top_k is not None:
        if args.top_k < 1:
            raise ValueError(f"--top-k must be >= 1, got {args.top_k}")
        cfg.similarity_top_k = args.top_k
    if args.log:
        cfg.log_queries = True
    if args.verbose:
        cfg.verbose = True

    return cfg


def _print_sources(sources: list, label: str = "Retrieved Chunks") -> None:
    sep = "-" * 60
    print(f"\n{sep}")
    print(f"  {label}  ({len(sources)} chunk(s))")
    print(sep)
    for chunk in sources:
        score = chunk.get("score")
        score_str = f"{score:.4f}" if score is not None else "N/A"
        meta = chunk.get("metadata", {})
        text = chunk.get("text", "")
        print(f"\n  [{chunk['rank']}] score={score_str}")
        if "file_name" in meta:
            print(f"      file_name: {meta['file_name']}")
        for line in text.splitlines():
            print(f"        {line}")
    print(f"\n{sep}\n")


def _answer(pipe, question: Optional[str], show_sources: bool) -> None:
    if show_sources:
        result = pipe.query_with_sources(question)
        print(result["answer"])
        _print_sources(result["sources"])
    else:
        print(pipe.query(question))


def run_query(args: argparse.Namespace) -> None:
    """Index data/ and answer one question. Errors propagate."""
    cfg = _build_config(args)
    from .pipeline import QuickstartPipeline

    pipe = QuickstartPipeline(config=cfg)
    pipe.index()
    _answer(pipe, args.question, args.show_sources)

    if pipe.logger is not None and cfg.verbose:
        print(f"Query log written to {pipe.logger.path}")


def run_chat(args: argparse.Namespace) -> None:
    """Interactive chat loop over a single in-memory index."""
    cfg = _build_config(args)
    from .pipeline import QuickstartPipeline

    pipe = QuickstartPipeline(config=cfg)
    pipe.index()

    print("\nLlamaIndex Quickstart: Interactive Chat")
    print("Type 'exit' or 'quit' to end the session.\n")

    while True:
        try:
            question = input("Ask > ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break
        if not question:
            continue
        if question.lower() in {"exit", "quit"}:
            print("Goodbye!")
            break
        try:
            _answer(pipe, question, args.show_sources)
        except Exception as e:
            print(f"\nError: {e}", file=sys.stderr)


def run_doctor(args: argparse.Namespace) -> int:
    """Report on data/ and the cache directory; optionally clear the cache."""
    cfg = _build_config(args)
    from .doctor import cache_dir, clear_cache, inspect_data_dir, print_report

    report = inspect_data_dir(cfg.data_dir, cfg.required_exts, recursive=cfg.recursive)
    cache = cache_dir()
    print_report(report, cache)

    if args.clear_cache:
        if clear_cache(cache):
            print(f"Removed cache directory {cache}")
        else:
            print(f"No cache directory at {cache}")

    return 0 if report.ok else 1


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    if args.mode == "query":
        run_query(args)
    elif args.mode == "chat":
        run_chat(args)
    elif args.mode == "doctor":
        code = run_doctor(args)
        if code:
            sys.exit(code)


if __name__ == "__main__":
    main()
