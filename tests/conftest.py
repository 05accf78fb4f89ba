import sys
from pathlib import Path

import pytest
from llama_index.core.embeddings import MockEmbedding

# Make `src.hf_quickstart` importable without installing the package
sys.path.insert(0, str(Path(__file__).parent.parent))

INFO_TEXT = "LlamaIndex is a tool for indexing and retrieving documents."
TEST_TEXT = "This is a test document for embedding models."


@pytest.fixture
def data_dir(tmp_path):
    """The two-file data/ folder used throughout the guide."""
    d = tmp_path / "data"
    d.mkdir()
    (d / "info.txt").write_text(INFO_TEXT, encoding="utf-8")
    (d / "test.txt").write_text(TEST_TEXT, encoding="utf-8")
    return d


@pytest.fixture
def mock_embed(monkeypatch):
    """
    Replace the HuggingFace embedding model with LlamaIndex's MockEmbedding
    so tests run offline and without downloading weights.
    """
    import src.hf_quickstart.pipeline as pipeline

    built = []

    def fake_build_embed_model(cfg):
        built.append(cfg.embed_model_name)
        return MockEmbedding(embed_dim=8)

    monkeypatch.setattr(pipeline, "build_embed_model", fake_build_embed_model)
    return built


@pytest.fixture
def cache_env(tmp_path, monkeypatch):
    """Point the LlamaIndex cache at a temporary directory."""
    cache = tmp_path / "llama_index_cache"
    monkeypatch.setenv("LLAMA_INDEX_CACHE_DIR", str(cache))
    return cache
