"""
Model factories for the quickstart.

- Embeddings: HuggingFace sentence-transformer, replaces the OpenAI default
- LLM: none by default (LlamaIndex falls back to MockLLM); optionally a local
  GGUF model via llama-cpp-python
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from llama_index.core.llms import LLM
from llama_index.embeddings.huggingface import HuggingFaceEmbedding

from .config import QuickstartConfig


# ── Prompt formatting for ChatML models (Qwen etc.) ─────────────────────


def _messages_to_prompt(messages) -> str:
    """Convert LlamaIndex messages to ChatML."""
    prompt = ""
    for m in messages:
        role = m.role.value if hasattr(m.role, "value") else m.role
        prompt += f"<|im_start|>{role}\n{m.content}<|im_end|>\n"
    prompt += "<|im_start|>assistant\n"
    return prompt


def _completion_to_prompt(completion: str) -> str:
    return (
        "<|im_start|>user\n"
        f"{completion}<|im_end|>\n"
        "<|im_start|>assistant\n"
    )


# ── Factories ────────────────────────────────────────────────────────────


def build_embed_model(cfg: QuickstartConfig) -> HuggingFaceEmbedding:
    """
    Build the HuggingFace embedding model.

    The model is downloaded on first use; an unknown model id raises from
    inside sentence-transformers / huggingface_hub.
    """
    return HuggingFaceEmbedding(
        model_name=cfg.embed_model_name,
        device=cfg.embed_device,
        embed_batch_size=cfg.embed_batch_size,
    )


def build_llm(cfg: QuickstartConfig) -> Optional[LLM]:
    """
    Build the generation model, or None when no model path is configured.

    None is passed straight to ``Settings.llm``, which makes LlamaIndex use
    MockLLM instead of reaching for OpenAI.
    """
    if not cfg.gen_model_path:
        return None

    model_path = Path(cfg.gen_model_path)
    if not model_path.is_file():
        raise FileNotFoundError(f"Generation model not found: {model_path}")

    # Optional extra: pip install "llamaindex-hf-quickstart[llm]"
    from llama_index.llms.llama_cpp import LlamaCPP

    return LlamaCPP(
        model_path=str(model_path),
        temperature=cfg.gen_temperature,
        max_new_tokens=cfg.gen_max_tokens,
        context_window=cfg.gen_context_window,
        model_kwargs={"n_gpu_layers": cfg.n_gpu_layers},
        messages_to_prompt=_messages_to_prompt,
        completion_to_prompt=_completion_to_prompt,
        verbose=False,
    )
