"""
LlamaIndex quickstart with a local HuggingFace embedding model.

Runs the starter flow end to end without an OpenAI key:
- SimpleDirectoryReader to load everything under data/
- VectorStoreIndex built with a HuggingFace sentence-transformer embedding
- Query engine with no generation model (MockLLM echoes retrieved context)
"""
