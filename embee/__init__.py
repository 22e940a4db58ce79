"""Transformer model format detection, byte-level tokenization and sampled text generation."""

__version__ = "0.1.0"
__all__ = ["types", "tokenizer", "model", "engine", "chat_cli"]