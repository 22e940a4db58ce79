"""Tokenizer interface and a simple byte-level tokenizer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from embee.types import TokenId


class Tokenizer(ABC):
    """Turns text into token ids and back."""

    @abstractmethod
    def encode(self, text: str) -> list[TokenId]:
        """Encode text into token ids."""

    @abstractmethod
    def decode(self, tokens: Iterable[TokenId]) -> str:
        """Decode token ids back into text."""

    @abstractmethod
    def vocab_size(self) -> int:
        """Number of tokens in the vocabulary."""

    @abstractmethod
    def bos_token(self) -> TokenId | None:
        """Beginning-of-sequence token id, or None if there is none."""

    @abstractmethod
    def eos_token(self) -> TokenId | None:
        """End-of-sequence token id, or None if there is none."""

    @abstractmethod
    def pad_token(self) -> TokenId | None:
        """Padding token id, or None if there is none."""


class CharTokenizer(Tokenizer):
    """Maps every byte of the UTF-8 encoded text to one token."""

    def encode(self, text: str) -> list[TokenId]:
        return list(text.encode("utf-8"))

    def decode(self, tokens: Iterable[TokenId]) -> str:
        raw = bytes(token & 0xFF for token in tokens)
        return raw.decode("utf-8", errors="replace")

    def vocab_size(self) -> int:
        return 256

    def bos_token(self) -> TokenId | None:
        return 1

    def eos_token(self) -> TokenId | None:
        return 2

    def pad_token(self) -> TokenId | None:
        return 0