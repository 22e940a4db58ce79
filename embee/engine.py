"""Inference engine: prompt processing, sampling and token generation."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

import numpy as np

from embee.model import Model
from embee.types import TokenId

TokenCallback = Callable[[TokenId, str], bool]


@dataclass
class GenerationConfig:
    """Settings that control text generation."""

    max_length: int = 512
    temperature: float = 0.8
    top_p: float = 0.9
    repetition_penalty: float = 1.1
    batch_size: int = 1
    use_cache: bool = True


def apply_repetition_penalty(
    logits: np.ndarray, tokens: Iterable[TokenId], penalty: float
) -> np.ndarray:
    """Return a copy of ``logits`` with every occurrence of a seen token penalised.

    Positive logits are divided by ``penalty``, others multiplied by it.
    Tokens outside the vocabulary are ignored.
    """
    result = np.array(logits, dtype=np.float64, copy=True)
    size = len(result)
    for token in tokens:
        if 0 <= token < size:
            if result[token] > 0:
                result[token] /= penalty
            else:
                result[token] *= penalty
    return result


def sample_token(
    logits: np.ndarray, top_p: float, rng: np.random.Generator
) -> TokenId:
    """Pick a token by nucleus (top-p) sampling; greedy when ``top_p`` is near zero."""
    values = np.asarray(logits, dtype=np.float64)
    if values.size == 0:
        raise ValueError("cannot sample from empty logits")

    probs = np.exp(values - values.max())
    probs /= probs.sum()

    if top_p < 1e-6:
        return int(np.argmax(probs))

    order = np.argsort(-probs, kind="stable")
    sorted_probs = probs[order]
    cumulative = np.cumsum(sorted_probs)

    reached = np.nonzero(cumulative >= top_p)[0]
    cutoff = int(reached[0]) if reached.size else len(order) - 1

    nucleus = sorted_probs[: cutoff + 1]
    r = rng.uniform(0.0, float(nucleus.sum()))
    for index, cdf in zip(order, np.cumsum(nucleus)):
        if r <= cdf:
            return int(index)
    return int(order[0])


class Engine:
    """Runs generation for a model."""

    def __init__(self, model: Model, rng: np.random.Generator | None = None) -> None:
        self._model = model
        self._rng = rng if rng is not None else np.random.default_rng()
        config = model.config
        self._head_size = config.n_embd // config.n_heads
        self._kv_cache_initialized = False
        self._key_cache: list[np.ndarray] = []
        self._value_cache: list[np.ndarray] = []
        self._last_logits = np.zeros(0, dtype=np.float32)

    def generate(self, prompt: str, config: GenerationConfig | None = None) -> str:
        """Return the prompt followed by the generated text."""
        pieces = [text for _, text in self.stream(prompt, config)]
        return prompt + "".join(pieces)

    def generate_with_callback(
        self,
        prompt: str,
        callback: TokenCallback,
        config: GenerationConfig | None = None,
    ) -> None:
        """Generate, passing each token to ``callback``; a falsy return stops generation."""
        for token_id, text in self.stream(prompt, config):
            if not callback(token_id, text):
                break

    def stream(
        self, prompt: str, config: GenerationConfig | None = None
    ) -> Iterator[tuple[TokenId, str]]:
        """Yield ``(token_id, text)`` pairs as tokens are generated."""
        config = config if config is not None else GenerationConfig()
        tokenizer = self._model.tokenizer
        tokens = tokenizer.encode(prompt)

        if not self._kv_cache_initialized or not config.use_cache:
            self._initialize_kv_cache(config.max_length)

        self._process_tokens(tokens)
        eos = tokenizer.eos_token()

        for _ in range(config.max_length):
            logits = self._last_logits.astype(np.float64)

            if config.temperature > 0:
                logits = logits / config.temperature

            if config.repetition_penalty != 1.0:
                logits = apply_repetition_penalty(
                    logits, tokens, config.repetition_penalty
                )

            next_token = sample_token(logits, config.top_p, self._rng)
            if eos is not None and next_token == eos:
                break

            tokens.append(next_token)
            self._process_single_token(next_token, len(tokens) - 1)
            yield next_token, tokenizer.decode([next_token])

    def get_logits(self, prompt: str) -> np.ndarray:
        """Logits over the vocabulary for the token following ``prompt``."""
        tokens = self._model.tokenizer.encode(prompt)
        self._process_tokens(tokens)
        return self._last_logits.copy()

    def _initialize_kv_cache(self, max_seq_len: int) -> None:
        config = self._model.config
        kv_dim = config.n_kv_heads * self._head_size
        self._key_cache = [
            np.zeros(max_seq_len * kv_dim, dtype=np.float32)
            for _ in range(config.n_layers)
        ]
        self._value_cache = [
            np.zeros(max_seq_len * kv_dim, dtype=np.float32)
            for _ in range(config.n_layers)
        ]
        self._kv_cache_initialized = True

    def _random_logits(self) -> np.ndarray:
        n_vocab = self._model.config.n_vocab
        return self._rng.standard_normal(n_vocab).astype(np.float32)

    def _process_tokens(self, tokens: list[TokenId]) -> None:
        # No forward pass exists yet; logits are drawn from a standard normal.
        self._last_logits = self._random_logits()

    def _process_single_token(self, token: TokenId, position: int) -> None:
        self._last_logits = self._random_logits()