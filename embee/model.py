"""Model configuration, format detection and loading."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import numpy as np

from embee.tokenizer import CharTokenizer, Tokenizer
from embee.types import (
    ActivationFunction,
    DataType,
    ModelArchitecture,
    QuantizationType,
    Tensor,
)

logger = logging.getLogger(__name__)

_ONNX_MAGIC = b"\x08\x00\x00\x00\x00\x00\x00\x00"


class UnsupportedFormatError(ValueError):
    """Raised when a model file's format cannot be loaded."""


@dataclass
class ModelConfig:
    """Hyperparameters and metadata of a transformer model."""

    n_vocab: int
    n_embd: int
    n_layers: int
    n_heads: int
    n_kv_heads: int
    max_seq_len: int
    is_rope: bool
    architecture: ModelArchitecture
    activation_function: ActivationFunction
    rope_freq_base: float
    rope_scaling: float
    quant_type: QuantizationType
    model_name: str = ""
    model_family: str = ""
    model_creator: str = ""


def detect_format(path: str | os.PathLike) -> str:
    """Guess a model file's format from its extension or, failing that, its header."""
    path = os.fspath(path)
    _, dot, ext = path.rpartition(".")
    if dot:
        ext = ext.lower()
        if ext in ("amb", "gguf", "onnx"):
            return ext

    with open(path, "rb") as handle:
        header = handle.read(8)

    if len(header) == 8:
        if header.startswith(b"GGUF"):
            return "gguf"
        if header == _ONNX_MAGIC:
            return "onnx"
        if header.startswith(b"AMBEE"):
            return "amb"
    return "amb"


class Model:
    """A transformer model: configuration, tokenizer and named weights."""

    def __init__(self, path: str | os.PathLike) -> None:
        path = os.fspath(path)
        fmt = detect_format(path)
        logger.info("Loading model in %s format from: %s", fmt, path)

        self._weights: dict[str, Tensor] = {}
        if fmt == "amb":
            self._load_amb(path)
        else:
            raise UnsupportedFormatError(f"Loading {fmt} models is not supported")

    @property
    def config(self) -> ModelConfig:
        """The model configuration."""
        return self._config

    @property
    def tokenizer(self) -> Tokenizer:
        """The tokenizer belonging to this model."""
        return self._tokenizer

    def get_tensor(self, name: str) -> Tensor:
        """Return the tensor with this name; KeyError if there is none."""
        try:
            return self._weights[name]
        except KeyError:
            raise KeyError(f"Tensor not found: {name}") from None

    def has_tensor(self, name: str) -> bool:
        """Whether a tensor with this name exists."""
        return name in self._weights

    def _add_zero_tensor(self, name: str, shape: tuple[int, ...]) -> None:
        self._weights[name] = Tensor(
            name=name,
            shape=shape,
            data_type=DataType.FP32,
            data=np.zeros(shape, dtype=np.float32),
        )

    def _load_amb(self, path: str) -> None:
        self._config = ModelConfig(
            n_vocab=32000,
            n_embd=2048,
            n_layers=24,
            n_heads=16,
            n_kv_heads=16,
            max_seq_len=2048,
            is_rope=True,
            architecture=ModelArchitecture.PHI,
            activation_function=ActivationFunction.SILU,
            rope_freq_base=10000.0,
            rope_scaling=1.0,
            quant_type=QuantizationType.NONE,
            model_name="phi-3-mini-4bit-dummy",
            model_family="Phi",
            model_creator="Microsoft",
        )
        self._tokenizer = CharTokenizer()

        cfg = self._config
        self._add_zero_tensor("transformer.wte.weight", (cfg.n_vocab, cfg.n_embd))
        for layer in range(cfg.n_layers):
            prefix = f"transformer.h.{layer}.attn.c_attn"
            self._add_zero_tensor(f"{prefix}.weight", (cfg.n_embd, 3 * cfg.n_embd))
            self._add_zero_tensor(f"{prefix}.bias", (3 * cfg.n_embd,))

        logger.info("Loaded dummy model with %d tensors.", len(self._weights))