"""Common enumerations and the tensor container shared across the library."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

TokenId = int


class ModelArchitecture(Enum):
    """Supported model architectures."""

    LLAMA = auto()
    MISTRAL = auto()
    GEMMA = auto()
    PHI = auto()
    FALCON = auto()
    GPT2 = auto()
    MPT = auto()
    CUSTOM = auto()


class QuantizationType(Enum):
    """Quantization schemes a model may use."""

    NONE = auto()
    INT8 = auto()
    INT4 = auto()
    INT5 = auto()
    INT4_BLOCK = auto()
    INT5_BLOCK = auto()
    ADAPTIVE = auto()


class ActivationFunction(Enum):
    """Activation functions used in feed-forward blocks."""

    GELU = auto()
    SILU = auto()
    RELU = auto()
    SWIGLU = auto()


class DataType(Enum):
    """Element type of stored weights."""

    FP32 = auto()
    FP16 = auto()
    BF16 = auto()
    INT8 = auto()
    INT4 = auto()
    INT5 = auto()


def _empty() -> np.ndarray:
    return np.zeros(0, dtype=np.uint8)


@dataclass
class Tensor:
    """A named block of weight data with its shape and element type."""

    name: str = ""
    shape: tuple[int, ...] = ()
    data_type: DataType = DataType.FP32
    data: np.ndarray = field(default_factory=_empty)

    def nbytes(self) -> int:
        """Size of the raw data in bytes."""
        return int(self.data.nbytes)