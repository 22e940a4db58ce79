import numpy as np
import pytest

from embee.types import (
    ActivationFunction,
    DataType,
    ModelArchitecture,
    QuantizationType,
    Tensor,
)


def test_default_tensor_is_empty():
    tensor = Tensor()
    assert tensor.nbytes() == 0
    assert tensor.shape == ()
    assert tensor.data_type is DataType.FP32


@pytest.mark.parametrize("shape", [(3,), (2, 5), (4, 4, 2)])
def test_nbytes_matches_float32_payload(shape):
    data = np.zeros(shape, dtype=np.float32)
    tensor = Tensor(name="w", shape=shape, data=data)
    assert tensor.nbytes() == int(np.prod(shape)) * np.dtype(np.float32).itemsize


def test_nbytes_of_byte_buffer():
    tensor = Tensor(name="raw", shape=(10,), data_type=DataType.INT8,
                    data=np.zeros(10, dtype=np.uint8))
    assert tensor.nbytes() == 10


def test_default_data_not_shared_between_tensors():
    first = Tensor()
    second = Tensor()
    assert first.data is not second.data
    first.data = np.ones(4, dtype=np.uint8)
    assert second.nbytes() == 0


def test_enum_members_are_distinct():
    assert len(ModelArchitecture) == 8
    assert len(QuantizationType) == 7
    assert len(ActivationFunction) == 4
    assert len(DataType) == 6
    assert ModelArchitecture["PHI"] is ModelArchitecture.PHI
    tensor = Tensor(name="bf", shape=(2,), data_type=DataType["BF16"],
                    data=np.zeros(4, dtype=np.uint8))
    assert tensor.data_type is DataType.BF16
    assert tensor.data_type is not DataType.FP16
    assert tensor.nbytes() == 4


@pytest.mark.parametrize("data_type", list(DataType))
def test_tensor_keeps_each_data_type(data_type):
    tensor = Tensor(name="t", shape=(3,), data_type=data_type,
                    data=np.zeros(3, dtype=np.uint8))
    assert tensor.data_type is data_type
    assert tensor.nbytes() == 3