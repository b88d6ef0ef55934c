"""Tests for input validation helpers."""

import pytest
import torch

from line_morph.core import ValidationError, validate_device, validate_input_file, validate_ratio


def test_validate_input_file(image_files):
    source_path, _ = image_files

    assert validate_input_file(str(source_path)) == source_path


def test_validate_input_file_missing(tmp_path):
    with pytest.raises(ValidationError, match="Source image not found"):
        validate_input_file(tmp_path / "gone.png", "Source")


def test_validate_input_file_format(tmp_path):
    path = tmp_path / "lines.json"
    path.write_text("[]")

    with pytest.raises(ValidationError):
        validate_input_file(path)


def test_validate_device_cpu():
    assert validate_device("cpu") == torch.device("cpu")


@pytest.mark.skipif(torch.cuda.is_available(), reason="CUDA is available")
def test_validate_device_without_cuda():
    with pytest.raises(ValidationError):
        validate_device("cuda")


@pytest.mark.parametrize("alpha", [0, 0.25, 1])
def test_validate_ratio_accepts(alpha):
    assert validate_ratio(alpha) == float(alpha)


@pytest.mark.parametrize("alpha", [-0.01, 1.01, float("nan"), float("inf")])
def test_validate_ratio_rejects(alpha):
    with pytest.raises(ValidationError):
        validate_ratio(alpha)
