import numpy as np
import pytest

from minitransformer.functions import (
    decoder_mask,
    look_ahead_mask,
    padding_mask,
    relu,
    softmax,
)


def test_softmax_rows_sum_to_one():
    result = softmax([[1.0, 2.0, 3.0], [-5.0, 0.0, 5.0]])
    assert np.allclose(result.sum(axis=1), 1.0)
    assert np.all(result > 0)


def test_softmax_uniform_for_equal_scores():
    result = softmax([[7.0, 7.0, 7.0, 7.0]])
    assert np.allclose(result, 0.25)


def test_softmax_is_stable_for_large_values():
    result = softmax([[1000.0, 1000.0]])
    assert np.allclose(result, 0.5)


def test_softmax_preserves_order():
    result = softmax([[0.1, 3.0, -2.0]])[0]
    assert np.argmax(result) == 1
    assert np.argmin(result) == 2


def test_softmax_masked_score_gets_no_weight():
    result = softmax([[0.0, -1e9]])
    assert result[0, 1] == pytest.approx(0.0)
    assert result[0, 0] == pytest.approx(1.0)


def test_relu_clamps_negatives():
    values = np.array([[-3.0, 0.0, 2.5], [4.0, -0.1, 1.0]])
    result = relu(values)
    assert np.all(result >= 0)
    positive = values > 0
    assert np.array_equal(result[positive], values[positive])
    assert np.all(result[~positive] == 0)


def test_padding_mask_marks_real_tokens():
    mask = padding_mask([5, 0, 3, 0])
    assert mask.shape == (1, 4)
    assert mask.tolist() == [[1.0, 0.0, 1.0, 0.0]]


def test_padding_mask_custom_pad_token():
    mask = padding_mask([9, 2, 9], pad_token=9)
    assert mask.tolist() == [[0.0, 1.0, 0.0]]


def test_look_ahead_mask_is_lower_triangular():
    mask = look_ahead_mask(4)
    assert mask.shape == (4, 4)
    assert np.array_equal(mask, np.tril(mask))
    assert np.all(np.diag(mask) == 1)
    assert mask.sum() == 10


def test_look_ahead_mask_rejects_negative_length():
    with pytest.raises(ValueError):
        look_ahead_mask(-2)


def test_decoder_mask_clears_padding_rows():
    mask = decoder_mask([1, 4, 0])
    assert np.all(mask[2] == 0)
    assert np.array_equal(mask[:2], look_ahead_mask(3)[:2])


def test_decoder_mask_without_padding_equals_look_ahead():
    assert np.array_equal(decoder_mask([1, 2, 3]), look_ahead_mask(3))