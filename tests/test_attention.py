import numpy as np
import pytest

from minitransformer.attention import MultiHeadAttention, PositionalEncoding
from minitransformer.functions import look_ahead_mask, padding_mask


def test_positional_encoding_first_row():
    row = PositionalEncoding(6, max_seq_len=10).encoding(1)[0]
    assert np.allclose(row[0::2], 0.0)
    assert np.allclose(row[1::2], 1.0)


def test_positional_encoding_shape_and_range():
    enc = PositionalEncoding(8, max_seq_len=50).encoding(20)
    assert enc.shape == (20, 8)
    assert np.all(np.abs(enc) <= 1.0)


def test_positional_encoding_first_column_is_sine_of_position():
    enc = PositionalEncoding(4, max_seq_len=10).encoding(5)
    assert np.allclose(enc[:, 0], np.sin(np.arange(5)))
    assert np.allclose(enc[:, 1], np.cos(np.arange(5)))


def test_positional_encoding_returns_copy():
    pe = PositionalEncoding(4, max_seq_len=10)
    first = pe.encoding(3)
    first[:] = 99.0
    second = pe.encoding(3)
    assert np.allclose(second[0], [0.0, 1.0, 0.0, 1.0])
    assert np.allclose(second[:, 0], np.sin(np.arange(3)))


def test_positional_encoding_rejects_too_long_sequence():
    with pytest.raises(ValueError):
        PositionalEncoding(4, max_seq_len=3).encoding(4)


def test_attention_requires_divisible_heads():
    with pytest.raises(ValueError):
        MultiHeadAttention(10, 3)


def test_attention_rejects_zero_heads():
    with pytest.raises(ValueError):
        MultiHeadAttention(8, 0)


def test_forward_shape_for_cross_attention():
    rng = np.random.default_rng(0)
    mha = MultiHeadAttention(8, 2, rng)
    query = rng.normal(size=(3, 8))
    memory = rng.normal(size=(5, 8))
    out = mha.forward(query, memory, memory)
    assert out.shape == (3, 8)


def test_forward_is_reproducible_with_seed():
    x = np.random.default_rng(5).normal(size=(4, 8))
    first = MultiHeadAttention(8, 4, np.random.default_rng(1)).forward(x, x, x)
    second = MultiHeadAttention(8, 4, np.random.default_rng(1)).forward(x, x, x)
    assert np.allclose(first, second)


def test_causal_mask_first_row_attends_only_to_first_value():
    rng = np.random.default_rng(2)
    mha = MultiHeadAttention(4, 1, rng)
    q = rng.normal(size=(3, 4))
    k = rng.normal(size=(3, 4))
    v = rng.normal(size=(3, 4))
    out = mha.scaled_dot_product_attention(q, k, v, look_ahead_mask(3))
    assert np.allclose(out[0], v[0])


def test_padding_mask_ignores_padded_keys():
    rng = np.random.default_rng(3)
    mha = MultiHeadAttention(4, 2, rng)
    q = rng.normal(size=(2, 4))
    k = rng.normal(size=(3, 4))
    v = rng.normal(size=(3, 4))
    mask = padding_mask([7, 0, 0])
    out = mha.scaled_dot_product_attention(q, k, v, mask)
    assert np.allclose(out, np.tile(v[0], (2, 1)))


def test_attention_output_is_convex_combination_of_values():
    rng = np.random.default_rng(4)
    mha = MultiHeadAttention(4, 2, rng)
    q = rng.normal(size=(3, 4))
    k = rng.normal(size=(3, 4))
    row = np.array([1.5, -2.0, 0.25, 3.0])
    v = np.tile(row, (3, 1))
    out = mha.scaled_dot_product_attention(q, k, v)
    assert out.shape == (3, 4)
    assert np.allclose(out, v)