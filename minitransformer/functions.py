"""Activation functions and attention masks."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

__all__ = ["softmax", "relu", "padding_mask", "look_ahead_mask", "decoder_mask"]


def softmax(scores: ArrayLike) -> NDArray[np.float64]:
    """Row-wise softmax, shifted by each row's maximum for numerical stability."""
    values = np.asarray(scores, dtype=float)
    shifted = np.exp(values - values.max(axis=-1, keepdims=True))
    return shifted / shifted.sum(axis=-1, keepdims=True)


def relu(values: ArrayLike) -> NDArray[np.float64]:
    """Element-wise ``max(0, x)``."""
    return np.maximum(0.0, np.asarray(values, dtype=float))


def padding_mask(tokens: Sequence[int], pad_token: int = 0) -> NDArray[np.float64]:
    """A ``1 x len(tokens)`` mask: 1 for real tokens, 0 for padding."""
    return (np.asarray(tokens, dtype=int) != pad_token).astype(float).reshape(1, -1)


def look_ahead_mask(seq_len: int) -> NDArray[np.float64]:
    """A lower-triangular ``seq_len x seq_len`` mask of ones."""
    if seq_len < 0:
        raise ValueError("sequence length must be non-negative")
    return np.tril(np.ones((seq_len, seq_len)))


def decoder_mask(tokens: Sequence[int], pad_token: int = 0) -> NDArray[np.float64]:
    """Look-ahead mask whose rows for padding tokens are cleared."""
    ids = np.asarray(tokens, dtype=int).reshape(-1)
    mask = look_ahead_mask(ids.size)
    mask[ids == pad_token, :] = 0.0
    return mask