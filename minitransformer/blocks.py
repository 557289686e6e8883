"""Encoder and decoder layers built from attention, feed-forward and normalisation."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .attention import MultiHeadAttention
from .layers import FeedForward, LayerNorm

__all__ = ["EncoderLayer", "DecoderLayer"]


class EncoderLayer:
    """Self-attention and feed-forward, each followed by a residual add and norm."""

    def __init__(
        self,
        d_model: int,
        n_heads: int,
        d_ff: int = 2048,
        rng: np.random.Generator | None = None,
    ) -> None:
        generator = rng if rng is not None else np.random.default_rng()
        self.self_attention = MultiHeadAttention(d_model, n_heads, generator)
        self.feed_forward = FeedForward(d_model, d_ff, generator)
        self.norm1 = LayerNorm(d_model)
        self.norm2 = LayerNorm(d_model)

    def forward(
        self, x: ArrayLike, src_mask: ArrayLike | None = None
    ) -> NDArray[np.float64]:
        values = np.asarray(x, dtype=float)
        attended = self.self_attention.forward(values, values, values, src_mask)
        hidden = self.norm1.forward(values + attended)
        return self.norm2.forward(hidden + self.feed_forward.forward(hidden))


class DecoderLayer:
    """Masked self-attention, encoder-decoder attention and feed-forward."""

    def __init__(
        self,
        d_model: int,
        n_heads: int,
        d_ff: int = 2048,
        rng: np.random.Generator | None = None,
    ) -> None:
        generator = rng if rng is not None else np.random.default_rng()
        self.masked_self_attention = MultiHeadAttention(d_model, n_heads, generator)
        self.encoder_decoder_attention = MultiHeadAttention(d_model, n_heads, generator)
        self.feed_forward = FeedForward(d_model, d_ff, generator)
        self.norm1 = LayerNorm(d_model)
        self.norm2 = LayerNorm(d_model)
        self.norm3 = LayerNorm(d_model)

    def forward(
        self,
        x: ArrayLike,
        encoder_output: ArrayLike,
        target_mask: ArrayLike,
        src_mask: ArrayLike | None = None,
    ) -> NDArray[np.float64]:
        values = np.asarray(x, dtype=float)
        memory = np.asarray(encoder_output, dtype=float)
        attended = self.masked_self_attention.forward(values, values, values, target_mask)
        hidden = self.norm1.forward(values + attended)
        cross = self.encoder_decoder_attention.forward(hidden, memory, memory, src_mask)
        hidden = self.norm2.forward(hidden + cross)
        return self.norm3.forward(hidden + self.feed_forward.forward(hidden))