"""A small NumPy encoder-decoder Transformer with masks, a toy vocabulary and greedy decoding."""

__version__ = "0.1.0"