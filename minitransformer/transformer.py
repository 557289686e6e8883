"""Encoder-decoder transformer with greedy generation, and a small demo command."""

from __future__ import annotations

import argparse
import math
import sys
from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .attention import PositionalEncoding
from .blocks import DecoderLayer, EncoderLayer
from .functions import decoder_mask, padding_mask
from .layers import Embedding
from .matrix import xavier_uniform
from .vocab import SOS, SimpleVocab

__all__ = ["Transformer", "main"]


class Transformer:
    """Stack of encoder and decoder layers with a final vocabulary projection."""

    def __init__(
        self,
        input_vocab_size: int,
        target_vocab_size: int,
        d_model: int = 512,
        n_heads: int = 8,
        n_layers: int = 6,
        d_ff: int = 2048,
        rng: np.random.Generator | None = None,
    ) -> None:
        generator = rng if rng is not None else np.random.default_rng()
        self.d_model = d_model
        self.n_layers = n_layers
        self.input_vocab_size = input_vocab_size
        self.target_vocab_size = target_vocab_size
        self.pos_encoding = PositionalEncoding(d_model)
        self.input_embedding = Embedding(input_vocab_size, d_model, generator)
        self.target_embedding = Embedding(target_vocab_size, d_model, generator)
        self.output_projection = xavier_uniform(d_model, target_vocab_size, generator)
        self.encoder_layers = [
            EncoderLayer(d_model, n_heads, d_ff, generator) for _ in range(n_layers)
        ]
        self.decoder_layers = [
            DecoderLayer(d_model, n_heads, d_ff, generator) for _ in range(n_layers)
        ]

    def _embed(self, embedding: Embedding, tokens: Sequence[int]) -> NDArray[np.float64]:
        scaled = embedding.forward(tokens) * math.sqrt(self.d_model)
        return scaled + self.pos_encoding.encoding(len(tokens))

    def encode(self, input_tokens: Sequence[int]) -> NDArray[np.float64]:
        """Run the source tokens through the encoder stack."""
        output = self._embed(self.input_embedding, input_tokens)
        src_mask = padding_mask(input_tokens)
        for layer in self.encoder_layers:
            output = layer.forward(output, src_mask)
        return output

    def decode(
        self,
        target_tokens: Sequence[int],
        encoder_output: ArrayLike,
        input_tokens: Sequence[int],
    ) -> NDArray[np.float64]:
        """Run the target tokens through the decoder stack against the encoder output."""
        output = self._embed(self.target_embedding, target_tokens)
        target_mask = decoder_mask(target_tokens)
        src_mask = padding_mask(input_tokens)
        for layer in self.decoder_layers:
            output = layer.forward(output, encoder_output, target_mask, src_mask)
        return output

    def forward(
        self, source_tokens: Sequence[int], target_tokens: Sequence[int]
    ) -> NDArray[np.float64]:
        """Logits of shape ``len(target_tokens) x target_vocab_size``."""
        encoded = self.encode(source_tokens)
        return self.decode(target_tokens, encoded, source_tokens) @ self.output_projection

    def generate(
        self,
        source_tokens: Sequence[int],
        sos_token: int = 1,
        eos_token: int = 2,
        max_length: int = 50,
    ) -> list[int]:
        """Greedy decoding: start from ``sos_token`` and stop at ``eos_token``."""
        encoded = self.encode(source_tokens)
        generated = [sos_token]
        for _ in range(max_length):
            decoded = self.decode(generated, encoded, source_tokens)
            logits = decoded[-1] @ self.output_projection
            next_token = int(np.argmax(logits))
            generated.append(next_token)
            if next_token == eos_token:
                break
        return generated


def _describe(vocab: SimpleVocab, ids: Sequence[int]) -> str:
    return "".join(f"{vocab.word(token)}({token}) " for token in ids)


def main(argv: Sequence[str] | None = None) -> int:
    """Build a small English-Spanish model, run a forward pass and a generation."""
    parser = argparse.ArgumentParser(description="Transformer demo")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)

    try:
        print("=== Transformer Completo ===")
        eng_vocab, spa_vocab = SimpleVocab(), SimpleVocab()
        for word in ("hello", "world", "how", "are", "you", "good", "morning"):
            eng_vocab.add_word(word)
        for word in ("hola", "mundo", "como", "estas", "tu", "buenos", "dias"):
            spa_vocab.add_word(word)

        print(f"Vocabulario ingles: {len(eng_vocab)} palabras")
        print(f"Vocabulario espanol: {len(spa_vocab)} palabras")

        transformer = Transformer(
            len(eng_vocab), len(spa_vocab), 128, 4, 2, 256,
            rng=np.random.default_rng(args.seed),
        )
        print("Transformer creado exitosamente!")

        source = [eng_vocab.word_id("hello"), eng_vocab.word_id("world")]
        target = [spa_vocab.word_id(SOS), spa_vocab.word_id("hola")]
        print(f"Secuencia fuente: {_describe(eng_vocab, source)}")
        print(f"Secuencia objetivo: {_describe(spa_vocab, target)}")

        output = transformer.forward(source, target)
        print("Forward pass completado!")
        print(f"Forma de salida: {output.shape[0]}x{output.shape[1]}")

        print("\n=== Prueba de Generacion ===")
        generated = transformer.generate(source, 1, 2, 10)
        print(f"Secuencia generada: {_describe(spa_vocab, generated)}")
        print("\n¡Transformer completado exitosamente!")
    except (ValueError, IndexError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())