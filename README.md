# minitransformer

A compact encoder-decoder Transformer written with NumPy. It has token
embeddings, sinusoidal positional encoding, scaled dot-product attention with
padding and look-ahead masks, layer normalisation, position-wise feed-forward
blocks, stacked encoder and decoder layers, and greedy generation.

The weights use Xavier initialisation and are never trained. The package shows
how data moves through the architecture. It does not produce useful
translations.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
minitransformer
minitransformer --seed 0
```

This builds two small vocabularies, one English and one Spanish, and a
Transformer with `d_model=128`, four heads, two layers and `d_ff=256`. It
prints the vocabulary sizes and the source and target sequences, runs one
forward pass and prints the output shape. Last, it greedily generates up to
ten tokens and prints them. The messages are printed in Spanish.

`--seed` fixes the random weights, so the generated sequence is the same on
every run. Without it the weights differ from run to run. The command exits
with status 1 and prints `Error: ...` to standard error if the model raises a
`ValueError` or `IndexError`.

## Library use

```python
import numpy as np

from minitransformer.transformer import Transformer
from minitransformer.vocab import SimpleVocab

source_vocab = SimpleVocab()
target_vocab = SimpleVocab()
for word in ["hello", "world"]:
    source_vocab.add_word(word)
for word in ["hola", "mundo"]:
    target_vocab.add_word(word)

model = Transformer(
    len(source_vocab), len(target_vocab),
    d_model=64, n_heads=4, n_layers=2, d_ff=128,
    rng=np.random.default_rng(0),
)

source = [source_vocab.word_id("hello"), source_vocab.word_id("world")]
logits = model.forward(source, [1, target_vocab.word_id("hola")])
print(logits.shape)  # (2, len(target_vocab))

tokens = model.generate(source, sos_token=1, eos_token=2, max_length=10)
print([target_vocab.word(t) for t in tokens])
```

`Transformer` defaults to `d_model=512`, `n_heads=8`, `n_layers=6` and
`d_ff=2048`. `generate` starts from `sos_token`, always picks the highest
scoring next token, and stops after `eos_token` or after `max_length` new
tokens (default 50). The returned list includes the start token.

Every vocabulary starts with four reserved ids. These are `<pad>` (0),
`<sos>` (1), `<eos>` (2) and `<unk>` (3); the names are available as `PAD`,
`SOS`, `EOS` and `UNK` in `minitransformer.vocab`. `add_word` returns the id
of the word, new or existing. An unknown word maps to the `<unk>` id, and an
unknown id maps to `<unk>`. `len(vocab)` and `word in vocab` work as expected.

Pass a `numpy.random.Generator` as `rng` to make the weights reproducible.

## Behaviour worth knowing

- Token id 0 is treated as padding: it is masked out as an attention key in
  the encoder and in encoder-decoder attention, and its row is cleared in the
  decoder's look-ahead mask.
- Ids outside the vocabulary embed to a row of zeros rather than raising.
- The positional table holds 5000 positions; a longer sequence raises
  `ValueError`.
- `MultiHeadAttention` requires `d_model` to be divisible by `n_heads` and
  raises `ValueError` otherwise. The heads are not split: attention is
  computed once over the full `d_model` projection, scaled by
  `sqrt(d_model // n_heads)`.

## Building blocks

- `minitransformer.functions` holds `softmax`, `relu`, `padding_mask`,
  `look_ahead_mask` and `decoder_mask`.
- `minitransformer.attention` holds `PositionalEncoding` and
  `MultiHeadAttention`.
- `minitransformer.layers` holds `Embedding`, `LayerNorm` and `FeedForward`.
- `minitransformer.blocks` holds `EncoderLayer` and `DecoderLayer`.
- `minitransformer.matrix` holds `xavier_uniform` and `preview`, which
  renders at most the top-left 5x5 corner of a matrix as text.
- `minitransformer.vocab` holds `SimpleVocab`.

## What it does not do

There is no training: no loss, no gradients and no optimiser. Weights cannot
be saved or loaded, and there is no tokenizer beyond looking up whole words in
a `SimpleVocab`. Inputs are single sequences; there is no batching.