"""A minimal word/id vocabulary with reserved special tokens."""

from __future__ import annotations

__all__ = ["SimpleVocab", "PAD", "SOS", "EOS", "UNK"]

PAD = "<pad>"
SOS = "<sos>"
EOS = "<eos>"
UNK = "<unk>"


class SimpleVocab:
    """Bidirectional mapping between words and integer ids."""

    def __init__(self) -> None:
        self.word_to_id: dict[str, int] = {}
        self.id_to_word: dict[int, str] = {}
        for token in (PAD, SOS, EOS, UNK):
            self.add_word(token)

    def add_word(self, word: str) -> int:
        """Add ``word`` if it is new and return its id."""
        if word not in self.word_to_id:
            new_id = len(self.word_to_id)
            self.word_to_id[word] = new_id
            self.id_to_word[new_id] = word
        return self.word_to_id[word]

    def word_id(self, word: str) -> int:
        """Id of ``word``, or the id of the unknown token."""
        return self.word_to_id.get(word, self.word_to_id[UNK])

    def word(self, token_id: int) -> str:
        """Word for ``token_id``, or the unknown token."""
        return self.id_to_word.get(token_id, UNK)

    def __contains__(self, word: object) -> bool:
        return word in self.word_to_id

    def __len__(self) -> int:
        return len(self.word_to_id)