"""
choices.py

PURPOSE: Map an ordered list of choices to spreadsheet-style labels and back.
DEPENDENCIES: None (pure Python)

ARCHITECTURE NOTES:
Labels follow spreadsheet column naming: A..Z, AA..AZ, BA.. and so on
(bijective base 26, no digit for zero). Assignment is purely positional,
so duplicate choices get distinct labels.
"""

import string
from dataclasses import dataclass, field
from typing import Sequence

ALPHABET = string.ascii_uppercase


def index_to_label(index: int) -> str:
    """
    Return the label for a zero-based choice index.

    >>> [index_to_label(i) for i in (0, 25, 26, 701, 702)]
    ['A', 'Z', 'AA', 'ZZ', 'AAA']
    """
    if index < 0:
        raise ValueError(f"choice index must be non-negative, got {index}")

    label = ""
    n = index + 1
    while n > 0:
        n, remainder = divmod(n - 1, 26)
        label = ALPHABET[remainder] + label
    return label


def label_to_index(label: str) -> int | None:
    """Inverse of index_to_label; None for anything it cannot produce."""
    if not label or any(ch not in ALPHABET for ch in label):
        return None

    n = 0
    for ch in label:
        n = n * 26 + ALPHABET.index(ch) + 1
    return n - 1


@dataclass(frozen=True)
class EncodedChoices:
    """Choices rendered for a prompt, plus the lookup table for this call."""

    choices: tuple[str, ...]
    display: str
    lookup: dict[str, int] = field(default_factory=dict)

    def label_for(self, index: int) -> str:
        if not 0 <= index < len(self.choices):
            raise IndexError(f"no choice at index {index}")
        return index_to_label(index)

    def decode(self, label: str) -> int | None:
        """Index of the choice a label refers to, or None if it was not offered."""
        return self.lookup.get(label)


def encode(choices: Sequence[str]) -> EncodedChoices:
    """Render choices as ``LABEL. choice`` lines in input order."""
    lines = []
    lookup: dict[str, int] = {}
    for i, choice in enumerate(choices):
        label = index_to_label(i)
        lines.append(f"{label}. {choice}")
        lookup[label] = i

    return EncodedChoices(
        choices=tuple(choices),
        display="\n".join(lines),
        lookup=lookup,
    )
