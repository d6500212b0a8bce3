# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Body similarity scoring.

Bodies are compared with the Sørensen-Dice coefficient over multisets of
fixed-size character n-grams (case-sensitive, no whitespace folding):

    2 * |G(a) ∩ G(b)| / (|G(a)| + |G(b)|)

The score is a heuristic for "same application answering", not an exact match.
"""

from __future__ import annotations

from collections import Counter

DEFAULT_NGRAM_SIZE = 8


def ngrams(text: str, size: int = DEFAULT_NGRAM_SIZE) -> Counter[str]:
    """Multiset of every contiguous ``size``-character substring of ``text``."""
    if size <= 0:
        raise ValueError(f"n-gram size must be positive, got {size}")
    text = text or ""
    return Counter(text[i : i + size] for i in range(len(text) - size + 1))


def dice(a: Counter[str], b: Counter[str]) -> float:
    total = sum(a.values()) + sum(b.values())
    if total == 0:
        return 0.0
    shared = sum((a & b).values())
    return min(1.0, max(0.0, 2.0 * shared / total))


def score(a: str, b: str, ngram_size: int = DEFAULT_NGRAM_SIZE) -> float:
    """Similarity of two bodies in ``[0.0, 1.0]``; ``0.0`` when neither yields an n-gram."""
    return dice(ngrams(a, ngram_size), ngrams(b, ngram_size))


class SimilarityScorer:
    """Scores candidates against a fixed reference body; n-grams of the reference are built once."""

    def __init__(self, reference: str, ngram_size: int = DEFAULT_NGRAM_SIZE):
        self.ngram_size = ngram_size
        self._reference = ngrams(reference, ngram_size)

    def score(self, candidate: str) -> float:
        return dice(self._reference, ngrams(candidate, self.ngram_size))


__all__ = ["DEFAULT_NGRAM_SIZE", "SimilarityScorer", "dice", "ngrams", "score"]
