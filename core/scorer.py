"""Similarity scoring: histogram intersection of two word profiles.

score(A, B) = Σ min(freq_A(w), freq_B(w)) over words w in both profiles.
Words outside the top-N of either book contribute nothing, so the score
underestimates the overlap of the full distributions.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from core.profiler import Profile


def similarity(profile_a: Profile, profile_b: Profile) -> float:
    """Score two profiles.  0.0 when they share no words."""
    lookup = {wf.word: wf.frequency for wf in profile_a}
    shared = [
        min(lookup[wf.word], wf.frequency) for wf in profile_b if wf.word in lookup
    ]
    # fsum is exactly rounded, so the result doesn't depend on which
    # profile drives the loop.
    return math.fsum(shared)


def similarity_matrix(profiles: Sequence[Profile]) -> np.ndarray:
    """Full symmetric n×n score matrix.  The diagonal is left at 0."""
    n = len(profiles)
    matrix = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(i + 1, n):
            matrix[i, j] = matrix[j, i] = similarity(profiles[i], profiles[j])
    return matrix
