from __future__ import annotations

import math

import numpy as np
import pytest

from core.profiler import WordFrequency, build_profile
from core.scorer import similarity, similarity_matrix

BOOK1 = "THE cat SAT on THE MAT"
BOOK2 = "A cat sat on a hat"


def test_worked_example():
    assert similarity(build_profile(BOOK1), build_profile(BOOK2)) == pytest.approx(0.75)


def test_disjoint_profiles_score_zero():
    assert similarity(build_profile("apple banana"), build_profile("cherry date")) == 0.0


def test_empty_profile_scores_zero():
    assert similarity((), build_profile(BOOK1)) == 0.0
    assert similarity(build_profile(BOOK1), ()) == 0.0
    assert similarity((), ()) == 0.0


def test_symmetric():
    texts = [
        BOOK1,
        BOOK2,
        "one one two three three three four",
        "three four four five one",
        "",
    ]
    profiles = [build_profile(t, top_words=3) for t in texts]
    for a in profiles:
        for b in profiles:
            assert similarity(a, b) == similarity(b, a)


def test_uses_smaller_frequency():
    a = (WordFrequency("X", 0.7), WordFrequency("Y", 0.3))
    b = (WordFrequency("X", 0.2), WordFrequency("Z", 0.8))
    assert similarity(a, b) == pytest.approx(0.2)


def test_self_similarity_is_sum_of_own_frequencies():
    profile = build_profile("alpha beta beta gamma gamma gamma delta", top_words=2)
    assert similarity(profile, profile) == pytest.approx(math.fsum(wf.frequency for wf in profile))


def test_self_similarity_bounds_subset_score():
    profile = build_profile("alpha beta beta gamma gamma gamma")
    subset = profile[:2]
    assert similarity(profile, profile) >= similarity(profile, subset)


def test_similarity_matrix():
    profiles = [build_profile(t) for t in (BOOK1, BOOK2, "ship sea")]
    m = similarity_matrix(profiles)
    assert m.shape == (3, 3)
    assert np.allclose(m, m.T)
    assert np.all(np.diag(m) == 0.0)
    assert m[0, 1] == pytest.approx(0.75)
    assert m[0, 2] == 0.0


def test_similarity_matrix_empty():
    assert similarity_matrix([]).shape == (0, 0)
