"""
Pytest configuration and shared fixtures for decoder tests.

This module provides:
1. Vocabularies (tiny 'ab' alphabet and the default English one)
2. A builder for frame-peaked log-probability matrices
3. Random log-probability matrices
"""

from typing import Callable

import numpy as np
import pytest
import torch

from ctc_beam import EN_VOCABULARY, CTCBeamSearch, Vocabulary


# =============================================================================
# PYTEST MARKERS
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# VOCABULARIES
# =============================================================================


@pytest.fixture
def ab_vocab() -> Vocabulary:
    """Two-symbol alphabet 'a'=0, 'b'=1 with blank at 2 (no space symbol)."""
    return Vocabulary({'a': 0, 'b': 1}, blank_index=2)


@pytest.fixture
def en_vocab() -> Vocabulary:
    return EN_VOCABULARY


@pytest.fixture
def ab_decoder(ab_vocab) -> CTCBeamSearch:
    return CTCBeamSearch(ab_vocab)


@pytest.fixture
def en_decoder(en_vocab) -> CTCBeamSearch:
    return CTCBeamSearch(en_vocab)


# =============================================================================
# MATRIX BUILDERS
# =============================================================================


@pytest.fixture
def make_frames() -> Callable[..., np.ndarray]:
    """
    Fixture providing a function that builds a [T, V] log-probability matrix
    from a frame string.

    Each character of the string is one time step; '-' is the blank. The
    named label gets probability `peak`, the rest is spread evenly.
    """
    def build(vocab: Vocabulary, frames: str, peak: float = 0.9) -> np.ndarray:
        num_classes = vocab.size
        rest = (1.0 - peak) / (num_classes - 1)
        matrix = np.full((len(frames), num_classes), rest)
        for t, frame in enumerate(frames):
            index = vocab.blank_index if frame == '-' else vocab.char_to_index[frame]
            matrix[t, index] = peak
        return np.log(matrix)

    return build


@pytest.fixture
def random_log_probs() -> Callable[..., torch.Tensor]:
    """Fixture providing seeded random [T, V] log-softmax matrices."""
    def build(num_steps: int, num_classes: int, seed: int = 42) -> torch.Tensor:
        torch.manual_seed(seed)
        return torch.randn(num_steps, num_classes, dtype=torch.float64).log_softmax(-1)

    return build

