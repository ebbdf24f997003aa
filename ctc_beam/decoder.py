"""
CTC beam search decoder

Walks the time steps of a [T, V] log-probability matrix, expanding every
surviving prefix with a copy step (string unchanged) and an extend step per
non-blank label, merging candidates that decode to the same text and
pruning to the beam width.
"""
import logging
import time
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import torch
import torch.nn.functional as F

from .candidate import BeamEntry
from .config import DEFAULT_BEAM_WIDTH
from .exceptions import InvalidArgument, InvalidInput
from .pool import BeamList
from .vocabulary import Vocabulary

logger = logging.getLogger(__name__)

LogProbMatrix = Union[Sequence[Sequence[float]], np.ndarray, torch.Tensor]


def as_log_prob_matrix(
    matrix: LogProbMatrix,
    num_classes: int,
    from_logits: bool = False,
) -> np.ndarray:
    """
    Validate a time-major matrix and convert it to a float64 numpy array

    The input is never modified.

    Args:
        matrix: [T, V] log probabilities (nested sequences, ndarray or tensor)
        num_classes: Expected row length V (blank included)
        from_logits: Apply log_softmax over each row first

    Returns:
        [T, V] float64 array

    Raises:
        InvalidInput: If T == 0, the matrix is not 2D or a row length differs from V
    """
    if isinstance(matrix, torch.Tensor):
        tensor = matrix.detach().cpu()
    elif isinstance(matrix, np.ndarray):
        tensor = torch.from_numpy(np.array(matrix, dtype=np.float64))
    else:
        rows = list(matrix)
        for t, row in enumerate(rows):
            try:
                row_length = len(row)
            except TypeError as e:
                raise InvalidInput(f"Row {t} is not a sequence of log probabilities") from e
            if row_length != num_classes:
                raise InvalidInput(
                    f"Row {t} has {row_length} log probabilities, expected {num_classes}"
                )
        tensor = torch.tensor(rows, dtype=torch.float64) if rows else torch.empty(0, num_classes)

    if tensor.dim() != 2:
        raise InvalidInput(f"Expected 2D [T, V] matrix, got {tensor.dim()}D")
    if tensor.size(0) == 0:
        raise InvalidInput("Log probability matrix has no time steps")
    if tensor.size(1) != num_classes:
        raise InvalidInput(
            f"Rows have {tensor.size(1)} log probabilities, expected {num_classes}"
        )

    tensor = tensor.double()
    if from_logits:
        tensor = F.log_softmax(tensor, dim=-1)

    return tensor.numpy().copy()


class CTCBeamSearch:
    """
    CTC prefix beam search over a fixed vocabulary

    The decoder holds no per-search state; one instance can serve any number
    of search() calls, including concurrent ones.

    Args:
        vocabulary: Label vocabulary (blank included)
        beam_width: Width used when search() is called without one
        from_logits: Inputs are raw logits rather than log probabilities

    Example:
        >>> decoder = CTCBeamSearch(EN_VOCABULARY)
        >>> beams = decoder.search(log_probs, width=10)
        >>> beams[0].text
    """

    def __init__(
        self,
        vocabulary: Vocabulary,
        beam_width: int = DEFAULT_BEAM_WIDTH,
        from_logits: bool = False,
    ):
        self._vocabulary = vocabulary
        self._vocab_size = vocabulary.size
        self._blank_index = vocabulary.blank_index
        self._label_indices = [
            index for index in range(self._vocab_size) if index != self._blank_index
        ]
        self.beam_width = beam_width
        self.from_logits = from_logits

    @property
    def vocabulary(self) -> Vocabulary:
        return self._vocabulary

    def search(self, log_probs: LogProbMatrix, width: Optional[int] = None) -> List[BeamEntry]:
        """
        Run CTC beam search

        Args:
            log_probs: [T, V] time-serial log probabilities
            width: Beam width (default: self.beam_width)

        Returns:
            Up to width entries sorted by descending total log probability

        Raises:
            InvalidArgument: If width is not a positive integer
            InvalidInput: If the matrix is empty or its rows don't match the vocabulary
        """
        if width is None:
            width = self.beam_width
        if isinstance(width, bool) or not isinstance(width, (int, np.integer)) or width < 1:
            raise InvalidArgument(f"Beam width must be a positive integer, got {width!r}")

        matrix = as_log_prob_matrix(log_probs, self._vocab_size, self.from_logits)
        num_steps = matrix.shape[0]
        logger.debug(f"Beam search: T={num_steps}, V={self._vocab_size}, width={width}")
        start = time.perf_counter()

        beams = [BeamEntry.root(self._vocabulary)]

        # Walk over each time step in sequence
        for t, row in enumerate(matrix.tolist()):
            candidates = BeamList(width)
            blank = row[self._blank_index]

            for beam in beams:
                # copy() returns None for an empty root merged through the leading space
                candidates.add(beam.copy(row, blank))
                for index in self._label_indices:
                    candidates.add(beam.extend(index, row[index], blank))

            beams = candidates.sort()
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    f"Step {t + 1}/{num_steps}: {len(candidates)} candidates, "
                    f"best={beams[0].text!r} ({beams[0].p_total:.4f})"
                )

        logger.debug(f"Beam search finished in {time.perf_counter() - start:.4f}s")
        return beams

    def decode(self, log_probs: LogProbMatrix, width: Optional[int] = None) -> List[Tuple[str, float]]:
        """
        Beam search returning (text, total log probability) pairs

        Args:
            log_probs: [T, V] time-serial log probabilities
            width: Beam width (default: self.beam_width)

        Returns:
            List of (text, log_prob), best first
        """
        return [(beam.text, beam.p_total) for beam in self.search(log_probs, width)]

    def best_path(self, log_probs: LogProbMatrix) -> str:
        """
        Greedy decode: argmax at each time step, then CTC collapse

        Args:
            log_probs: [T, V] time-serial log probabilities

        Returns:
            Decoded text
        """
        matrix = as_log_prob_matrix(log_probs, self._vocab_size, self.from_logits)

        collapsed = []
        prev_idx = None
        for idx in np.argmax(matrix, axis=1).tolist():
            # Skip blank token
            if idx == self._blank_index:
                prev_idx = None
                continue
            # Skip repeated characters
            if idx != prev_idx:
                collapsed.append(idx)
            prev_idx = idx

        return self._vocabulary.decode(collapsed)

    def __repr__(self) -> str:
        return (
            f"CTCBeamSearch(vocabulary={self._vocabulary!r}, "
            f"beam_width={self.beam_width}, from_logits={self.from_logits})"
        )
