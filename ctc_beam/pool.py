"""
Candidate pool for one time step of beam search
"""
from typing import Dict, List, Optional

from .candidate import BeamEntry


class BeamList:
    """
    Store the candidate BeamEntries of one time step

    Entries that decode to the same text are merged, so the many
    uncollapsed alignments of one string share a single entry.

    Args:
        size: Beam width (maximum entries kept by sort())
    """

    def __init__(self, size: int):
        self._size = size
        self._beams: Dict[str, BeamEntry] = {}
        self._beam_list: List[BeamEntry] = []

    def add(self, beam: Optional[BeamEntry]) -> None:
        """
        Add a BeamEntry into the list

        If the text of the entry already exists in the list, its probabilities
        are merged into the existing one (in place). Otherwise the entry is
        appended. None (no successor) is ignored.

        Args:
            beam: New candidate entry
        """
        if beam is None:
            return

        label = beam.text
        existing = self._beams.get(label)
        if existing is not None:
            existing.merge(beam)
        else:
            self._beams[label] = beam
            self._beam_list.append(beam)

    def sort(self) -> List[BeamEntry]:
        """
        Order entries from high to low total probability, keeping at most size

        The sort is stable, so ties keep insertion order.

        Returns:
            Pruned list of entries
        """
        ranked = sorted(self._beam_list, key=lambda beam: beam.p_total, reverse=True)
        return ranked[:self._size]

    @property
    def size(self) -> int:
        """Beam width"""
        return self._size

    def __len__(self) -> int:
        return len(self._beam_list)

    def __contains__(self, label: str) -> bool:
        return label in self._beams
