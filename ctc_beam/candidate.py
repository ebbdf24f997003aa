"""
Beam entry: one prefix hypothesis of CTC beam search.

Tracks the collapsed label sequence and the log-probability mass of every
uncollapsed path that decodes to it, split by whether the path ends in a
blank or in a (possibly repeated) copy of the last label.
"""
import math
from typing import Iterator, Optional, Sequence, Tuple

from .log_math import LOG_ZERO, log_sum_exp
from .vocabulary import Vocabulary


class BeamEntry:
    """
    Represent a char index sequence and its probabilities

    Attributes:
        sequence: Collapsed label indices (blanks removed, repeats merged)
        last_index: Label a repeat would collapse into (None for the empty root)
        p_blank: Log probability of paths ending in blank
        p_non_blank: Log probability of paths ending in last_index
        p_total: log_sum_exp(p_blank, p_non_blank)
        parent: Entry this one was derived from (provenance only)
    """

    __slots__ = (
        'sequence', 'last_index', 'vocabulary',
        'p_blank', 'p_non_blank', 'p_total',
        'parent', '_text',
    )

    def __init__(
        self,
        sequence: Tuple[int, ...],
        vocabulary: Vocabulary,
        last_index: Optional[int] = None,
        p_blank: float = LOG_ZERO,
        p_non_blank: float = LOG_ZERO,
        parent: Optional['BeamEntry'] = None,
    ):
        self.sequence = tuple(sequence)
        self.vocabulary = vocabulary
        if last_index is None and self.sequence:
            last_index = self.sequence[-1]
        self.last_index = last_index
        self.p_blank = p_blank
        self.p_non_blank = p_non_blank
        self.p_total = log_sum_exp(p_blank, p_non_blank)
        self.parent = parent
        self._text: Optional[str] = None

    @classmethod
    def root(cls, vocabulary: Vocabulary) -> 'BeamEntry':
        """Empty hypothesis before the first time step (probability 1, ending in blank)"""
        return cls((), vocabulary, p_blank=0.0)

    @property
    def is_root(self) -> bool:
        return self.last_index is None

    @property
    def text(self) -> str:
        """Decoded string, computed once"""
        if self._text is None:
            self._text = self.vocabulary.decode(self.sequence)
        return self._text

    @property
    def probability(self) -> float:
        """Total probability in linear space"""
        return math.exp(self.p_total)

    def copy(self, row: Sequence[float], blank_log_prob: float) -> Optional['BeamEntry']:
        """
        Successor for a time step that doesn't change the decoded string

        For the current string 'abc':
        - 'abc-' + '-' ==> 'abc'
        - 'abc'  + '-' ==> 'abc'
        - 'abc'  + 'c' ==> 'abc'

        Args:
            row: Log probabilities of the current time step
            blank_log_prob: Log probability of blank at the current time step

        Returns:
            New entry with the same sequence, or None for the empty root
            when the vocabulary has a leading space symbol (extend() folds
            the blank into the space merge there)
        """
        if self.is_root:
            if self.vocabulary.space_index is not None:
                return None
            # No leading-space merge: '' + '-' ==> ''
            return BeamEntry(
                self.sequence,
                self.vocabulary,
                p_blank=self.p_total + blank_log_prob,
                parent=self,
            )

        # Paths ending in blank ('ab-') or in a repeat ('abb') both take a
        # trailing blank. p_total covers both; an entry fresh from extend()
        # has p_blank == LOG_ZERO, so p_total is its non-blank mass alone.
        p_blank = self.p_total + blank_log_prob
        p_non_blank = self.p_non_blank + row[self.last_index]

        return BeamEntry(
            self.sequence,
            self.vocabulary,
            last_index=self.last_index,
            p_blank=p_blank,
            p_non_blank=p_non_blank,
            parent=self,
        )

    def extend(self, index: int, log_prob: float, blank_log_prob: float) -> Optional['BeamEntry']:
        """
        Successor that appends a new label to the decoded string

        - 'abc-' + 'c' ==> 'abcc'
        - 'abc'  + 'd' ==> 'abcd'

        Args:
            index: New label index
            log_prob: Log probability of the new label at this time step
            blank_log_prob: Log probability of blank at this time step

        Returns:
            Extended entry, or None when the label would collapse into the
            last one without an intervening blank
        """
        if self.is_root and index == self.vocabulary.space_index:
            # Leading space: merge space and blank, string stays ''
            p_blank = self.p_total + log_sum_exp(log_prob, blank_log_prob)
            return BeamEntry(self.sequence, self.vocabulary, p_blank=p_blank, parent=self)

        if index == self.last_index:
            if self.p_blank == LOG_ZERO:
                # No record of a blank after the last label
                return None
            # 'ab' holding mass for 'ab-': 'ab-' + 'b' ==> 'abb'
            p_non_blank = self.p_blank + log_prob
        else:
            # 'ab' + 'c' ==> 'abc'
            p_non_blank = self.p_total + log_prob

        return BeamEntry(
            self.sequence + (index,),
            self.vocabulary,
            last_index=index,
            p_non_blank=p_non_blank,
            parent=self,
        )

    def merge(self, other: 'BeamEntry') -> None:
        """Fold the probability mass of an entry with the same text into this one"""
        self.p_blank = log_sum_exp(other.p_blank, self.p_blank)
        self.p_non_blank = log_sum_exp(other.p_non_blank, self.p_non_blank)
        self.p_total = log_sum_exp(other.p_total, self.p_total)

    def lineage(self) -> Iterator['BeamEntry']:
        """Walk back through the entries this one was derived from"""
        entry = self.parent
        while entry is not None:
            yield entry
            entry = entry.parent

    def to_str(self) -> str:
        """Dump string and prob"""
        return f"{self.text}, ({self.p_total})"

    def __repr__(self) -> str:
        return (
            f"BeamEntry(text={self.text!r}, p_total={self.p_total:.4f}, "
            f"p_blank={self.p_blank:.4f}, p_non_blank={self.p_non_blank:.4f})"
        )
