"""
Label vocabulary for CTC decoding

Bijective mapping between output symbols and the class indices of the
acoustic/optical model, plus the index reserved for the CTC blank.
"""
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from .exceptions import InvalidVocabulary


class Vocabulary:
    """
    Symbol <-> index table with a designated CTC blank index

    The mapped indices together with the blank index must cover 0..V-1
    exactly, where V is the number of model output classes. The blank does
    not need a visible symbol; when it has one, that symbol never appears
    in decoded text.

    Args:
        char_to_index: Mapping of symbol to class index
        blank_index: Class index of the CTC blank
        space_symbol: Symbol treated like blank when it leads a sequence
            (None disables the leading-space merge, as does a space
            symbol that names the blank)
        separator: String joined between symbols when decoding
            ('' for character alphabets, ' ' for word/gloss alphabets)

    Example:
        >>> vocab = Vocabulary({'a': 0, 'b': 1}, blank_index=2)
        >>> vocab.decode([0, 1, 0])
        'aba'
    """

    def __init__(
        self,
        char_to_index: Mapping[str, int],
        blank_index: int,
        space_symbol: Optional[str] = ' ',
        separator: str = '',
    ):
        if not char_to_index:
            raise InvalidVocabulary("Vocabulary must contain at least one symbol")

        index_to_char: Dict[int, str] = {}
        for char, index in char_to_index.items():
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise InvalidVocabulary(
                    f"Index for symbol {char!r} must be a non-negative int, got {index!r}"
                )
            if index in index_to_char:
                raise InvalidVocabulary(
                    f"Symbols {index_to_char[index]!r} and {char!r} share index {index}"
                )
            index_to_char[index] = char

        if isinstance(blank_index, bool) or not isinstance(blank_index, int):
            raise InvalidVocabulary(f"Blank index must be an int, got {blank_index!r}")

        indices = set(index_to_char) | {blank_index}
        size = len(indices)
        if not 0 <= blank_index < size:
            raise InvalidVocabulary(
                f"Blank index {blank_index} is outside the index range 0..{size - 1}"
            )
        if indices != set(range(size)):
            missing = sorted(set(range(size)) - indices)
            raise InvalidVocabulary(
                f"Indices must cover 0..{size - 1} without gaps, missing: {missing}"
            )

        self._char_to_index = MappingProxyType(dict(char_to_index))
        self._index_to_char = MappingProxyType(index_to_char)
        self._blank_index = blank_index
        self._size = size
        self._separator = separator
        space_index = self._char_to_index.get(space_symbol) if space_symbol is not None else None
        # A blank drawn with the space symbol is already handled as blank
        self._space_index = None if space_index == blank_index else space_index

    @classmethod
    def from_charset(
        cls,
        charset: Iterable[str],
        blank_index: Optional[int] = None,
        space_symbol: Optional[str] = ' ',
        separator: str = '',
    ) -> 'Vocabulary':
        """
        Build a vocabulary from an ordered collection of symbols

        Args:
            charset: String of characters (or list of words), without blank
            blank_index: Index of blank token (default: len(charset))
            space_symbol: See Vocabulary
            separator: See Vocabulary

        Returns:
            Vocabulary with symbols numbered in charset order
        """
        symbols = list(charset)
        if len(set(symbols)) != len(symbols):
            raise InvalidVocabulary("Charset contains duplicate symbols")

        if blank_index is None:
            blank_index = len(symbols)

        # Symbols after an inner blank shift up by one
        char_to_index = {}
        for position, symbol in enumerate(symbols):
            char_to_index[symbol] = position if position < blank_index else position + 1

        return cls(char_to_index, blank_index, space_symbol=space_symbol, separator=separator)

    @property
    def char_to_index(self) -> Mapping[str, int]:
        """Read-only symbol to index mapping"""
        return self._char_to_index

    @property
    def index_to_char(self) -> Mapping[int, str]:
        """Read-only index to symbol mapping"""
        return self._index_to_char

    @property
    def blank_index(self) -> int:
        return self._blank_index

    @property
    def space_index(self) -> Optional[int]:
        """Index merged with blank at the start of a sequence, if any"""
        return self._space_index

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def size(self) -> int:
        """Number of model output classes, blank included"""
        return self._size

    def __len__(self) -> int:
        return self._size

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._char_to_index

    def decode(self, indices: Iterable[int]) -> str:
        """Convert an index sequence to text, skipping blanks"""
        return self._separator.join(
            self._index_to_char[index] for index in indices if index != self._blank_index
        )

    def encode(self, text: str) -> List[int]:
        """
        Convert text to class indices

        Character alphabets split text per character; alphabets with a
        separator split on it.

        Raises:
            ValueError: If text contains a symbol outside the vocabulary
        """
        symbols = text.split(self._separator) if self._separator else list(text)
        indices = []
        for symbol in symbols:
            if symbol not in self._char_to_index:
                raise ValueError(f"Unknown symbol: {symbol!r}")
            indices.append(self._char_to_index[symbol])
        return indices

    def __repr__(self) -> str:
        return f"Vocabulary(size={self._size}, blank_index={self._blank_index})"


# Character sets for different languages (blank appended after the last symbol)
CHARSETS = {
    # Speech alphabet: space, lowercase letters, apostrophe
    "en": " abcdefghijklmnopqrstuvwxyz'",

    # Latin lowercase + digits (CRNN default)
    "latin_lower": "0123456789abcdefghijklmnopqrstuvwxyz",

    # Basic Latin + digits
    "latin": "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ",
}

# Blank index (-) for the English alphabet
EN_BLANK_INDEX = 28
EN_CHARS = CHARSETS["en"]
EN_CHAR_MAP: Mapping[str, int] = MappingProxyType(
    {char: index for index, char in enumerate(EN_CHARS)}
)

# Vocabulary for English
EN_VOCABULARY = Vocabulary(EN_CHAR_MAP, EN_BLANK_INDEX)


def get_charset(name: str) -> str:
    """Get predefined charset by name"""
    if name in CHARSETS:
        return CHARSETS[name]
    raise ValueError(f"Unknown charset: {name}. Available: {list(CHARSETS.keys())}")


def get_vocabulary(name: str, **kwargs) -> Vocabulary:
    """
    Build the vocabulary for a predefined charset

    Args:
        name: Charset name (e.g., 'en', 'latin_lower')
        **kwargs: Forwarded to Vocabulary.from_charset

    Returns:
        Vocabulary with blank as the last index unless overridden
    """
    return Vocabulary.from_charset(get_charset(name), **kwargs)
