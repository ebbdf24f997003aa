"""
Tests for the label vocabulary
"""
import pytest

from ctc_beam import (
    CHARSETS,
    EN_BLANK_INDEX,
    EN_VOCABULARY,
    InvalidVocabulary,
    Vocabulary,
    get_charset,
    get_vocabulary,
)


class TestVocabulary:
    """Tests for Vocabulary construction and lookups"""

    def test_mappings(self, ab_vocab):
        assert ab_vocab.char_to_index['a'] == 0
        assert ab_vocab.char_to_index['b'] == 1
        assert ab_vocab.index_to_char[0] == 'a'
        assert ab_vocab.index_to_char[1] == 'b'
        assert ab_vocab.blank_index == 2
        assert ab_vocab.size == 3
        assert len(ab_vocab) == 3

    def test_round_trip_every_symbol(self, en_vocab):
        for symbol, index in en_vocab.char_to_index.items():
            assert en_vocab.index_to_char[en_vocab.char_to_index[symbol]] == symbol
            assert en_vocab.char_to_index[en_vocab.index_to_char[index]] == index

    def test_mappings_are_read_only(self, ab_vocab):
        with pytest.raises(TypeError):
            ab_vocab.char_to_index['c'] = 3
        with pytest.raises(TypeError):
            ab_vocab.index_to_char[3] = 'c'

    def test_copies_input_mapping(self):
        mapping = {'a': 0, 'b': 1}
        vocab = Vocabulary(mapping, blank_index=2)
        mapping['c'] = 3

        assert 'c' not in vocab
        assert vocab.size == 3

    def test_blank_may_have_a_symbol(self):
        vocab = Vocabulary({'-': 0, 'a': 1}, blank_index=0)

        assert vocab.size == 2
        assert vocab.decode([1, 0, 1]) == 'aa'

    def test_blank_first(self):
        vocab = Vocabulary({'a': 1, 'b': 2}, blank_index=0)
        assert vocab.size == 3
        assert vocab.decode([2, 1]) == 'ba'

    def test_space_index(self, en_vocab, ab_vocab):
        assert en_vocab.space_index == 0
        assert ab_vocab.space_index is None

    def test_space_symbol_disabled(self):
        vocab = Vocabulary({' ': 0, 'a': 1}, blank_index=2, space_symbol=None)
        assert vocab.space_index is None

    def test_space_symbol_on_blank_is_not_a_space(self):
        vocab = Vocabulary({'a': 0, 'b': 1, ' ': 2}, blank_index=2)

        assert vocab.char_to_index[' '] == vocab.blank_index
        assert vocab.space_index is None

    def test_decode_skips_blank(self, ab_vocab):
        assert ab_vocab.decode([0, 2, 1, 2]) == 'ab'

    def test_decode_with_separator(self):
        vocab = Vocabulary.from_charset(['HELLO', 'WORLD'], separator=' ')
        assert vocab.decode([0, 1]) == 'HELLO WORLD'
        assert vocab.encode('WORLD HELLO') == [1, 0]

    def test_encode(self, en_vocab):
        assert en_vocab.encode("it's") == [9, 20, 27, 19]

    def test_encode_unknown_symbol(self, ab_vocab):
        with pytest.raises(ValueError):
            ab_vocab.encode('abc')


class TestVocabularyValidation:
    """Tests for InvalidVocabulary"""

    def test_empty_mapping(self):
        with pytest.raises(InvalidVocabulary):
            Vocabulary({}, blank_index=0)

    def test_shared_index(self):
        with pytest.raises(InvalidVocabulary, match="share index"):
            Vocabulary({'a': 0, 'b': 0}, blank_index=1)

    @pytest.mark.parametrize("blank_index", [-1, 3, 100])
    def test_blank_out_of_range(self, blank_index):
        with pytest.raises(InvalidVocabulary):
            Vocabulary({'a': 0, 'b': 1}, blank_index=blank_index)

    def test_gap_in_indices(self):
        with pytest.raises(InvalidVocabulary, match="without gaps"):
            Vocabulary({'a': 0, 'c': 3}, blank_index=1)

    @pytest.mark.parametrize("index", [-1, 1.0, '1', True])
    def test_bad_index_type(self, index):
        with pytest.raises(InvalidVocabulary):
            Vocabulary({'a': 0, 'b': index}, blank_index=2)

    def test_duplicate_charset_symbols(self):
        with pytest.raises(InvalidVocabulary):
            Vocabulary.from_charset('abca')

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            Vocabulary({'a': 0, 'b': 0}, blank_index=1)


class TestCharsets:
    """Tests for predefined charsets"""

    def test_en_vocabulary(self):
        assert EN_VOCABULARY.size == 29
        assert EN_VOCABULARY.blank_index == EN_BLANK_INDEX == 28
        assert EN_VOCABULARY.index_to_char[0] == ' '
        assert EN_VOCABULARY.index_to_char[1] == 'a'
        assert EN_VOCABULARY.index_to_char[26] == 'z'
        assert EN_VOCABULARY.index_to_char[27] == "'"

    def test_from_charset_blank_last(self):
        vocab = Vocabulary.from_charset('abc')
        assert vocab.blank_index == 3
        assert dict(vocab.char_to_index) == {'a': 0, 'b': 1, 'c': 2}

    def test_from_charset_inner_blank(self):
        vocab = Vocabulary.from_charset('abc', blank_index=0)
        assert dict(vocab.char_to_index) == {'a': 1, 'b': 2, 'c': 3}
        assert vocab.size == 4

    def test_get_vocabulary(self):
        vocab = get_vocabulary('latin_lower')
        assert vocab.size == 37
        assert vocab.blank_index == 36
        assert vocab.space_index is None

    def test_get_vocabulary_en_matches_default(self):
        vocab = get_vocabulary('en')
        assert dict(vocab.char_to_index) == dict(EN_VOCABULARY.char_to_index)
        assert vocab.blank_index == EN_VOCABULARY.blank_index

    def test_get_charset_unknown(self):
        with pytest.raises(ValueError, match="Unknown charset"):
            get_charset('klingon')

    def test_charsets_have_unique_symbols(self):
        for name, charset in CHARSETS.items():
            assert len(set(charset)) == len(charset), name
