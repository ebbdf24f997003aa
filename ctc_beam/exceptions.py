"""
Exceptions raised by the CTC beam search decoder.

All errors are validation failures raised before any decoding work starts.
"""


class CTCDecodeError(ValueError):
    """Base class for decoder errors"""


class InvalidVocabulary(CTCDecodeError):
    """Symbol table is not a bijection onto 0..V-1 or blank index is out of range"""


class InvalidArgument(CTCDecodeError):
    """Search parameter (e.g. beam width) is invalid"""


class InvalidInput(CTCDecodeError):
    """Log-probability matrix does not match the vocabulary"""
