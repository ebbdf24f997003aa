"""
CTC beam search decoding.

Decodes the per-time-step label distributions of a CTC-trained model into
the most probable label strings.

Usage:
    from ctc_beam import CTCBeamSearch, EN_VOCABULARY

    decoder = CTCBeamSearch(EN_VOCABULARY)
    beams = decoder.search(log_probs, width=10)
    print(beams[0].text, beams[0].p_total)
"""

from .candidate import BeamEntry
from .config import DecoderConfig, load_config, save_config
from .decoder import CTCBeamSearch, as_log_prob_matrix
from .exceptions import CTCDecodeError, InvalidArgument, InvalidInput, InvalidVocabulary
from .factory import create_decoder
from .log_math import LOG_ZERO, log_sum_exp
from .pool import BeamList
from .utils import setup_logging
from .vocabulary import (
    CHARSETS,
    EN_BLANK_INDEX,
    EN_CHAR_MAP,
    EN_CHARS,
    EN_VOCABULARY,
    Vocabulary,
    get_charset,
    get_vocabulary,
)

__all__ = [
    "BeamEntry",
    "BeamList",
    "CTCBeamSearch",
    "as_log_prob_matrix",
    "create_decoder",
    "DecoderConfig",
    "load_config",
    "save_config",
    "CTCDecodeError",
    "InvalidArgument",
    "InvalidInput",
    "InvalidVocabulary",
    "LOG_ZERO",
    "log_sum_exp",
    "setup_logging",
    "CHARSETS",
    "EN_BLANK_INDEX",
    "EN_CHAR_MAP",
    "EN_CHARS",
    "EN_VOCABULARY",
    "Vocabulary",
    "get_charset",
    "get_vocabulary",
]
__version__ = "0.1.0"
