"""
Decoder factory - builds a CTCBeamSearch from a DecoderConfig
"""
import logging
from pathlib import Path
from typing import Optional, Union

from .config import DecoderConfig, load_config
from .decoder import CTCBeamSearch
from .vocabulary import CHARSETS, get_vocabulary

logger = logging.getLogger(__name__)


def create_decoder(
    config: Optional[Union[DecoderConfig, str, Path]] = None,
    **overrides
) -> CTCBeamSearch:
    """
    Create a CTC beam search decoder

    Args:
        config: DecoderConfig, path to a YAML config file, or None for defaults
        **overrides: DecoderConfig fields replacing the configured values

    Returns:
        CTCBeamSearch instance

    Examples:
        decoder = create_decoder()
        decoder = create_decoder("decoder.yaml")
        decoder = create_decoder(charset="latin_lower", space_symbol=None)

    Raises:
        ValueError: If the charset is unknown or an override is not a config field
    """
    if config is None:
        config = DecoderConfig()
    elif not isinstance(config, DecoderConfig):
        config = load_config(Path(config))

    if overrides:
        config = DecoderConfig.from_dict({**config.to_dict(), **overrides})

    if config.charset not in CHARSETS:
        available = ', '.join(CHARSETS.keys())
        raise ValueError(
            f"Unknown charset: '{config.charset}'. "
            f"Available charsets: {available}"
        )

    vocabulary = get_vocabulary(
        config.charset,
        blank_index=config.blank_index,
        space_symbol=config.space_symbol,
        separator=config.separator,
    )
    logger.info(f"Created decoder for charset '{config.charset}' ({vocabulary.size} classes)")

    return CTCBeamSearch(
        vocabulary,
        beam_width=config.beam_width,
        from_logits=config.from_logits,
    )

