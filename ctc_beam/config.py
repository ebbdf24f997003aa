"""
Configuration settings for the CTC beam search decoder
"""
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# Decoding defaults
DEFAULT_BEAM_WIDTH = 10
DEFAULT_CHARSET = "en"

# Logging level for setup_logging (e.g. DEBUG prints per-step beam statistics)
LOG_LEVEL = os.getenv('CTC_BEAM_LOG_LEVEL', 'INFO').upper()


@dataclass
class DecoderConfig:
    """
    Decoder settings

    Args:
        charset: Predefined charset name (see vocabulary.CHARSETS)
        beam_width: Number of hypotheses kept per time step
        blank_index: Index of blank token (None: after the last symbol)
        space_symbol: Leading symbol merged with blank (None disables)
        separator: String joined between decoded symbols
        from_logits: Inputs are raw logits instead of log probabilities
    """
    charset: str = DEFAULT_CHARSET
    beam_width: int = DEFAULT_BEAM_WIDTH
    blank_index: Optional[int] = None
    space_symbol: Optional[str] = " "
    separator: str = ""
    from_logits: bool = False

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "DecoderConfig":
        """Build a config, rejecting unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {unknown}. Available: {sorted(known)}")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(config_path: Path) -> DecoderConfig:
    """
    Load decoder configuration from YAML file.

    Args:
        config_path: Path to the configuration file

    Returns:
        DecoderConfig (defaults for keys the file omits)
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        values = yaml.safe_load(f) or {}

    if not isinstance(values, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    return DecoderConfig.from_dict(values)


def save_config(config: DecoderConfig, output_path: Path) -> None:
    """Save configuration to YAML file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False)
