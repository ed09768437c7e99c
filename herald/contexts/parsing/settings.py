"""
Parser settings for the parsing context.

Settings are a structured OmegaConf config: defaults live on the dataclass and
an optional YAML file (HERALD_PARSER_CONFIG or an explicit path) overrides
them. Unknown keys in the YAML file are rejected by OmegaConf.

Example YAML:
    match_threshold: 0.4
    schedule_time: "08:30"
    filler_prefixes:
      - please
      - remind me to
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from herald.contexts.parsing.normalizer import DEFAULT_FILLER_PREFIXES
from herald.utils.timestamp import parse_clock

load_dotenv()

# Fuzzy distance at or below which a project fragment is accepted (0.0 = exact)
DEFAULT_MATCH_THRESHOLD = 0.5

# Captured project fragments shorter than this are ignored
DEFAULT_MIN_FRAGMENT_LENGTH = 2


@dataclass
class ParserSettings:
    """
    Tunables for the dictation pipeline.

    Attributes:
        match_threshold: Maximum accepted fuzzy distance for a project match
        min_fragment_length: Minimum trimmed length of a captured project fragment
        schedule_time: Clock time ("HH:MM") for schedule dates given without a time
        deadline_time: Clock time ("HH:MM") for deadlines given without a time
        filler_prefixes: Leading phrases stripped from the title
    """

    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    min_fragment_length: int = DEFAULT_MIN_FRAGMENT_LENGTH
    schedule_time: str = "09:00"
    deadline_time: str = "17:00"
    filler_prefixes: List[str] = field(default_factory=lambda: list(DEFAULT_FILLER_PREFIXES))

    def validate(self) -> "ParserSettings":
        """Check ranges and clock formats; returns self for chaining."""
        if not 0.0 <= self.match_threshold <= 1.0:
            raise ValueError(f"match_threshold must be within [0, 1], got {self.match_threshold}")
        if self.min_fragment_length < 1:
            raise ValueError("min_fragment_length must be at least 1")
        # Fail at load time rather than on the first dated utterance
        parse_clock(self.schedule_time)
        parse_clock(self.deadline_time)
        return self


def load_parser_settings(config_path: Optional[Path] = None) -> ParserSettings:
    """
    Load parser settings, merging a YAML override file onto the defaults.

    Args:
        config_path: Optional YAML file (defaults to HERALD_PARSER_CONFIG env
            variable; plain defaults when neither is set)

    Returns:
        ParserSettings instance

    Raises:
        ValueError: If a merged value is out of range or malformed
        FileNotFoundError: If the config file does not exist
    """
    if config_path is None and os.getenv("HERALD_PARSER_CONFIG"):
        config_path = Path(os.getenv("HERALD_PARSER_CONFIG"))

    config = OmegaConf.structured(ParserSettings)

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Parser config not found: {config_path}")
        config = OmegaConf.merge(config, OmegaConf.load(config_path))

    return OmegaConf.to_object(config).validate()
