from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from stockvoice.voice import CONFIG_PATH

logger = logging.getLogger(__name__)


# =============================================================================
# VoiceConfig (args/voice.yaml)
# =============================================================================

class RecognitionConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    language: str = Field(default="en-US")
    continuous: bool = Field(default=False)
    interim_results: bool = Field(default=True)
    max_alternatives: int = Field(default=1, ge=1)


class ParsingConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    default_unit: str = Field(default="piece", min_length=1)
    default_position: str = Field(default="unspecified", min_length=1)
    fuzzy_match_threshold: float = Field(default=0.6, ge=0.0, le=1.0)


class VoiceConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    recognition: RecognitionConfig = Field(default_factory=RecognitionConfig)
    parsing: ParsingConfig = Field(default_factory=ParsingConfig)


def load_voice_config(path: str | Path | None = None) -> VoiceConfig:
    """Load and validate voice settings, falling back to defaults.

    A missing file is not an error; an unreadable or invalid one is logged
    and replaced by the defaults.
    """
    yaml_path = Path(path) if path is not None else CONFIG_PATH

    try:
        if yaml_path.exists():
            with open(yaml_path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            raw = {}

        return VoiceConfig.model_validate(raw)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        logger.warning(f"Config validation failed for {yaml_path.name}: {e}, using defaults")
        return VoiceConfig()
