"""Tests for voice.yaml loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from stockvoice.voice.config_models import ParsingConfig, VoiceConfig, load_voice_config


class TestDefaults:
    def test_model_defaults(self):
        config = VoiceConfig()
        assert config.recognition.language == "en-US"
        assert config.recognition.continuous is False
        assert config.recognition.interim_results is True
        assert config.recognition.max_alternatives == 1
        assert config.parsing.default_unit == "piece"
        assert config.parsing.default_position == "unspecified"
        assert config.parsing.fuzzy_match_threshold == 0.6

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_bounds(self, threshold: float):
        with pytest.raises(ValidationError):
            ParsingConfig(fuzzy_match_threshold=threshold)


class TestLoadVoiceConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        assert load_voice_config(tmp_path / "nope.yaml") == VoiceConfig()

    def test_valid_file(self, voice_yaml):
        path = voice_yaml(
            "recognition:\n"
            "  language: hi-IN\n"
            "parsing:\n"
            "  fuzzy_match_threshold: 0.8\n"
            "  spoken_currency: inr\n"
        )
        config = load_voice_config(path)
        assert config.recognition.language == "hi-IN"
        assert config.parsing.fuzzy_match_threshold == 0.8
        # unknown keys are kept
        assert config.parsing.model_extra == {"spoken_currency": "inr"}

    def test_empty_file(self, voice_yaml):
        assert load_voice_config(voice_yaml("")) == VoiceConfig()

    @pytest.mark.parametrize("content", [
        "parsing:\n  fuzzy_match_threshold: 1.5\n",
        "recognition: [\n",
        "recognition:\n  max_alternatives: zero\n",
    ])
    def test_invalid_file_falls_back(self, voice_yaml, content: str):
        assert load_voice_config(voice_yaml(content)) == VoiceConfig()

    def test_repository_config(self, repo_voice_yaml: Path):
        assert repo_voice_yaml.exists()
        config = load_voice_config(repo_voice_yaml)
        assert load_voice_config() == config
        assert config.recognition.language == "en-IN"
        assert config.parsing.default_unit == "piece"
