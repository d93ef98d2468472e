import pytest

from tts_cache.errors import ConfigError, ValidationError
from tts_cache.field import TtsField
from tts_cache.service import TtsService


def test_field_renders_template_and_synthesizes(cached_config, backend):
    svc = TtsService(cached_config, backend=backend)
    field = TtsField("<speak>Hello {{ name }}</speak>", svc, {"VoiceId": "Joanna"})
    entry = field.get_value({"name": "Ada"})
    assert entry.data == b"AUDIO:<speak>Hello Ada</speak>"
    text, options = backend.calls[0]
    assert options["VoiceId"] == "Joanna"
    assert options["Text"] == "<speak>Hello Ada</speak>"


def test_field_missing_variable_is_config_error(cached_config, backend):
    field = TtsField("Hello {{ name }}", TtsService(cached_config, backend=backend))
    with pytest.raises(ConfigError):
        field.get_value({})
    assert backend.calls == []


def test_field_rendering_malformed_markup_fails_validation(cached_config, backend):
    field = TtsField("<speak>{{ body }}", TtsService(cached_config, backend=backend))
    with pytest.raises(ValidationError):
        field.get_value({"body": "hi"})
    assert backend.calls == []


def test_bad_template_syntax(cached_config, backend):
    with pytest.raises(ConfigError):
        TtsField("Hello {{ name", TtsService(cached_config, backend=backend))
