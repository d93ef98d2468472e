import pytest

from tts_cache.config import build_config
from tts_cache.errors import BackendError
from tts_cache.gateway import BackendResponse, SpeechBackend


class FakeBackend(SpeechBackend):
    """Records calls and returns deterministic audio."""

    def __init__(self, content_type="audio/ogg", fail_with=None):
        self.calls = []
        self.content_type = content_type
        self.fail_with = fail_with

    def synthesize(self, text, options):
        self.calls.append((text, dict(options)))
        if self.fail_with is not None:
            raise self.fail_with
        return BackendResponse(audio=f"AUDIO:{text}".encode("utf-8"), content_type=self.content_type)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def cached_config(tmp_path):
    return build_config({"cache": True, "cachePath": str(tmp_path / "cache")})


@pytest.fixture
def failing_backend():
    return FakeBackend(fail_with=BackendError("Rate exceeded", code="ThrottlingException"))
