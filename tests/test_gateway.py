import io

import boto3
import pytest
from botocore.exceptions import EndpointConnectionError
from botocore.stub import Stubber

from tts_cache.errors import BackendError, ConfigError
from tts_cache.gateway import PollyBackend, SynthesisGateway, client_kwargs

from conftest import FakeBackend


class FakePollyClient:
    def __init__(self, audio=b"OggS-data", content_type="audio/ogg", error=None):
        self.audio = audio
        self.content_type = content_type
        self.error = error
        self.params = None

    def synthesize_speech(self, **params):
        self.params = params
        if self.error is not None:
            raise self.error
        return {"AudioStream": io.BytesIO(self.audio), "ContentType": self.content_type}


def _polly_client():
    return boto3.client(
        "polly",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def test_polly_backend_reads_stream_and_content_type():
    client = FakePollyClient()
    resp = PollyBackend(client=client).synthesize("Hello", {"Text": "Hello", "OutputFormat": "ogg_vorbis", "SampleRate": "16000"})
    assert resp.audio == b"OggS-data"
    assert resp.content_type == "audio/ogg"
    assert client.params == {"Text": "Hello", "OutputFormat": "ogg_vorbis", "SampleRate": "16000"}


def test_polly_client_error_becomes_backend_error():
    client = _polly_client()
    with Stubber(client) as stubber:
        stubber.add_client_error(
            "synthesize_speech",
            service_error_code="ThrottlingException",
            service_message="Rate exceeded",
        )
        with pytest.raises(BackendError) as exc:
            PollyBackend(client=client).synthesize("Hello", {"OutputFormat": "mp3", "VoiceId": "Joanna"})
    assert exc.value.code == "ThrottlingException"
    assert exc.value.message == "Rate exceeded"


def test_polly_transport_error_becomes_backend_error():
    client = FakePollyClient(error=EndpointConnectionError(endpoint_url="https://polly.example"))
    with pytest.raises(BackendError) as exc:
        PollyBackend(client=client).synthesize("Hello", {})
    assert "polly.example" in str(exc.value)


def test_client_kwargs_maps_option_names():
    assert client_kwargs({"version": "2016-06-10", "region": "eu-west-1"}) == {
        "api_version": "2016-06-10",
        "region_name": "eu-west-1",
    }
    assert client_kwargs(None) == {}


def test_polly_backend_builds_client_once(monkeypatch):
    created = []

    def fake_client(service_name, **kwargs):
        created.append((service_name, kwargs))
        return FakePollyClient()

    monkeypatch.setattr("tts_cache.gateway.boto3.client", fake_client)
    backend = PollyBackend({"version": "2016-06-10", "region_name": "us-east-1"})
    backend.synthesize("a", {})
    backend.synthesize("b", {})
    assert created == [("polly", {"api_version": "2016-06-10", "region_name": "us-east-1"})]


def test_bad_client_options_are_config_error():
    with pytest.raises(ConfigError):
        PollyBackend({"not_a_boto_option": 1})


def test_gateway_wraps_response_into_entry():
    entry = SynthesisGateway(FakeBackend(content_type="audio/mpeg")).invoke("Hi", {"Text": "Hi"}, "abc123")
    assert entry.request_id == "abc123"
    assert entry.data == b"AUDIO:Hi"
    assert entry.mime == "audio/mpeg"


def test_gateway_passes_backend_error_through():
    err = BackendError("denied", code="AccessDenied")
    with pytest.raises(BackendError) as exc:
        SynthesisGateway(FakeBackend(fail_with=err)).invoke("Hi", {}, "k")
    assert exc.value is err


def test_gateway_wraps_unexpected_errors():
    with pytest.raises(BackendError) as exc:
        SynthesisGateway(FakeBackend(fail_with=TimeoutError())).invoke("Hi", {}, "k")
    assert "TimeoutError" in str(exc.value)
