"""Bridge to the Amazon Polly speech backend.

The API is intentionally small: a backend turns ``(text, options)`` into
audio bytes plus a content type, and ``SynthesisGateway.invoke`` wraps that
into a CacheEntry or a BackendError.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from .errors import BackendError, ConfigError, TtsError
from .schema import CacheEntry

CLIENT_VERSION = "2016-06-10"


@dataclass
class BackendResponse:
    audio: bytes
    content_type: str


class SpeechBackend:
    """Protocol-like base class."""

    def synthesize(self, text: str, options: Mapping[str, Any]) -> BackendResponse:  # pragma: no cover - interface
        raise NotImplementedError


def client_kwargs(client_options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Translate service client options into ``boto3.client`` keyword args."""
    kwargs = dict(client_options or {})
    if "version" in kwargs:
        kwargs.setdefault("api_version", kwargs.pop("version"))
    if "region" in kwargs:
        kwargs.setdefault("region_name", kwargs.pop("region"))
    return kwargs


class PollyBackend(SpeechBackend):
    """Amazon Polly ``SynthesizeSpeech`` via boto3."""

    def __init__(self, client_options: Optional[Mapping[str, Any]] = None, client=None) -> None:
        if client is None:
            try:
                client = boto3.client("polly", **client_kwargs(client_options))
            except (BotoCoreError, TypeError, ValueError) as e:
                raise ConfigError(f"Cannot create Polly client: {e}") from e
        self.client = client

    def synthesize(self, text: str, options: Mapping[str, Any]) -> BackendResponse:
        params = dict(options)
        params["Text"] = text
        try:
            resp = self.client.synthesize_speech(**params)
            stream = resp["AudioStream"]
            try:
                audio = stream.read()
            finally:
                stream.close()
        except ClientError as e:
            err = e.response.get("Error", {})
            raise BackendError(err.get("Message") or str(e), code=err.get("Code")) from e
        except BotoCoreError as e:
            raise BackendError(str(e)) from e
        return BackendResponse(audio=audio, content_type=resp.get("ContentType", "application/octet-stream"))


class SynthesisGateway:
    def __init__(self, backend: SpeechBackend) -> None:
        self.backend = backend

    def invoke(self, text: str, options: Mapping[str, Any], request_id: str) -> CacheEntry:
        try:
            resp = self.backend.synthesize(text, options)
        except TtsError:
            raise
        except Exception as e:
            logger.error(f"Speech backend failed for {request_id}: {e}")
            raise BackendError(str(e) or type(e).__name__) from e
        return CacheEntry(request_id=request_id, data=resp.audio, mime=resp.content_type)


__all__ = ["BackendResponse", "SpeechBackend", "PollyBackend", "SynthesisGateway", "client_kwargs"]
