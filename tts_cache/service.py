"""Synthesize-with-cache orchestration."""
from __future__ import annotations

import time
from typing import Any, Mapping, Optional

from loguru import logger

from .cache import CacheStore, DirectoryCacheStore
from .config import ServiceConfig, build_config
from .errors import CacheReadError, TtsError
from .gateway import PollyBackend, SpeechBackend, SynthesisGateway
from .normalize import TEXT_KEY, fingerprint, normalize
from .schema import CacheEntry, SynthesisOutcome, SynthesisRequest
from .validator import validate_markup


class TtsService:
    """Amazon Polly TTS service with an optional filesystem cache.

    The backend connection is built once per instance (or injected) and
    shared by every call.
    """

    plugin_id = "tts.amazon"

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        backend: Optional[SpeechBackend] = None,
        store: Optional[CacheStore] = None,
    ) -> None:
        self.config = config or build_config()
        self.backend = backend or PollyBackend(self.config.client_options)
        self.gateway = SynthesisGateway(self.backend)
        self.store = store or DirectoryCacheStore(self.plugin_id, self.config.cache_path)

    @property
    def name(self) -> str:
        return self.config.name

    def run(self, request: SynthesisRequest) -> SynthesisOutcome:
        """Validate, normalize, fingerprint, look up, invoke, store.

        Every TtsError ends up in ``outcome.error``; nothing is retried.
        """
        probe = f"TTS {self.name}({self.plugin_id})"
        start = time.time()
        try:
            entry, cached = self._run(request)
        except TtsError as e:
            elapsed = time.time() - start
            logger.warning(f"{probe} failed after {elapsed:.3f}s: {e}")
            return SynthesisOutcome(error=e, latency_s=elapsed)
        elapsed = time.time() - start
        logger.info(f"{probe} {'cache hit' if cached else 'synthesized'} {entry.request_id} in {elapsed:.3f}s")
        return SynthesisOutcome(entry=entry, cached=cached, latency_s=elapsed)

    def _run(self, request: SynthesisRequest):
        validate_markup(request.text)
        options = normalize(request.text, request.options, self.config.request_options)
        request_id = fingerprint(options)
        use_cache = self.config.cache
        if use_cache:
            entry = self.store.lookup(request_id)
            if entry is not None:
                if entry.request_id != request_id:
                    raise CacheReadError(request_id, f"entry belongs to request {entry.request_id}")
                return entry, True
            logger.debug(f"Cache miss for {request_id}")
        entry = self.gateway.invoke(options[TEXT_KEY], options, request_id)
        if use_cache:
            self.store.store(request_id, entry)
        return entry, False

    def synthesize(self, text: str, options: Optional[Mapping[str, Any]] = None) -> CacheEntry:
        """Raising convenience wrapper around ``run``."""
        request = SynthesisRequest(text=text, options=dict(options or {}))
        return self.run(request).unwrap()


__all__ = ["TtsService"]
