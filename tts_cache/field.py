"""Templated text field that resolves to synthesized audio."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from jinja2 import StrictUndefined, Template
from jinja2 import TemplateError

from .errors import ConfigError
from .schema import CacheEntry
from .service import TtsService


class TtsField:
    """Renders ``text`` against a data row and synthesizes the result.

    ``text`` is a Jinja2 template, e.g. ``"<speak>Hello {{ name }}</speak>"``.
    """

    def __init__(self, text: str, service: TtsService, request_options: Optional[Mapping[str, Any]] = None) -> None:
        try:
            self.template = Template(text, undefined=StrictUndefined)
        except TemplateError as e:
            raise ConfigError(f"Invalid text template: {e}") from e
        self.service = service
        self.request_options: Dict[str, Any] = dict(request_options or {})

    def text(self, data: Mapping[str, Any]) -> str:
        try:
            return self.template.render(**data)
        except TemplateError as e:
            raise ConfigError(f"Cannot render text template: {e}") from e

    def get_value(self, data: Mapping[str, Any]) -> CacheEntry:
        return self.service.synthesize(self.text(data), self.request_options)


__all__ = ["TtsField"]
