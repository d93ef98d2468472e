"""tts_cache

Text-to-speech plugin that synthesizes audio through Amazon Polly and keeps
results in a filesystem cache keyed by a request fingerprint.

Primary entrypoints:
 - service.py (validate -> normalize -> fingerprint -> cache -> backend)
 - cache.py (directory-scan filesystem cache)
 - gateway.py (Polly backend + error wrapping)
 - field.py (templated text field glue)
 - cli.py (Typer CLI)
"""

__all__ = [
    "cache",
    "config",
    "field",
    "gateway",
    "normalize",
    "service",
    "validator",
]
