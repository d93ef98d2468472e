# Error taxonomy for the synthesis path


class TtsError(Exception):
    """Base exception for all synthesis errors."""
    pass


class ValidationError(TtsError):
    """Raised when input text is not well-formed markup."""

    EXCERPT_LIMIT = 200

    def __init__(self, text: str, reason: str = ""):
        self.text = text
        self.reason = reason
        excerpt = text if len(text) <= self.EXCERPT_LIMIT else text[: self.EXCERPT_LIMIT] + "..."
        message = f"Received not valid XML: {excerpt!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class CacheReadError(TtsError):
    """Raised when a cache entry exists but cannot be read back."""

    def __init__(self, key: str, message: str):
        self.key = key
        self.message = message
        super().__init__(f"Failed to read cache entry {key}: {message}")


class BackendError(TtsError):
    """Raised when the speech backend rejects or fails a request."""

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code
        super().__init__(f"[{code}] {message}" if code else message)


class ConfigError(TtsError):
    """Raised for configuration-related problems."""
    pass


class CacheWriteError(TtsError):
    """Raised when the cache directory or an entry cannot be created or written."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Failed to write cache at {path}: {message}")
