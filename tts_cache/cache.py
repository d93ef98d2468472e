"""Filesystem cache for synthesized audio.

Entries live under one directory per plugin id, discovered by name prefix
inside the cache root so repeated runs reuse the same bin:

    <root>/<plugin_id><unique-suffix>/<fingerprint>
"""
from __future__ import annotations

import base64
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

import orjson
from loguru import logger

from .errors import CacheReadError, CacheWriteError
from .schema import CacheEntry


class CacheStore:
	"""Keyed storage of CacheEntry values for one service."""

	def exists(self, key: str) -> bool:  # pragma: no cover - interface
		raise NotImplementedError

	def lookup(self, key: str) -> Optional[CacheEntry]:  # pragma: no cover - interface
		raise NotImplementedError

	def store(self, key: str, entry: CacheEntry) -> None:  # pragma: no cover - interface
		raise NotImplementedError

	def clear(self) -> int:  # pragma: no cover - interface
		raise NotImplementedError


class MemoryCacheStore(CacheStore):
	"""Process-local store with the same contract, mostly for tests."""

	def __init__(self) -> None:
		self.entries: Dict[str, CacheEntry] = {}

	def exists(self, key: str) -> bool:
		return key in self.entries

	def lookup(self, key: str) -> Optional[CacheEntry]:
		return self.entries.get(key)

	def store(self, key: str, entry: CacheEntry) -> None:
		self.entries[key] = entry

	def clear(self) -> int:
		n = len(self.entries)
		self.entries.clear()
		return n


def encode_entry(entry: CacheEntry) -> bytes:
	return orjson.dumps({
		"request_id": entry.request_id,
		"data": base64.b64encode(entry.data).decode("ascii"),
		"mime": entry.mime,
	})


def decode_entry(key: str, raw: bytes) -> CacheEntry:
	try:
		payload = orjson.loads(raw)
		return CacheEntry(
			request_id=payload["request_id"],
			data=base64.b64decode(payload["data"], validate=True),
			mime=payload["mime"],
		)
	except (orjson.JSONDecodeError, KeyError, TypeError, ValueError) as e:
		raise CacheReadError(key, f"corrupt entry ({e})") from e


class DirectoryCacheStore(CacheStore):
	"""One file per fingerprint inside a per-plugin cache directory."""

	def __init__(self, plugin_id: str, cache_path: Optional[str] = None) -> None:
		self.plugin_id = plugin_id
		self.cache_path = cache_path
		self._directory: Optional[Path] = None

	def resolve_root(self) -> Path:
		if self.cache_path:
			root = Path(self.cache_path)
			root.mkdir(parents=True, exist_ok=True)
			return root
		return Path(tempfile.gettempdir())

	def find_directory(self, root: Path) -> Optional[Path]:
		for child in sorted(root.iterdir(), key=lambda p: p.name):
			if child.is_dir() and child.name.startswith(self.plugin_id):
				return child
		return None

	def create_directory(self, root: Path) -> Path:
		# mkstemp's exclusive create reserves a unique name; swap the file for a dir
		while True:
			fd, placeholder = tempfile.mkstemp(prefix=self.plugin_id, dir=str(root))
			os.close(fd)
			path = Path(placeholder)
			path.unlink()
			try:
				path.mkdir()
			except FileExistsError:
				# name taken again between unlink and mkdir
				continue
			break
		logger.info(f"Created cache directory {path}")
		return path

	def resolve_directory(self) -> Path:
		if self._directory is None:
			try:
				root = self.resolve_root()
				self._directory = self.find_directory(root) or self.create_directory(root)
			except OSError as e:
				raise CacheWriteError(str(self.cache_path or tempfile.gettempdir()), str(e)) from e
		return self._directory

	@property
	def directory(self) -> Path:
		return self.resolve_directory()

	def entry_path(self, key: str) -> Path:
		if not key or key in {".", ".."} or "/" in key or os.sep in key:
			raise CacheReadError(key, "invalid cache key")
		return self.directory / key

	def exists(self, key: str) -> bool:
		return self.entry_path(key).is_file()

	def lookup(self, key: str) -> Optional[CacheEntry]:
		path = self.entry_path(key)
		if not path.is_file():
			return None
		try:
			raw = path.read_bytes()
		except OSError as e:
			raise CacheReadError(key, str(e)) from e
		return decode_entry(key, raw)

	def store(self, key: str, entry: CacheEntry) -> None:
		path = self.entry_path(key)
		try:
			path.write_bytes(encode_entry(entry))
		except OSError as e:
			raise CacheWriteError(str(path), str(e)) from e
		logger.debug(f"Stored cache entry {key} ({len(entry.data)} bytes)")

	def clear(self) -> int:
		n = 0
		for child in self.directory.iterdir():
			if child.is_file():
				try:
					child.unlink()
				except OSError as e:
					raise CacheWriteError(str(child), str(e)) from e
				n += 1
		return n


__all__ = ["CacheStore", "MemoryCacheStore", "DirectoryCacheStore", "encode_entry", "decode_entry"]
