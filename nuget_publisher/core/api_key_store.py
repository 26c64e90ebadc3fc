#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/api_key_store.py - API key file read/write abstraction
#
# Single source of truth for all ~/.config/nuget-publisher/api_keys operations.
# The CLI, the GUI and the publish orchestrator delegate here.

import os

from .config import API_KEY_ENV, API_KEY_FILE
from .errors import ConfigurationError
from .translation_utils import _


def _split_entry(line):
    """Split one key file line into `(source, key)`"""
    scheme = line.find('://')
    sep = line.find('=', scheme + 3 if scheme >= 0 else 0)

    # Trailing '=' is base64 padding of a bare key, not a separator
    if sep <= 0 or not line[sep:].strip('='):
        return "default", line
    return line[:sep].strip(), line[sep + 1:].strip()


class ApiKeyStore:
    """Read/write feed API keys from the XDG config file.

    File format, one entry per line:
        https://nuget.pkg.github.com/org/index.json=ghp_key   # key for one feed
        oy2_key                                               # "default" key
        # comment lines are ignored
    """

    def __init__(self, path=None):
        self.path = os.path.expanduser(path or API_KEY_FILE)

    def read_all(self) -> list[tuple[str, str]]:
        """Return all `(source, key)` pairs from the key file.

        Bare keys (no ``source=`` prefix) are returned with source ``"default"``.
        The key starts after the first ``=`` following the source URL, so
        keys may themselves contain ``=``.

        Raises ConfigurationError when the file exists but cannot be read.
        """
        entries: list[tuple[str, str]] = []
        if not os.path.exists(self.path):
            return entries

        try:
            with open(self.path, encoding='utf-8') as f:
                for raw in f:
                    line = raw.strip()
                    if not line or line.startswith('#'):
                        continue
                    entries.append(_split_entry(line))
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                _("Cannot read API key file {0}: {1}").format(self.path, getattr(e, 'strerror', None) or e)
            ) from e
        return entries

    def write_all(self, entries: list[tuple[str, str]]) -> bool:
        """Overwrite the key file with *entries* and set permissions 600.

        Returns ``True`` on success, ``False`` on any write error.
        """
        try:
            os.makedirs(os.path.dirname(self.path), exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                for source, key in entries:
                    f.write(f"{key}\n" if source == "default" else f"{source}={key}\n")
            os.chmod(self.path, 0o600)
            return True
        except OSError:
            return False

    def get_key(self, source: str) -> str:
        """Return the key for *source*.

        The ``NUGET_API_KEY`` environment variable wins over the file; then
        the entry for *source*, then the first default key. Returns an empty
        string when nothing matches.
        """
        env_key = os.environ.get(API_KEY_ENV, "").strip()
        if env_key:
            return env_key

        default = ""
        for entry_source, key in self.read_all():
            if entry_source.rstrip('/').lower() == source.rstrip('/').lower():
                return key
            if entry_source == "default" and not default:
                default = key
        return default

    def upsert(self, source: str, key: str) -> bool:
        """Add or update the key for *source*.

        Returns ``True`` on success.
        """
        name = source or "default"
        updated = [(s, k) for s, k in self.read_all() if s.lower() != name.lower()]
        updated.append((name, key))
        return self.write_all(updated)

    def delete(self, source: str) -> bool:
        """Remove the entry for *source*.

        Returns ``True`` on success.
        """
        filtered = [(s, k) for s, k in self.read_all() if s.lower() != source.lower()]
        return self.write_all(filtered)
