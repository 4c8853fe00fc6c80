## fluxo — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
import json
from pathlib import Path
from typing import Any, Callable

from .types import WindowRecord
from .errors import FluxoTypeError


def resolve_window_id(windows: list[WindowRecord], pattern: str) -> WindowRecord | None:
    """Map a `window_Id(...)` pattern onto one of the host's window records.

    Resolution order: `window-1` and `window-11` always mean the first record, then
    an exact id match, then anything that looks like a vsstudio window, and finally
    the first record.  Only an empty registry resolves to nothing.
    """
    if pattern.startswith('window-'):
        if pattern.replace('window-', '', 1) in ('1', '11'):
            return windows[0] if windows else None

    for window in windows:
        if window.id == pattern:
            return window

    for window in windows:
        if 'vsstudio' in window.title.lower() or window.app_type == 'vsstudio':
            return window

    return windows[0] if windows else None


def default_library(record: WindowRecord) -> dict:
    return {
        'mainSection': {
            'name': 'mainSection',
            'type': 'section',
            'content': f"Main section for window {record.id}",
        },
        'crossSection': {
            'name': 'crossSection',
            'type': 'section',
            'data': {'x': 0, 'y': 0, 'width': record.size.width, 'height': record.size.height},
        },
        'components': [],
    }


def _key(key):
    # Script values used as keys may be structures; those are keyed by their text.
    return key if key is None or isinstance(key, (str, int, float)) else str(key)


class _Handle:
    """Named group of window operations, e.g. `w.database`."""
    _methods: tuple[str, ...] = ()

    def __init__(self, record: WindowRecord):
        self._record = record

    def method(self, name: str) -> Callable | None:
        return getattr(self, name) if name in self._methods else None

    def as_structure(self) -> dict:
        return {}


class LibraryHandle(_Handle):
    _methods = ('find',)

    def find(self, key=None, *_):
        if self._record.library is None:
            self._record.library = default_library(self._record)
        return self._record.library.get(_key(key))


class DatabaseHandle(_Handle):
    _methods = ('write', 'read')

    def write(self, key=None, value=None, *_):
        if self._record.data is None:
            self._record.data = {}
        elif not isinstance(self._record.data, dict):
            raise FluxoTypeError(f"window {self._record.id} data is not writable", fluxo_token=self._record.id)
        self._record.data[_key(key)] = value
        return {'success': True, 'key': key, 'value': value}

    def read(self, key=None, *_):
        if not isinstance(self._record.data, dict):
            return None
        return self._record.data.get(_key(key))


class WindowObject:
    """Capability object bound to one host window record."""

    def __init__(self, record: WindowRecord):
        self.record = record
        self.library = LibraryHandle(record)
        self.database = DatabaseHandle(record)

    @property
    def id(self) -> str:
        return self.record.id

    # Misspelt alias kept for scripts that rely on it.
    @property
    def libary(self) -> LibraryHandle:
        return self.library

    def member(self, name: str) -> Any:
        return getattr(self, name) if name in ('id', 'info', 'library', 'libary', 'database') else None

    def info(self, data=None, *_) -> dict:
        lib = self.record.library if self.record.library is not None else default_library(self.record)
        return {
            'id': self.record.id,
            'title': self.record.title,
            'appType': self.record.app_type,
            'library': lib,
            'libary': lib,
            'data': data if data not in (None, '') else self.record.data,
        }

    def as_structure(self) -> dict:
        return {'id': self.id, 'libary': {}, 'library': {}, 'database': {}}

    def __repr__(self):
        return f"<WindowObject {self.id!r}>"


def load_windows(path: str | os.PathLike) -> list[WindowRecord]:
    raw = json.loads(Path(path).read_text(encoding='utf-8'))
    if isinstance(raw, dict):
        raw = raw.get('windows', [])
    return [WindowRecord.from_dict(item) for item in raw]
