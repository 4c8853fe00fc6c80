## fluxo — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any
from dataclasses import dataclass, field


class source_line(str):
    """Script line that remembers where it came from in the original text."""
    lineno: int = 0

    def __new__(cls, text: str, lineno: int = 0):
        self = super().__new__(cls, text)
        self.lineno = lineno
        return self


@dataclass
class WindowSize:
    width: int = 0
    height: int = 0


@dataclass
class WindowPosition:
    x: int = 0
    y: int = 0


# Host-owned; the interpreter may populate `library` and mutate `data` in place.
@dataclass
class WindowRecord:
    id: str
    title: str = ""
    app_type: str = ""
    size: WindowSize = field(default_factory=WindowSize)
    data: Any = None
    library: dict | None = None
    position: WindowPosition = field(default_factory=WindowPosition)
    z_index: int = 0
    is_minimized: bool = False
    is_maximized: bool = False

    @classmethod
    def from_dict(cls, raw: dict) -> "WindowRecord":
        size, pos = raw.get('size') or {}, raw.get('position') or {}
        return cls(id=str(raw['id']), title=raw.get('title') or '', app_type=raw.get('appType') or '',
                   size=WindowSize(size.get('width', 0), size.get('height', 0)),
                   data=raw.get('data'), library=raw.get('library'),
                   position=WindowPosition(pos.get('x', 0), pos.get('y', 0)),
                   z_index=raw.get('zIndex', 0),
                   is_minimized=raw.get('isMinimized', False), is_maximized=raw.get('isMaximized', False))

    def to_dict(self) -> dict:
        out = {
            'id': self.id, 'appType': self.app_type, 'title': self.title,
            'isMinimized': self.is_minimized, 'isMaximized': self.is_maximized,
            'position': {'x': self.position.x, 'y': self.position.y},
            'size': {'width': self.size.width, 'height': self.size.height},
            'zIndex': self.z_index,
        }
        if self.data is not None: out['data'] = self.data
        if self.library is not None: out['library'] = self.library
        return out


@dataclass
class ExportedFunction:
    name: str
    params: list[str]
    body: str
