## fluxo — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import WindowRecord, WindowSize
from .errors import *
from .runtime import Runtime, NO_OUTPUT

_RUNTIME = Runtime()

def __getattr__(name):
    return getattr(_RUNTIME, name)
