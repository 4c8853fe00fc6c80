## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark


class FluxoError(Exception):
    def __init__(self, message: str = "", *, fluxo_line=None, fluxo_token=None):
        """Base class for all Fluxo-raised errors."""
        super().__init__(message)
        self.fluxo_line: str = fluxo_line
        self.fluxo_token: str = fluxo_token

    @property
    def lineno(self) -> int | None:
        return getattr(self.fluxo_line, 'lineno', None) or None

class FluxoParseError(FluxoError):
    def __init__(self, message, *, fluxo_line=None, filename=None, line=None, column=None, token=None):
        super().__init__(message, fluxo_line=fluxo_line, fluxo_token=token)
        self.filename = filename
        self.line = line if line is not None else self.lineno
        self.column = column
        self.token = token

class FluxoIncompleteParse(FluxoParseError, lark.exceptions.ParseError):
    """Block opened with `{` but the script ended before it was closed."""
    def __init__(self, message, *, fluxo_line=None, filename=None, line=None, column=None, token=None):
        super().__init__(message, fluxo_line=fluxo_line, filename=filename, line=line, column=column, token=token)

class FluxoNameError(FluxoError, NameError):
    pass

class FluxoTypeError(FluxoError, TypeError):
    pass
