## basicfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark


class BasicError(Exception):
    def __init__(self, message: str = "", *, basic_token=None, basic_meta=None):
        """Base class for all errors raised around the builtin registry."""
        super().__init__(message)
        self.basic_token: str = basic_token
        self.basic_meta: dict = basic_meta

class BasicParseError(BasicError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message, basic_token=token)
        self.filename = filename
        self.line = line
        self.column = column
        self.token = token

class BasicIncompleteParse(BasicParseError, lark.exceptions.ParseError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message, filename=filename, line=line, column=column, token=token)

class BasicNameError(BasicError, NameError):
    """Call of a builtin name that was never registered."""
    pass

class BasicArityError(BasicError, TypeError):
    """Call-site argument count does not match the registered arity."""
    def __init__(self, message: str = "", *, basic_token=None, basic_meta=None, expected=None, supplied=None):
        super().__init__(message, basic_token=basic_token, basic_meta=basic_meta)
        self.expected = expected
        self.supplied = supplied

class BasicRuntimeError(BasicError, RuntimeError):
    """A builtin returned an error object."""
    pass

class BasicValueError(BasicError, ValueError):
    pass


class BasicTypeMissing(BasicError, TypeError):
    pass

class BasicTypeError(BasicError, TypeError):
    """Registration-time problems with Python annotations, or a mismatched interpreter state."""
    pass


class BasicImportError(BasicError, ImportError):
    def __init__(self, message, *, basic_token=None, filename=None, basic_meta=None):
        super().__init__(message, basic_token=basic_token, basic_meta=basic_meta)
        self.filename = filename

class BasicModuleError(BasicImportError):
    pass
