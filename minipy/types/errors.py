
class MiniPyError(Exception):
    """ Base class for all minipy errors"""
    pass

class MiniPySyntaxError(MiniPyError):
    """ Raised when source text cannot be read into a program"""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        if line:
            message = f"line {line}, column {column}: {message}"
        super().__init__(message)

class MiniPyRuntimeError(MiniPyError):
    """ Base class for errors raised while a program runs"""
    pass

class MiniPyNameError(MiniPyRuntimeError):
    """ Raised when a variable or function name is not bound"""

class MiniPyTypeError(MiniPyRuntimeError):
    """ Raised when an operator or builtin gets an operand of the wrong type"""

class MiniPyArityError(MiniPyRuntimeError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class MiniPyIndexError(MiniPyRuntimeError):
    """ Raised when a list index is outside [0, length)"""

class MiniPyDivisionError(MiniPyRuntimeError):
    """ Raised on integer division or modulo by zero"""

class MiniPyValueError(MiniPyRuntimeError):
    """ Raised when a builtin gets an argument of the right type but a bad value"""

class MiniPyRecursionError(MiniPyRuntimeError):
    """ Raised when calls nest deeper than the configured recursion limit"""
