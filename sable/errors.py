
class SableError(Exception):
    """ Base class for all Sable errors"""
    pass

class ReadError(SableError):
    """ Raised when source text cannot be turned into a datum"""
    pass

class ReadIncomplete(ReadError):
    """ Raised when the input ends before a datum is complete"""
    pass

class ReadMalformed(ReadError):
    """ Raised when the input can never become a valid datum"""
    pass

class SableSyntaxError(SableError):
    """ Raised when a special form is used with the wrong shape"""

    def __init__(self, message: str, form=None):
        super().__init__(message)
        self.form = form

class UnboundVariable(SableError):
    """ Raised when a symbol is looked up or set before it is bound"""

    def __init__(self, name):
        super().__init__(f"Variable {name} is not bound!")
        self.name = name

class SableTypeError(SableError):
    """ Raised when the types of arguments passed to a function are incorrect"""

class PrimitiveArgumentError(SableTypeError):
    """ Raised by a primitive on a wrong argument count or argument type"""

class ArityError(SableTypeError):
    """ Raised when a compound procedure receives the wrong number of arguments"""

class ApplicationError(SableError):
    """ Raised when a value that is neither a procedure nor a macro is applied"""

class EvaluationDepthError(SableError):
    """ Raised when evaluation recurses deeper than the host allows"""

class SchemeExit(SableError):
    """ Raised by the exit primitive to end the running program"""

    def __init__(self, code: int = 0):
        super().__init__(f"exit {code}")
        self.code = code
