from functools import wraps


class ExpressionError(Exception):
    pass


class LexError(ExpressionError):
    pass


class IncompleteInputError(LexError):
    pass


class ParseError(ExpressionError):
    pass


class EvaluationError(ExpressionError):
    pass


class UnboundVariableError(EvaluationError, KeyError):
    '''
    Raised when an expression references a name missing from the bindings.
    '''
    def __init__(self, name):
        super().__init__('Unbound variable {}'.format(repr(name)))
        self.name = name

    # KeyError would repr() the message otherwise.
    __str__ = Exception.__str__


class StackError(EvaluationError):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator that converts exceptions raised by an operation into
    EvaluationErrors.

    Passes through ExpressionErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ExpressionError:
                raise
            except Exception as e:
                raise EvaluationError(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator
