from functools import wraps


class RPNError(Exception):
    '''
    Bad user input on the console. The brain itself never raises these.
    '''
    pass


def wrap_user_errors(fmt):
    '''
    Decorator that turns unexpected exceptions into RPNErrors, with message
    fmt formatted with the call's arguments.

    Passes through RPNErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except Exception as e:
                raise RPNError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator
