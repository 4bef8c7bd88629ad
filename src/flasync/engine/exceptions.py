"""
Exception and Error Definitions Module

Defines the exception hierarchy raised by the chain engine itself. Errors raised
by user tasks are never wrapped: they reach the error handler (or the draining
caller) unchanged.

Exception Hierarchy:
    FlasyncError (root)
    ├── TaskSignatureError
    └── ChainAttachError
"""


class FlasyncError(Exception):
    """
    Root exception class for all flasync-specific exceptions.

    Catch this to handle any misuse of the engine in one place.
    """
    pass


class TaskSignatureError(FlasyncError, TypeError):
    """
    Raised when something handed to the engine cannot be called.

    This includes scenarios such as:
    - A non-callable task passed to then() or finally_()
    - A non-callable error handler passed to on_error()
    - A non-callable method passed to asyncify() or async_()
    """
    pass


class ChainAttachError(FlasyncError):
    """
    Raised when a chain is attached to a host twice, or looked up on a host
    that has none.
    """
    pass
