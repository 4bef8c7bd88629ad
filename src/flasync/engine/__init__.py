from .chain import Chain
from .exceptions import ChainAttachError, FlasyncError, TaskSignatureError
from .tasks import Done, ErrorHandler, Task

__all__ = [
    "Chain",
    "ChainAttachError",
    "FlasyncError",
    "TaskSignatureError",
    "Done",
    "ErrorHandler",
    "Task",
]
