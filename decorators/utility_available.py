from functools import wraps
import shutil

from errors import ExecutionError


def check_utility_available(command_attr):
    """
    Decorator to check that the executable stored in ``self.<command_attr>``
    can be found (on PATH or as a path) before running the decorated method.
    Raises ExecutionError when it cannot.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            utility_name = getattr(self, command_attr)
            if not shutil.which(utility_name):
                self._messenger.error(f"{utility_name} utility not found in PATH. Please install it.")
                self._logger.error(f"{utility_name} utility not found")
                raise ExecutionError(f"Executable not found: {utility_name}", command=utility_name)
            return func(self, *args, **kwargs)
        return wrapper
    return decorator
