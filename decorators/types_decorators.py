from functools import wraps
from inspect import signature
from typing import Any, Callable, TypeVar, cast

F = TypeVar('F', bound=Callable[..., Any])

def not_blank(*not_blank_args: str) -> Callable[[F], F]:
    """Decorator to ensure specified string arguments are neither None nor whitespace."""
    def decorator(func: F) -> F:
        sig = signature(func)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            bound_args = sig.bind(*args, **kwargs)
            bound_args.apply_defaults()

            for arg_name in not_blank_args:
                value = bound_args.arguments.get(arg_name)
                if value is None or not str(value).strip():
                    raise ValueError(f"Argument '{arg_name}' cannot be blank")

            return func(*args, **kwargs)
        return cast(F, wrapper)
    return decorator
