"""Name-keyed handler registries.

Element handlers receive (tag, context) and are keyed by qualified tag
name. Macro renderers receive (call, context) and are keyed by macro name.
Both registries are filled at import time and only read afterwards.
"""

from typing import Callable, Dict, Optional


class HandlerRegistry:
    """A mapping from names to handler callables.

    Example:
        >>> handlers = HandlerRegistry("element")
        >>> @handlers.register("hr")
        ... def convert_rule(tag, ctx):
        ...     return "---"
    """

    def __init__(self, kind: str):
        self.kind = kind
        self._handlers: Dict[str, Callable] = {}

    def register(self, *names: str) -> Callable[[Callable], Callable]:
        """Decorator registering a handler under one or more names.

        Raises:
            ValueError: If a name already has a handler
        """
        def decorator(func: Callable) -> Callable:
            for name in names:
                if name in self._handlers:
                    raise ValueError(f"Duplicate {self.kind} handler for '{name}'")
                self._handlers[name] = func
            return func
        return decorator

    def get(self, name: str) -> Optional[Callable]:
        return self._handlers.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._handlers


element_handlers = HandlerRegistry("element")
macro_handlers = HandlerRegistry("macro")
