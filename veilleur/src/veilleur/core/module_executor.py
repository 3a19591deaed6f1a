"""
Module executor - runs source text as an in-memory module.

Sources never touch the filesystem. Each execution gets its own globals
dict; the only names visible to the executed code are builtins, the
module context (exports, require, module, __filename, __dirname) and the
globals explicitly injected by the caller.
"""

import ast
import builtins
import importlib
import os
import types
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

WRAPPER_PARAMS = "exports, require, module, __filename, __dirname"
WRAPPER_TEMPLATE = "(lambda " + WRAPPER_PARAMS + ": (\n{source}\n))"


def wrap(source: str) -> str:
    """
    Wrap an expression source as a module factory.

    The wrapped text evaluates to a lambda taking the module context and
    returning the value of `source`.

    Example:
        >>> wrap("1")
        '(lambda exports, require, module, __filename, __dirname: (\\n1\\n))'
    """
    return WRAPPER_TEMPLATE.format(source=source)


class GlobalTable:
    """
    Named slots injected into executed modules.

    Only names a caller explicitly asks for are injected; nothing is
    written to the host process's builtins or module globals.
    """

    def __init__(self):
        """Initialize empty table."""
        self._slots: Dict[str, Any] = {}

    def publish(self, name: str, value: Any) -> None:
        """Store a value under `name`, replacing any previous value."""
        self._slots[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        """Get the value published under `name`."""
        return self._slots.get(name, default)

    def __contains__(self, name: str) -> bool:
        return name in self._slots

    def names(self) -> List[str]:
        """Published slot names in publication order."""
        return list(self._slots)

    def snapshot(self, names: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """
        Copy published slots.

        Args:
            names: Restrict to these names (unpublished names are skipped)

        Returns:
            Dict suitable for ExecutionContext.injected
        """
        if names is None:
            return dict(self._slots)
        return {name: self._slots[name] for name in names if name in self._slots}

    def clear(self) -> None:
        """Drop every slot."""
        self._slots.clear()


# Process-wide table; the seed value is published here.
shared_globals = GlobalTable()


@dataclass
class ExecutionContext:
    """
    Context passed to an executed module.

    Attributes:
        filename: Virtual path of the module
        dirname: Directory part of filename
        injected: Extra globals visible to the module
        exports: Export dict handed to the module
        module: Module handle exposing `exports` and `filename`
        require: Import function available to the module
    """

    filename: str = "<memory>"
    dirname: str = ""
    injected: Dict[str, Any] = field(default_factory=dict)
    exports: Dict[str, Any] = field(default_factory=dict)
    module: Any = None
    require: Callable[[str], Any] = importlib.import_module

    def __post_init__(self):
        if self.module is None:
            self.module = types.SimpleNamespace(
                exports=self.exports, filename=self.filename
            )

    @classmethod
    def for_file(
        cls, path: str, injected: Optional[Dict[str, Any]] = None
    ) -> "ExecutionContext":
        """
        Build a context for a virtual file path.

        Args:
            path: Virtual path of the source
            injected: Extra globals visible to the module
        """
        return cls(
            filename=path,
            dirname=os.path.dirname(path),
            injected=dict(injected or {}),
        )

    def arguments(self) -> tuple:
        """Positional arguments matching WRAPPER_PARAMS."""
        return (self.exports, self.require, self.module, self.filename, self.dirname)

    def namespace(self) -> Dict[str, Any]:
        """Fresh globals dict for one execution."""
        namespace: Dict[str, Any] = {
            "__builtins__": builtins,
            "__name__": f"veilleur.memory.{_module_name(self.filename)}",
            "__file__": self.filename,
        }
        namespace.update(zip(WRAPPER_PARAMS.split(", "), self.arguments()))
        namespace.update(self.injected)
        return namespace


class ModuleExecutor:
    """
    Executes in-memory sources.

    Expression sources (e.g. `lambda: 42`) yield the expression's value.
    Statement sources (module bodies) yield what they export through
    `module.exports` / `exports`, or the executed module object when
    they export nothing.
    """

    def execute(
        self, source: str, context: Optional[ExecutionContext] = None
    ) -> Any:
        """
        Execute source text in an isolated namespace.

        Args:
            source: Source text
            context: Module context (default: anonymous context)

        Returns:
            Expression value, or the exported value (or module) for
            statement sources

        Raises:
            Exception: Anything raised while compiling or running the source
        """
        context = context or ExecutionContext()
        namespace = context.namespace()

        if not source.strip():
            return self._execute_module(source, context, namespace)

        try:
            tree = ast.parse(wrap(source), context.filename, "eval")
        except SyntaxError:
            return self._execute_module(source, context, namespace)

        # Source that closes the wrapper's parentheses is not an expression.
        if not isinstance(tree.body, ast.Lambda):
            return self._execute_module(source, context, namespace)

        factory = eval(compile(tree, context.filename, "eval"), namespace)
        return factory(*context.arguments())

    def _execute_module(
        self, source: str, context: ExecutionContext, namespace: Dict[str, Any]
    ) -> Any:
        """
        Run statement source as the body of a fresh module.

        Returns:
            module.exports if the body rebound it or filled `exports`,
            otherwise the module itself
        """
        code = compile(source, context.filename, "exec")

        module = types.ModuleType(namespace["__name__"])
        module.__dict__.update(namespace)
        exec(code, module.__dict__)

        exported = getattr(context.module, "exports", context.exports)
        if exported is not context.exports or context.exports:
            return exported
        return module


def _module_name(path: str) -> str:
    """Derive a dotted-safe module name from a virtual path."""
    stem = os.path.splitext(os.path.basename(path))[0] or "module"
    return "".join(ch if ch.isalnum() else "_" for ch in stem)
