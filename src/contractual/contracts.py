"""Contract decorators: @require, @ensure, @invariant.

Contracts are boolean predicates attached to methods. A precondition is
checked before the method body runs, a postcondition after it returns,
and a class invariant both before and after every guarded method.
Failures go to the handler of the active :class:`ContractConfig`; the
wrappers never catch exceptions raised by predicates or method bodies.

Predicates are bound to the receiver the way methods are: if a
predicate's first parameter is named ``self`` (or ``cls``), the receiver
of the decorated method is passed there. Otherwise the predicate gets
only the call arguments. Arguments are fitted to the predicate, so it
need only name the ones it uses::

    class Account:
        @require(lambda amount: amount > 0, "amount must be positive")
        @ensure(lambda self, result, amount: result == self.balance, "returns balance")
        def deposit(self, amount):
            self.balance += amount
            return self.balance
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Iterable
from contextvars import ContextVar
from typing import Any, Callable, TypeVar

from contractual.config import ContractConfig, configure
from contractual.types import ContractualConfigError, ViolationKind

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)

_RECEIVER_NAMES = frozenset({"self", "cls"})
_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_NEVER_GUARDED = frozenset({"__init__", "__new__", "__init_subclass__", "__class_getitem__"})

# ids of instances whose invariant predicate is currently being evaluated
_CHECKING: ContextVar[frozenset[int]] = ContextVar("contractual_checking", default=frozenset())


def _active(config: ContractConfig | None) -> ContractConfig:
    return config if config is not None else configure()


def _parameters(fn: Callable) -> list[inspect.Parameter] | None:
    try:
        return list(inspect.signature(fn).parameters.values())
    except (TypeError, ValueError):
        return None


def _first_param(fn: Callable) -> str | None:
    params = _parameters(fn)
    if params and params[0].kind in _POSITIONAL:
        return params[0].name
    return None


def _check_callable(predicate: Any, decorator: str) -> None:
    if not callable(predicate):
        raise ContractualConfigError(f"@{decorator} predicate must be callable, got {type(predicate).__name__}")


def _check_sync(func: Callable, decorator: str) -> None:
    if inspect.iscoroutinefunction(func):
        raise ContractualConfigError(f"@{decorator} does not support coroutine function {func.__qualname__}")


class _Binding:
    """How a predicate's arguments are derived from a method call.

    Arguments are fitted to the predicate's signature: surplus positionals
    are dropped unless it takes ``*args``, and keywords it does not name are
    dropped unless it takes ``**kwargs``.
    """

    def __init__(self, func: Callable, predicate: Callable) -> None:
        self.receiver_name = _first_param(func)
        self.has_receiver = self.receiver_name in _RECEIVER_NAMES
        self.binds_receiver = self.has_receiver and _first_param(predicate) in _RECEIVER_NAMES

        params = _parameters(predicate)
        if params is None:
            self.max_positional: int | None = None
            self.keywords: frozenset[str] | None = None
            self.positional_names: tuple[str, ...] = ()
            return
        positional = [p for p in params if p.kind in _POSITIONAL]
        takes_varargs = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params)
        takes_varkw = any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params)
        self.max_positional = None if takes_varargs else len(positional)
        self.positional_names = tuple(p.name for p in positional)
        self.keywords = (
            None
            if takes_varkw
            else frozenset(p.name for p in params if p.kind is not inspect.Parameter.POSITIONAL_ONLY)
        )

    def receiver_missing(self, call_args: tuple, call_kwargs: dict[str, Any]) -> bool:
        return self.has_receiver and not call_args and self.receiver_name not in call_kwargs

    def arguments(self, call_args: tuple, call_kwargs: dict[str, Any], *leading: Any) -> tuple[tuple, dict[str, Any]]:
        """Arguments for the predicate, with *leading* placed after the receiver."""
        if not self.has_receiver:
            args = (*leading, *call_args)
        else:
            if call_args:
                receiver, rest = call_args[0], call_args[1:]
            else:
                call_kwargs = dict(call_kwargs)
                receiver, rest = call_kwargs.pop(self.receiver_name), ()
            args = (receiver, *leading, *rest) if self.binds_receiver else (*leading, *rest)

        if self.max_positional is not None:
            args = args[: self.max_positional]
        if self.keywords is None:
            return args, call_kwargs
        filled = set(self.positional_names[: len(args)])
        kwargs = {k: v for k, v in call_kwargs.items() if k in self.keywords and k not in filled}
        return args, kwargs

    def holds(self, predicate: Callable, call_args: tuple, call_kwargs: dict[str, Any], *leading: Any) -> bool:
        args, kwargs = self.arguments(call_args, call_kwargs, *leading)
        return bool(predicate(*args, **kwargs))


def require(predicate: Callable[..., bool], message: str, *, config: ContractConfig | None = None) -> Callable[[F], F]:
    """Decorator that checks a precondition before the method runs.

    The predicate receives the call's arguments. If it returns a falsy
    value the handler is invoked with kind ``Precondition``; unless the
    handler raises, the method still runs and its result is returned.

    Args:
        predicate: Condition over the call arguments.
        message: Static text reported on violation.
        config: Explicit configuration. Defaults to the process-wide one,
            looked up on every call.
    """
    _check_callable(predicate, "require")

    def decorator(func: F) -> F:
        _check_sync(func, "require")
        subject = func.__name__
        binding = _Binding(func, predicate)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            # No receiver: let the method raise its own TypeError.
            if binding.receiver_missing(args, kwargs):
                return func(*args, **kwargs)
            cfg = _active(config)
            if cfg.enabled and not binding.holds(predicate, args, kwargs):
                cfg.report(ViolationKind.PRECONDITION.value, subject, message)
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def ensure(predicate: Callable[..., bool], message: str, *, config: ContractConfig | None = None) -> Callable[[F], F]:
    """Decorator that checks a postcondition after the method returns.

    The predicate receives the return value followed by the original
    arguments. Exceptions from the method propagate and skip the check.
    The result is returned whatever the outcome, unless the handler raises.

    Args:
        predicate: Condition over ``(result, *args, **kwargs)``.
        message: Static text reported on violation.
        config: Explicit configuration. Defaults to the process-wide one.
    """
    _check_callable(predicate, "ensure")

    def decorator(func: F) -> F:
        _check_sync(func, "ensure")
        subject = func.__name__
        binding = _Binding(func, predicate)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if binding.receiver_missing(args, kwargs):
                return func(*args, **kwargs)
            result = func(*args, **kwargs)
            cfg = _active(config)
            if cfg.enabled and not binding.holds(predicate, args, kwargs, result):
                cfg.report(ViolationKind.POSTCONDITION.value, subject, message)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def _evaluate_invariant(predicate: Callable[[Any], bool], instance: Any) -> bool:
    token = _CHECKING.set(_CHECKING.get() | {id(instance)})
    try:
        return bool(predicate(instance))
    finally:
        _CHECKING.reset(token)


def _guard(func: Callable, predicate: Callable[[Any], bool], message: str, config: ContractConfig | None) -> Callable:
    subject = func.__name__

    def check(instance: Any, phase: str) -> None:
        cfg = _active(config)
        if cfg.enabled and not _evaluate_invariant(predicate, instance):
            cfg.report(ViolationKind.INVARIANT.value, subject, f"({phase}) {message}")

    @functools.wraps(func)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        # Calls made from inside the predicate itself are not re-checked.
        if id(self) in _CHECKING.get():
            return func(self, *args, **kwargs)
        check(self, "before")
        result = func(self, *args, **kwargs)
        check(self, "after")
        return result

    return wrapper


def _guarded_names(cls: type, methods: Iterable[str] | None) -> list[str]:
    members = vars(cls)
    if methods is None:
        names = [
            name
            for name, member in members.items()
            if inspect.isfunction(member) and not (name.startswith("__") and name.endswith("__"))
        ]
    else:
        names = list(dict.fromkeys(methods))
        for name in names:
            if name in _NEVER_GUARDED:
                raise ContractualConfigError(f"{cls.__name__}.{name} cannot be guarded by an invariant")
            if not inspect.isfunction(members.get(name)):
                raise ContractualConfigError(f"{cls.__name__} defines no method named '{name}'")

    for name in names:
        _check_sync(members[name], "invariant")
    return names


def invariant(
    predicate: Callable[[Any], bool],
    message: str,
    *,
    methods: Iterable[str] | None = None,
    config: ContractConfig | None = None,
) -> Callable[[C], C]:
    """Class decorator that checks an invariant around every guarded method.

    By default every plain function defined directly in the class body is
    guarded, except dunder methods. Construction is never checked, so an
    instance may start out violating the invariant; the first method call
    reports it.

    Args:
        predicate: Condition over the instance.
        message: Static text reported on violation, prefixed with
            ``(before)`` or ``(after)``.
        methods: Explicit names of the methods to guard.
        config: Explicit configuration. Defaults to the process-wide one.
    """
    _check_callable(predicate, "invariant")

    def decorator(cls: C) -> C:
        if not isinstance(cls, type):
            raise ContractualConfigError(f"@invariant must decorate a class, got {type(cls).__name__}")

        names = _guarded_names(cls, methods)
        for name in names:
            setattr(cls, name, _guard(vars(cls)[name], predicate, message, config))

        own = cls.__dict__.get("__contractual_invariants__", [])
        cls.__contractual_invariants__ = [*own, (predicate, message)]
        logger.debug("Invariant on %s guards %s", cls.__qualname__, ", ".join(names) or "no methods")
        return cls

    return decorator
