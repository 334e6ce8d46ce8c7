"""ScopeStack implementation.

The stack lives in a ``ContextVar``, so every asyncio task works on the copy
of the stack it inherited when it was created. Frames are never mutated in
place: ``configure`` swaps the top frame for a modified copy, which keeps a
parent's frames untouched by whatever a child task does.

Threads start with an empty context and therefore see only the root scope.
A callable bound with ``ScopeStack.wrap`` carries the scopes that were current
when it was wrapped into the thread that runs it.
"""

import functools
import itertools
from contextvars import ContextVar, copy_context
from dataclasses import dataclass
from typing import Any, Callable, Protocol, TypeVar

from ..exceptions import ScopeReleaseError
from ..models import Breadcrumb, Scope

_stack_ids = itertools.count()

T = TypeVar("T")


@dataclass(frozen=True)
class _Frame:
    scope: Scope
    token: object


class IScopeHandle(Protocol):
    """Restore-on-release guard returned by push()."""

    def release(self) -> None:
        """Restore the stack that was current at push time."""
        ...

    def __enter__(self) -> "IScopeHandle": ...

    def __exit__(self, exc_type, exc, tb) -> None: ...


class ScopeHandle:
    """Guard for one pushed scope."""

    def __init__(self, stack: "ScopeStack", token: object, parent: tuple[_Frame, ...]):
        self._stack = stack
        self._token = token
        self._parent = parent
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._stack._pop(self._token, self._parent)
        self._released = True

    def __enter__(self) -> "ScopeHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class NoOpScopeHandle:
    """Handle handed out when the SDK is disabled."""

    released = True

    def release(self) -> None:
        return

    def __enter__(self) -> "NoOpScopeHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return


class ScopeStack:
    """Nested, per-execution-context stack of scopes."""

    def __init__(self, root: Scope | None = None):
        root_frame = _Frame(scope=root if root is not None else Scope(), token=object())
        self._frames: ContextVar[tuple[_Frame, ...]] = ContextVar(
            f"sentry_scope_stack_{next(_stack_ids)}", default=(root_frame,)
        )

    @property
    def depth(self) -> int:
        """Number of frames, the root included."""
        return len(self._frames.get())

    def push(self, state: Any = None) -> ScopeHandle:
        """Copy the current scope and make the copy current."""
        parent = self._frames.get()
        child = parent[-1].scope.clone()
        if state is not None:
            child.state = state
        token = object()
        self._frames.set(parent + (_Frame(scope=child, token=token),))
        return ScopeHandle(self, token, parent)

    def configure(self, mutator: Callable[[Scope], None]) -> None:
        """Apply ``mutator`` to the current scope."""
        frames = self._frames.get()
        top = frames[-1]
        scope = top.scope.clone()
        mutator(scope)
        self._frames.set(frames[:-1] + (_Frame(scope=scope, token=top.token),))

    def current(self) -> Scope:
        """Detached copy of the current scope."""
        return self._frames.get()[-1].scope.clone()

    def add_breadcrumb(self, breadcrumb: Breadcrumb) -> None:
        self.configure(lambda scope: scope.add_breadcrumb(breadcrumb))

    def wrap(self, fn: Callable[..., T]) -> Callable[..., T]:
        """Bind ``fn`` to the scopes current at wrap time.

        Meant for ``threading.Thread(target=...)`` and executor submissions.
        Every call runs in its own copy of the captured context, so pushes and
        configures made by ``fn`` stay inside that call.
        """
        context = copy_context()

        @functools.wraps(fn)
        def run(*args: Any, **kwargs: Any) -> T:
            return context.copy().run(fn, *args, **kwargs)

        return run

    def _pop(self, token: object, parent: tuple[_Frame, ...]) -> None:
        frames = self._frames.get()
        if len(frames) < 2 or frames[-1].token is not token:
            raise ScopeReleaseError(
                "Scope released out of order: only the most recently pushed "
                "scope of the current context can be released"
            )
        self._frames.set(parent)
