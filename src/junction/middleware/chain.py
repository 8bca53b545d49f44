"""Ordered, named middleware chain with explicit continuation.

Each middleware receives the Context and a ``Next`` bound to the
following chain position. Calling ``next`` runs the rest of the chain
and, once it is exhausted, the terminal route handler. Not calling it
short-circuits: nothing after that middleware runs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from junction._internal.invoke import invoke
from junction.context import Context
from junction.errors import DuplicateMiddlewareError
from junction.middleware.protocol import Middleware, Terminal

logger = logging.getLogger("junction.middleware")


@dataclass(frozen=True, slots=True)
class MiddlewareEntry:
    """A registered middleware and its unique name."""

    name: str
    middleware: Middleware


class Next:
    """Continuation token bound to one chain position.

    Single-use: a middleware that calls it twice gets ``RuntimeError``.
    Called without arguments it continues with the same Context.
    """

    __slots__ = ("_called", "_chain", "_ctx", "_index", "_terminal")

    def __init__(
        self,
        chain: MiddlewareChain,
        index: int,
        ctx: Context,
        terminal: Terminal,
    ) -> None:
        self._chain = chain
        self._index = index
        self._ctx = ctx
        self._terminal = terminal
        self._called = False

    @property
    def called(self) -> bool:
        """Whether the continuation has been invoked."""
        return self._called

    async def __call__(self, ctx: Context | None = None) -> Any:
        if self._called:
            msg = "next() was already called for this middleware."
            raise RuntimeError(msg)
        self._called = True
        return await self._chain._run_from(self._index, ctx or self._ctx, self._terminal)

    def __repr__(self) -> str:
        return f"<Next position={self._index} called={self._called}>"


class MiddlewareChain:
    """Middleware in registration order, with unique names.

    Built during setup and frozen alongside the router. No removal is
    defined; registration is the only mutation.

    Usage::

        chain = MiddlewareChain()
        chain.add("auth", require_user)
        chain.add("store", pick_store)
        chain.freeze()
        response = await chain.run(ctx, terminal)
    """

    __slots__ = ("_entries", "_frozen")

    def __init__(self) -> None:
        self._entries: list[MiddlewareEntry] = []
        self._frozen = False

    def add(self, name: str, middleware: Middleware) -> MiddlewareEntry:
        """Append a named middleware.

        Raises ``DuplicateMiddlewareError`` if *name* is taken; the
        original registration stays in place.
        """
        if self._frozen:
            msg = "Cannot add middleware after the chain is frozen."
            raise RuntimeError(msg)
        if name in self:
            raise DuplicateMiddlewareError(name)
        entry = MiddlewareEntry(name=name, middleware=middleware)
        self._entries.append(entry)
        return entry

    def freeze(self) -> None:
        """Freeze the chain. No more middleware can be added."""
        self._frozen = True

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(entry.name for entry in self._entries)

    def __contains__(self, name: object) -> bool:
        return any(entry.name == name for entry in self._entries)

    def __iter__(self) -> Iterator[MiddlewareEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    async def run(self, ctx: Context, terminal: Terminal) -> Any:
        """Run the chain from the first middleware, ending in *terminal*."""
        return await self._run_from(0, ctx, terminal)

    async def _run_from(self, index: int, ctx: Context, terminal: Terminal) -> Any:
        if index >= len(self._entries):
            return await invoke(terminal, ctx)

        entry = self._entries[index]
        next_ = Next(self, index + 1, ctx, terminal)
        result = await invoke(entry.middleware, ctx, next_)
        if not next_.called:
            logger.debug("Middleware %r stopped %s %s", entry.name, ctx.method, ctx.path)
        return result
