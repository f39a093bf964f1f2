"""Protocolo de holder de valor inicializado uma única vez."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol


class OnceValueProtocol(Protocol):
    """Guarda um valor resolvido preguiçosamente.

    `get_or_load` só memoriza valores não vazios; `reset` descarta o valor.
    """

    async def get_or_load(self, loader: Callable[[], Awaitable[str | None]]) -> str | None: ...

    def reset(self) -> None: ...
