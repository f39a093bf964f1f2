"""OnceValue: holder de valor inicializado preguiçosamente.

Sem lock: execuções concorrentes podem disparar o loader mais de uma vez,
mas o valor resolvido é o mesmo para a mesma configuração.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from app.protocols.value_cache import OnceValueProtocol


class OnceValue(OnceValueProtocol):
    """Memoriza o primeiro valor não vazio devolvido pelo loader."""

    def __init__(self) -> None:
        self._value: str | None = None

    @property
    def value(self) -> str | None:
        return self._value

    async def get_or_load(self, loader: Callable[[], Awaitable[str | None]]) -> str | None:
        if self._value:
            return self._value
        loaded = await loader()
        loaded = (loaded or "").strip() or None
        if loaded:
            self._value = loaded
        return loaded

    def reset(self) -> None:
        self._value = None
