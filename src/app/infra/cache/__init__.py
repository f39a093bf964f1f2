"""Cache: holders de valores resolvidos em tempo de execução."""

from __future__ import annotations

from app.infra.cache.once_value import OnceValue

__all__ = ["OnceValue"]
