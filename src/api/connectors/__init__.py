"""Connectors: adapters de borda para APIs externas.

Estrutura:
- acs/: Azure Communication Services Advanced Messaging (envio de templates)
- dispatcher/: cliente HTTP do forwarder para o dispatcher
"""

__all__: list[str] = []
