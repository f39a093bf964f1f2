"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.channel_registration import resolve_channel_registration_id
from app.services.connection_string import ConnectionStringResolver
from app.services.dispatch_url import DispatchUrlResolver
from app.services.media_type import infer_media_kind
from app.services.parameter_extraction import ParameterExtractor
from app.services.template_builder import NameContainsLinkPolicy, TemplateBuilder

__all__ = [
    "ConnectionStringResolver",
    "DispatchUrlResolver",
    "NameContainsLinkPolicy",
    "ParameterExtractor",
    "TemplateBuilder",
    "infer_media_kind",
    "resolve_channel_registration_id",
]
