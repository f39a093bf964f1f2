"""Inferência do tipo de mídia de um anexo do CRM.

Ordem: prefixo do content type, depois extensão/substring da URL,
por fim `image` como padrão.
"""

from __future__ import annotations

import logging

from app.domain.template_request import ParameterKind
from config.logging import log_fallback

logger = logging.getLogger(__name__)

_DOCUMENT_CONTENT_PREFIXES = ("application/pdf", "application/msword", "application/vnd.")

_URL_RULES: tuple[tuple[ParameterKind, tuple[str, ...], str], ...] = (
    (ParameterKind.IMAGE, (".jpg", ".jpeg", ".png", ".gif", ".webp"), "/image"),
    (ParameterKind.VIDEO, (".mp4", ".avi", ".mov", ".mkv", ".webm"), "/video"),
    (
        ParameterKind.DOCUMENT,
        (".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx"),
        "/document",
    ),
)


def kind_from_content_type(content_type: str | None) -> ParameterKind | None:
    """Mapeia o content type armazenado; None quando não reconhecido."""
    ct = (content_type or "").strip().lower()
    if ct.startswith("image/"):
        return ParameterKind.IMAGE
    if ct.startswith("video/"):
        return ParameterKind.VIDEO
    if ct.startswith(_DOCUMENT_CONTENT_PREFIXES):
        return ParameterKind.DOCUMENT
    return None


def kind_from_url(url: str | None) -> ParameterKind | None:
    """Heurística por extensão ou substring de caminho."""
    lower = (url or "").lower()
    for kind, extensions, marker in _URL_RULES:
        if lower.endswith(extensions) or marker in lower:
            return kind
    return None


def infer_media_kind(content_type: str | None, url: str | None) -> ParameterKind:
    """Retorna image, video ou document para o anexo."""
    kind = kind_from_content_type(content_type) or kind_from_url(url)
    if kind is None:
        log_fallback(logger, "media_kind", reason="unrecognized_media")
        return ParameterKind.IMAGE
    return kind
