"""Testes da inferência de tipo de mídia."""

from __future__ import annotations

import pytest

from app.domain.template_request import ParameterKind
from app.services.media_type import infer_media_kind, kind_from_content_type, kind_from_url


@pytest.mark.parametrize(
    ("content_type", "expected"),
    [
        ("image/png", ParameterKind.IMAGE),
        ("Video/MP4", ParameterKind.VIDEO),
        ("application/pdf", ParameterKind.DOCUMENT),
        ("application/msword", ParameterKind.DOCUMENT),
        ("application/vnd.ms-excel", ParameterKind.DOCUMENT),
        ("text/plain", None),
        ("", None),
        (None, None),
    ],
)
def test_kind_from_content_type(content_type: str | None, expected: ParameterKind | None) -> None:
    assert kind_from_content_type(content_type) is expected


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://cdn/x/photo.JPG", ParameterKind.IMAGE),
        ("https://cdn/x/clip.mov", ParameterKind.VIDEO),
        ("https://cdn/x/report.xlsx", ParameterKind.DOCUMENT),
        ("https://cdn/video/12345", ParameterKind.VIDEO),
        ("https://cdn/document/abc", ParameterKind.DOCUMENT),
        ("https://cdn/blob/abc", None),
    ],
)
def test_kind_from_url(url: str, expected: ParameterKind | None) -> None:
    assert kind_from_url(url) is expected


def test_content_type_wins_over_url() -> None:
    assert infer_media_kind("video/mp4", "https://cdn/x/photo.jpg") is ParameterKind.VIDEO


def test_url_used_when_content_type_unrecognized() -> None:
    assert infer_media_kind("application/octet-stream", "https://cdn/x/a.pdf") is ParameterKind.DOCUMENT


def test_defaults_to_image() -> None:
    assert infer_media_kind("", "https://cdn/blob/abc") is ParameterKind.IMAGE
    assert infer_media_kind(None, None) is ParameterKind.IMAGE
