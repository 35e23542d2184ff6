"""
Разбор ответа Google Cloud Vision в PageAnnotation.

Vision опускает поля со значениями по умолчанию (нулевые координаты,
пустые списки), поэтому любое отсутствующее поле превращается
в None или пустой список, а не в ошибку.
"""

import logging
from typing import Any, Optional

from quote_ocr.schemas import Block, PageAnnotation, Paragraph, Symbol, Vertex, Word

logger = logging.getLogger(__name__)


def parse_page_annotation(response: dict[str, Any]) -> Optional[PageAnnotation]:
    """
    Извлекает разметку первой страницы из ответа images:annotate.

    Args:
        response: JSON ответ Vision ({"responses": [{"fullTextAnnotation": ...}]})

    Returns:
        PageAnnotation или None, если текст на изображении не найден
    """
    responses = response.get("responses") or []
    if not responses:
        return None

    full_text = responses[0].get("fullTextAnnotation")
    if not full_text:
        return None

    pages = full_text.get("pages") or []
    if not pages:
        logger.warning("fullTextAnnotation без страниц, текст не найден")
        return None

    page = pages[0]
    blocks = [_parse_block(block) for block in page.get("blocks") or []]

    return PageAnnotation(
        width=page.get("width") or 0,
        height=page.get("height") or 0,
        blocks=blocks,
    )


def _parse_block(data: dict[str, Any]) -> Block:
    bounding_box = data.get("boundingBox") or {}
    vertices = [
        Vertex(x=vertex.get("x"), y=vertex.get("y"))
        for vertex in bounding_box.get("vertices") or []
    ]

    confidence = data.get("confidence")

    paragraphs = [
        Paragraph(
            words=[
                Word(symbols=[_parse_symbol(s) for s in word.get("symbols") or []])
                for word in paragraph.get("words") or []
            ]
        )
        for paragraph in data.get("paragraphs") or []
    ]

    return Block(
        vertices=vertices,
        confidence=float(confidence) if confidence is not None else None,
        paragraphs=paragraphs,
    )


def _parse_symbol(data: dict[str, Any]) -> Symbol:
    detected_break = (data.get("property") or {}).get("detectedBreak") or {}
    return Symbol(
        text=data.get("text") or "",
        break_type=detected_break.get("type"),
    )
