"""
Общие фикстуры: построение ответов Google Vision и настройки сервиса.
"""

from typing import Optional

import pytest

from quote_ocr.config import Settings


def vision_block(
    text: str,
    box: Optional[tuple[int, int, int, int]] = (100, 300, 800, 1200),
    confidence: Optional[float] = 0.9,
) -> dict:
    """
    Блок в формате fullTextAnnotation.pages[].blocks[].

    Параграфы разделяются "\\n\\n" в text, слова — пробелами.
    Последний символ слова получает SPACE, последний символ параграфа — LINE_BREAK,
    как это делает Vision.

    Args:
        text: текст блока
        box: (x0, y0, x1, y1) или None — блок без boundingBox
        confidence: уверенность или None — поле отсутствует
    """
    paragraphs = []
    for paragraph_text in text.split("\n\n"):
        words = paragraph_text.split()
        paragraph_words = []
        for word_index, word in enumerate(words):
            symbols = [{"text": char} for char in word]
            is_last_word = word_index == len(words) - 1
            symbols[-1]["property"] = {
                "detectedBreak": {"type": "LINE_BREAK" if is_last_word else "SPACE"}
            }
            paragraph_words.append({"symbols": symbols})
        paragraphs.append({"words": paragraph_words})

    block = {"paragraphs": paragraphs}
    if box is not None:
        x0, y0, x1, y1 = box
        block["boundingBox"] = {
            "vertices": [
                {"x": x0, "y": y0},
                {"x": x1, "y": y0},
                {"x": x1, "y": y1},
                {"x": x0, "y": y1},
            ]
        }
    if confidence is not None:
        block["confidence"] = confidence
    return block


def vision_response(blocks: list[dict], width: int = 1000, height: int = 1500) -> dict:
    """Полный ответ images:annotate с одной страницей."""
    return {
        "responses": [
            {
                "fullTextAnnotation": {
                    "pages": [{"width": width, "height": height, "blocks": blocks}],
                    "text": "",
                }
            }
        ]
    }


@pytest.fixture
def test_settings() -> Settings:
    """Настройки без .env, с тестовым ключом Vision."""
    return Settings(_env_file=None, vision_api_key="test-key")
