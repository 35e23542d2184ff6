"""
Quote OCR Service — распознавание цитат со снимков страниц книг.

Принимает снимок страницы, распознаёт текст через Google Cloud Vision
(DOCUMENT_TEXT_DETECTION) и очищает его:
    - отбрасывает колонтитулы и заметки на правом поле
    - отбрасывает блоки с низкой уверенностью
    - извлекает номер страницы из верхнего или нижнего поля
"""

from quote_ocr.config import settings
from quote_ocr.schemas import FilterConfig, FilterResult, OCRRequest, OCRResponse

__all__ = [
    "settings",
    "FilterConfig",
    "FilterResult",
    "OCRRequest",
    "OCRResponse",
]
