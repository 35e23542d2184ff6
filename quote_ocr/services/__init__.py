"""
Сервисы распознавания цитат.

Модули:
    - vision_client: запрос к Google Cloud Vision и разбор его ошибок
    - annotation_parser: ответ Vision -> PageAnnotation
    - text_filter: фильтр полей страницы (основной текст + номер страницы)
    - ocr_processor: координация пайплайна
"""

from quote_ocr.services.annotation_parser import parse_page_annotation
from quote_ocr.services.ocr_processor import process_image
from quote_ocr.services.text_filter import filter_page
from quote_ocr.services.vision_client import annotate_image, strip_data_uri

__all__ = [
    "process_image",
    "annotate_image",
    "strip_data_uri",
    "parse_page_annotation",
    "filter_page",
]
