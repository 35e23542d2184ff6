"""
Процессор OCR — координирует распознавание цитаты.

Пайплайн:
    проверка входа -> Google Vision -> разбор разметки -> фильтр полей

Ошибки входа и конфигурации отклоняются до обращения к провайдеру.
"""

import logging
from typing import Optional

import httpx

from quote_ocr.config import Settings
from quote_ocr.exceptions import (
    ImageRequiredError,
    ImageTooLargeError,
    MissingAPIKeyError,
)
from quote_ocr.schemas import FilterResult
from quote_ocr.services.annotation_parser import parse_page_annotation
from quote_ocr.services.text_filter import filter_page
from quote_ocr.services.vision_client import annotate_image, strip_data_uri

logger = logging.getLogger(__name__)


async def process_image(
    image: Optional[str],
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FilterResult:
    """
    Распознаёт текст на снимке страницы и очищает его от полей.

    Args:
        image: изображение в base64 (допускается data URI)
        settings: настройки сервиса
        transport: транспорт httpx для запроса к Vision (подменяется в тестах)

    Returns:
        FilterResult: основной текст и номер страницы

    Raises:
        ImageRequiredError: изображение не передано
        MissingAPIKeyError: ключ Vision не настроен
        ImageTooLargeError: изображение больше max_image_size_mb
        VisionAPIError: ошибки провайдера (и подклассы)
    """
    if not image:
        raise ImageRequiredError()

    if not settings.vision_api_key:
        logger.error("Ключ Google Vision не настроен (QUOTE_OCR_VISION_API_KEY)")
        raise MissingAPIKeyError()

    content = strip_data_uri(image)
    size_bytes = _estimated_size(content)

    max_size = settings.max_image_size_mb * 1024 * 1024
    if size_bytes > max_size:
        raise ImageTooLargeError(
            f"Image is too large: {size_bytes} bytes, "
            f"maximum: {settings.max_image_size_mb} MB"
        )

    logger.info(f"Изображение получено: {size_bytes} байт")

    response = await annotate_image(
        content,
        api_key=settings.vision_api_key,
        api_url=settings.vision_api_url,
        language_hints=settings.language_hints,
        timeout_seconds=settings.timeout_seconds,
        transport=transport,
    )

    annotation = parse_page_annotation(response)
    if annotation is None:
        logger.info("Vision не нашёл текст на изображении")

    result = filter_page(annotation, settings.filter_config())

    logger.info(
        f"Текст извлечён: {len(result.body_text)} символов, "
        f"страница: {result.page_number or '-'}"
    )

    return result


def _estimated_size(content: str) -> int:
    """
    Оценивает размер декодированного изображения по длине base64.

    Переносы строк и пробелы не считаются, стандартный и URL-safe алфавиты
    дают одинаковую оценку. Корректность base64 проверяет Vision.
    """
    length = sum(1 for char in content if not char.isspace() and char != "=")
    return length * 3 // 4
