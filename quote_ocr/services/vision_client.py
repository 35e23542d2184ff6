"""
Клиент Google Cloud Vision (images:annotate).

Отправляет одно изображение с DOCUMENT_TEXT_DETECTION и подсказками
языков, переводит ошибки провайдера в исключения сервиса.
"""

import logging
import re
from typing import Any, Optional

import httpx

from quote_ocr.exceptions import (
    BillingNotEnabledError,
    VisionAPIError,
    VisionTimeoutError,
    VisionUnavailableError,
)

logger = logging.getLogger(__name__)

_DATA_URI_PREFIX_RE = re.compile(r"^data:image/\w+;base64,")

# Признак ошибки биллинга в сообщении Vision
_BILLING_MARKER = "billing to be enabled"

_DEFAULT_ERROR_MESSAGE = "Failed to communicate with Google Vision API"


def strip_data_uri(image: str) -> str:
    """Убирает префикс data:image/...;base64, если он есть."""
    return _DATA_URI_PREFIX_RE.sub("", image, count=1)


def build_annotate_request(content: str, language_hints: list[str]) -> dict:
    """
    Формирует тело запроса images:annotate.

    DOCUMENT_TEXT_DETECTION оптимизирован для плотного текста (книги, документы).

    Args:
        content: изображение в base64 без префикса
        language_hints: приоритетные языки, например ["ko", "en"]

    Returns:
        dict: JSON тело запроса
    """
    return {
        "requests": [
            {
                "image": {"content": content},
                "features": [{"type": "DOCUMENT_TEXT_DETECTION"}],
                "imageContext": {"languageHints": list(language_hints)},
            }
        ]
    }


async def annotate_image(
    content: str,
    *,
    api_key: str,
    api_url: str,
    language_hints: list[str],
    timeout_seconds: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict[str, Any]:
    """
    Отправляет изображение в Vision и возвращает JSON ответ.

    Args:
        content: изображение в base64 без префикса
        api_key: ключ Google Cloud Vision
        api_url: адрес images:annotate
        language_hints: подсказки языков
        timeout_seconds: таймаут запроса
        transport: транспорт httpx (подменяется в тестах)

    Returns:
        dict: ответ Vision ({"responses": [...]})

    Raises:
        BillingNotEnabledError: в проекте не включён биллинг
        VisionUnavailableError: Vision недоступен
        VisionTimeoutError: Vision не ответил вовремя
        VisionAPIError: любая другая ошибка провайдера
    """
    body = build_annotate_request(content, language_hints)

    try:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        ) as client:
            response = await client.post(
                api_url,
                params={"key": api_key},
                json=body,
            )
    except httpx.ConnectError as e:
        logger.error(f"Google Vision недоступен: {e}")
        raise VisionUnavailableError(f"Google Vision API is unavailable: {e}")
    except httpx.TimeoutException:
        logger.error(f"Таймаут ожидания Google Vision ({timeout_seconds}s)")
        raise VisionTimeoutError(
            f"Google Vision API did not respond within {timeout_seconds} seconds"
        )
    except httpx.HTTPError as e:
        logger.error(f"Ошибка запроса к Google Vision: {e}")
        raise VisionAPIError(f"{_DEFAULT_ERROR_MESSAGE}: {e}")

    try:
        data = response.json()
    except ValueError:
        logger.warning(
            f"Google Vision вернул не JSON: {response.status_code} - {response.text[:200]}"
        )
        raise VisionAPIError(
            _DEFAULT_ERROR_MESSAGE,
            status_code=response.status_code if response.is_error else 502,
        )

    if response.is_error:
        logger.warning(f"Google Vision API Error: {response.status_code} - {data}")
        message = _error_message(data)

        if message and _BILLING_MARKER in message:
            raise BillingNotEnabledError()

        raise VisionAPIError(
            message or _DEFAULT_ERROR_MESSAGE,
            status_code=response.status_code,
        )

    if not isinstance(data, dict):
        raise VisionAPIError(_DEFAULT_ERROR_MESSAGE)

    # Ошибка конкретного изображения приходит со статусом 200
    responses = data.get("responses") or []
    if responses and responses[0].get("error"):
        message = _error_message(responses[0])
        logger.warning(f"Google Vision: ошибка изображения: {message}")
        if message and _BILLING_MARKER in message:
            raise BillingNotEnabledError()
        raise VisionAPIError(message or _DEFAULT_ERROR_MESSAGE)

    return data


def _error_message(data: Any) -> Optional[str]:
    """Достаёт error.message из ответа Vision, если он есть."""
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if not isinstance(error, dict):
        return None
    return error.get("message")
