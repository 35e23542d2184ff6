"""
Quote OCR Service — FastAPI приложение.

Принимает снимок страницы книги, распознаёт текст через Google Cloud Vision,
очищает его от колонтитулов и заметок на полях, возвращает текст цитаты
и номер страницы.

Эндпоинты:
    POST /ocr/execute — распознавание цитаты со снимка страницы
    GET  /health — проверка работоспособности и текущая конфигурация

Запуск:
    uvicorn quote_ocr.main:app --host 0.0.0.0 --port 8000
"""

import json
import logging
import time

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from quote_ocr.config import settings
from quote_ocr.exceptions import OCRServiceError
from quote_ocr.schemas import OCRRequest, OCRResponse
from quote_ocr.services.ocr_processor import process_image

# Настройка логгера
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [Quote-OCR] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


class UnicodeJSONResponse(JSONResponse):
    """JSON ответ с нормальным отображением хангыля (без \\uXXXX экранирования)."""

    def render(self, content) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("utf-8")


# FastAPI приложение
app = FastAPI(
    title="Quote OCR Service",
    description="Распознавание цитат со снимков страниц книг (Google Cloud Vision)",
    version="1.0.0",
    default_response_class=UnicodeJSONResponse,
)


@app.get("/health")
async def health_check() -> dict:
    """
    Проверка работоспособности сервиса.

    Ключ Vision не раскрывается — только признак, что он настроен.

    Returns:
        dict: статус сервиса и текущая конфигурация
    """
    api_key_configured = bool(settings.vision_api_key)

    return {
        "status": "ok" if api_key_configured else "degraded",
        "service": "quote-ocr",
        "version": "1.0.0",
        "vision": {
            "api_url": settings.vision_api_url,
            "api_key_configured": api_key_configured,
            "language_hints": settings.language_hints,
            "timeout_seconds": settings.timeout_seconds,
        },
        "config": {
            "max_image_size_mb": settings.max_image_size_mb,
            "filter": {
                "right_margin_ratio": settings.filter_right_margin_ratio,
                "top_margin_ratio": settings.filter_top_margin_ratio,
                "bottom_margin_ratio": settings.filter_bottom_margin_ratio,
                "confidence_threshold": settings.filter_confidence_threshold,
                "page_number_max_length": settings.filter_page_number_max_length,
                "line_break_as_newline": settings.filter_line_break_as_newline,
            },
        },
    }


@app.post("/ocr/execute", response_model=OCRResponse)
async def execute_ocr(request: OCRRequest) -> OCRResponse:
    """
    Распознаёт цитату со снимка страницы.

    Пустой результат (текст не найден) — не ошибка: возвращается
    success=True с пустыми text и page_number.

    Args:
        request: JSON {"image": "<base64 или data URI>"}

    Returns:
        OCRResponse: основной текст и номер страницы

    Raises:
        HTTPException: при ошибках входа, конфигурации или провайдера
    """
    start_time = time.time()

    try:
        result = await process_image(request.image, settings)
    except OCRServiceError as e:
        logger.warning(f"Ошибка OCR [{e.code}]: {e.message}")
        raise HTTPException(
            status_code=e.status_code,
            detail={
                "error": e.code,
                "message": e.message,
            },
        )
    except Exception as e:
        logger.exception(f"Ошибка обработки изображения: {e}")
        raise HTTPException(
            status_code=500,
            detail={
                "error": "processing_error",
                "message": str(e) or "Internal Server Error",
            },
        )

    processing_time_ms = int((time.time() - start_time) * 1000)

    logger.info(f"OCR завершён за {processing_time_ms}ms")

    return OCRResponse(
        success=True,
        text=result.body_text,
        page_number=result.page_number,
        processing_time_ms=processing_time_ms,
    )


if __name__ == "__main__":
    import uvicorn

    port = settings.port
    logger.info(f"Запуск Quote OCR Service на порту {port}")

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        log_level="info",
    )
