"""
Ошибки Quote OCR Service.

Каждая ошибка несёт машинный код и HTTP статус, с которыми
эндпоинт отдаёт её клиенту: {"error": code, "message": message}.
"""

from typing import Optional

# Текст для пользователя, когда в проекте Google Cloud не включён биллинг
BILLING_GUIDANCE_MESSAGE = (
    "Google Cloud 결제 설정이 필요합니다.\n"
    "Google Cloud Console에서 해당 프로젝트의 결제(Billing)를 활성화해주세요.\n"
    "(월 1,000회까지는 요금이 부과되지 않습니다.)\n"
    "Billing must be enabled for the Google Cloud project. "
    "Enable it in the Google Cloud Console (the first 1,000 requests per month are free)."
)


class OCRServiceError(Exception):
    """Базовая ошибка сервиса."""

    code = "ocr_error"
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ImageRequiredError(OCRServiceError):
    code = "image_required"
    status_code = 400

    def __init__(self, message: str = "Image data is required"):
        super().__init__(message)


class ImageTooLargeError(OCRServiceError):
    code = "image_too_large"
    status_code = 413


class MissingAPIKeyError(OCRServiceError):
    """Ключ Vision не настроен — ошибка развёртывания, а не данных."""

    code = "missing_api_key"
    status_code = 500

    def __init__(self, message: str = "API Configuration Error: API Key is missing."):
        super().__init__(message)


class VisionAPIError(OCRServiceError):
    """Vision вернул ошибку; status_code берётся из ответа провайдера."""

    code = "vision_api_error"
    status_code = 502


class BillingNotEnabledError(VisionAPIError):
    code = "billing_not_enabled"
    status_code = 403

    def __init__(self, message: str = BILLING_GUIDANCE_MESSAGE):
        super().__init__(message)


class VisionUnavailableError(VisionAPIError):
    code = "vision_unavailable"
    status_code = 503


class VisionTimeoutError(VisionAPIError):
    code = "vision_timeout"
    status_code = 504
