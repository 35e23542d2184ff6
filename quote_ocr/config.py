"""
Конфигурация Quote OCR Service.

Все значения читаются из .env файла (или переменных окружения).
Единый префикс: QUOTE_OCR_
Документация по параметрам: .env.example
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from quote_ocr.schemas import FilterConfig


class Settings(BaseSettings):
    """
    Настройки Quote OCR Service.

    Читает переменные с префиксом QUOTE_OCR_ из .env файла.
    Ключ Google Cloud Vision не обязателен при старте: его отсутствие
    проверяется на каждом запросе и возвращается как ошибка конфигурации.
    """

    model_config = SettingsConfigDict(
        env_prefix="QUOTE_OCR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Сервер ---
    port: int = 8000

    # --- Google Cloud Vision ---
    vision_api_key: Optional[str] = None
    vision_api_url: str = "https://vision.googleapis.com/v1/images:annotate"
    timeout_seconds: float = 30.0
    language_hints: list[str] = ["ko", "en"]

    # --- Лимиты ---
    max_image_size_mb: int = 10

    # --- Фильтр полей страницы ---
    filter_right_margin_ratio: float = 0.85
    filter_top_margin_ratio: float = 0.15
    filter_bottom_margin_ratio: float = 0.85
    filter_confidence_threshold: float = 0.5
    filter_page_number_max_length: int = 15
    filter_line_break_as_newline: bool = False

    def filter_config(self) -> FilterConfig:
        """Собирает FilterConfig из настроек с префиксом filter_."""
        return FilterConfig(
            right_margin_ratio=self.filter_right_margin_ratio,
            top_margin_ratio=self.filter_top_margin_ratio,
            bottom_margin_ratio=self.filter_bottom_margin_ratio,
            confidence_threshold=self.filter_confidence_threshold,
            page_number_max_length=self.filter_page_number_max_length,
            line_break_as_newline=self.filter_line_break_as_newline,
        )


# Глобальный экземпляр настроек
settings = Settings()
