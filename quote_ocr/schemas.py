"""
Схемы данных Quote OCR Service.

Включает:
    - Pydantic модели для API (запрос с изображением, ответ с текстом)
    - Внутренние dataclass'ы разметки страницы Google Cloud Vision
    - Конфигурацию и результат фильтра полей страницы
"""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# Pydantic модели для API
# =============================================================================


class OCRRequest(BaseModel):
    """
    Запрос на распознавание цитаты со снимка страницы.

    Attributes:
        image: изображение в base64 (допускается префикс data:image/...;base64,)
    """

    image: Optional[str] = Field(
        default=None,
        description="Изображение в base64 или data URI",
    )


class OCRResponse(BaseModel):
    """
    Ответ API с результатом распознавания.

    Attributes:
        success: успешность операции
        text: очищенный основной текст страницы
        page_number: номер страницы из колонтитула (пустая строка, если не найден)
        processing_time_ms: общее время обработки в мс
    """

    success: bool = True
    text: str = ""
    page_number: str = ""
    processing_time_ms: int = 0


# =============================================================================
# Разметка страницы Google Cloud Vision (fullTextAnnotation.pages[0])
# =============================================================================


@dataclass
class Vertex:
    """
    Вершина bounding box блока.

    Vision не передаёт нулевые координаты, поэтому x и y могут отсутствовать.
    """

    x: Optional[float] = None
    y: Optional[float] = None


@dataclass
class Symbol:
    """
    Один символ (или короткий фрагмент) текста.

    Attributes:
        text: текст символа
        break_type: тип разрыва после символа (SPACE, SURE_SPACE,
            EOL_SURE_SPACE, LINE_BREAK, HYPHEN, ...) или None
    """

    text: str
    break_type: Optional[str] = None


@dataclass
class Word:
    symbols: list[Symbol] = field(default_factory=list)


@dataclass
class Paragraph:
    words: list[Word] = field(default_factory=list)


@dataclass
class Block:
    """
    Текстовый блок страницы.

    Attributes:
        vertices: вершины bounding box (порядок не гарантирован)
        confidence: уверенность распознавания (0-1) или None, если не передана
        paragraphs: параграфы блока в исходном порядке
    """

    vertices: list[Vertex] = field(default_factory=list)
    confidence: Optional[float] = None
    paragraphs: list[Paragraph] = field(default_factory=list)


@dataclass
class PageAnnotation:
    """
    Разметка одной страницы.

    Attributes:
        width: ширина изображения в пикселях
        height: высота изображения в пикселях
        blocks: блоки в порядке, в котором их вернул Vision
    """

    width: int
    height: int
    blocks: list[Block] = field(default_factory=list)


# =============================================================================
# Фильтр полей страницы
# =============================================================================


@dataclass(frozen=True)
class FilterConfig:
    """
    Пороги фильтра полей страницы.

    Attributes:
        right_margin_ratio: блоки, начинающиеся правее width * ratio, отбрасываются
        top_margin_ratio: верхнее поле (колонтитул) — блоки выше height * ratio
        bottom_margin_ratio: нижнее поле — блоки ниже height * ratio
        confidence_threshold: минимальная уверенность блока основного текста
        page_number_max_length: номер страницы короче этого числа символов
        line_break_as_newline: переводить EOL_SURE_SPACE/LINE_BREAK в \\n
            вместо пробела (сохраняет строки стихов)
    """

    right_margin_ratio: float = 0.85
    top_margin_ratio: float = 0.15
    bottom_margin_ratio: float = 0.85
    confidence_threshold: float = 0.5
    page_number_max_length: int = 15
    line_break_as_newline: bool = False


@dataclass
class FilterResult:
    """
    Результат фильтра.

    Attributes:
        body_text: основной текст, абзацы разделены пустой строкой
        page_number: первая группа цифр последнего блока-кандидата
            в номер страницы (пустая строка, если не найден)
    """

    body_text: str = ""
    page_number: str = ""
