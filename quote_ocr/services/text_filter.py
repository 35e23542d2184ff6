"""
Фильтр полей страницы — ядро извлечения цитаты.

Классифицирует каждый блок разметки Vision как основной текст,
шум на полях (колонтитулы, заметки на полях) или кандидат в номер страницы.
Собирает оставшиеся блоки в одну строку в исходном порядке.

Порядок проверок блока:
    1. уверенность (с исключением для номера страницы)
    2. правое поле
    3. верхнее / нижнее поле

Функция чистая: без побочных эффектов и без исключений.
"""

import logging
import re
from typing import Optional

from quote_ocr.schemas import Block, FilterConfig, FilterResult, PageAnnotation

logger = logging.getLogger(__name__)

# Разрывы, после которых ставится пробел
_SPACE_BREAKS = {"SPACE", "SURE_SPACE"}
# Разрывы конца строки
_LINE_BREAKS = {"EOL_SURE_SPACE", "LINE_BREAK"}

# Только ASCII цифры: \d в Python совпадает и с цифрами других письменностей
_DIGIT_RE = re.compile(r"[0-9]")
_DIGIT_RUN_RE = re.compile(r"([0-9]+)")
_EXTRA_NEWLINES_RE = re.compile(r"\n{3,}")


def filter_page(
    annotation: Optional[PageAnnotation],
    config: FilterConfig = FilterConfig(),
) -> FilterResult:
    """
    Очищает текст страницы от колонтитулов и заметок на полях.

    Args:
        annotation: разметка страницы или None, если Vision не нашёл текст
        config: пороги фильтра

    Returns:
        FilterResult: основной текст и номер страницы (оба могут быть пустыми)
    """
    if annotation is None:
        return FilterResult(body_text="", page_number="")

    width = annotation.width
    height = annotation.height

    right_margin = width * config.right_margin_ratio
    top_margin = height * config.top_margin_ratio
    bottom_margin = height * config.bottom_margin_ratio

    body = ""
    page_number = ""

    for index, block in enumerate(annotation.blocks):
        min_x, max_x, min_y, max_y = _block_bounds(block, width, height)
        text = _block_text(block, config.line_break_as_newline)

        in_top_margin = max_y < top_margin
        in_bottom_margin = min_y > bottom_margin
        in_margin_band = in_top_margin or in_bottom_margin

        is_page_number_candidate = in_margin_band and _looks_like_page_number(
            text, config.page_number_max_length
        )

        # Уверенность не передана: проверку не применяем
        if (
            block.confidence is not None
            and block.confidence < config.confidence_threshold
            and not is_page_number_candidate
        ):
            logger.debug(
                f"Блок {index}: низкая уверенность {block.confidence:.2f}, пропущен"
            )
            continue

        if min_x > right_margin:
            logger.debug(f"Блок {index}: правое поле (min_x={min_x}), пропущен")
            continue

        if in_margin_band:
            if is_page_number_candidate:
                match = _DIGIT_RUN_RE.search(text)
                if match:
                    page_number = match.group(1)
                    logger.debug(f"Блок {index}: номер страницы {page_number}")
            else:
                logger.debug(f"Блок {index}: колонтитул, пропущен")
            continue

        body += text + "\n\n"

    body_text = _EXTRA_NEWLINES_RE.sub("\n\n", body.strip())

    return FilterResult(body_text=body_text, page_number=page_number)


def _block_bounds(
    block: Block,
    width: int,
    height: int,
) -> tuple[float, float, float, float]:
    """
    Вычисляет охватывающий прямоугольник блока.

    Начальные значения — (width, 0, height, 0): блок без вершин
    оказывается одновременно в правом, верхнем и нижнем поле.
    Отсутствующая координата считается нулём.

    Returns:
        tuple: (min_x, max_x, min_y, max_y)
    """
    min_x, max_x, min_y, max_y = width, 0, height, 0

    for vertex in block.vertices:
        x = vertex.x or 0
        y = vertex.y or 0
        min_x = min(min_x, x)
        max_x = max(max_x, x)
        min_y = min(min_y, y)
        max_y = max(max_y, y)

    return min_x, max_x, min_y, max_y


def _block_text(block: Block, line_break_as_newline: bool) -> str:
    """
    Собирает текст блока из параграфов -> слов -> символов.

    После каждого параграфа ставится перевод строки,
    результат обрезается по краям.
    """
    line_break = "\n" if line_break_as_newline else " "
    parts: list[str] = []

    for paragraph in block.paragraphs:
        for word in paragraph.words:
            for symbol in word.symbols:
                parts.append(symbol.text)
                if symbol.break_type in _SPACE_BREAKS:
                    parts.append(" ")
                elif symbol.break_type in _LINE_BREAKS:
                    parts.append(line_break)
        parts.append("\n")

    return "".join(parts).strip()


def _looks_like_page_number(text: str, max_length: int) -> bool:
    """Короткий текст с хотя бы одной цифрой."""
    return len(text) < max_length and _DIGIT_RE.search(text) is not None
