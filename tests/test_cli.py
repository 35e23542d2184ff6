"""
Тесты офлайн прогона фильтра по сохранённому ответу Vision.
"""

import json

from conftest import vision_block, vision_response

from quote_ocr.cli import main


def write_response(tmp_path, blocks):
    path = tmp_path / "response.json"
    path.write_text(json.dumps(vision_response(blocks)), encoding="utf-8")
    return path


def test_prints_json_result(tmp_path, capsys):
    path = write_response(
        tmp_path,
        [
            vision_block("Hello world.", (100, 300, 800, 1200), 0.9),
            vision_block("42", (450, 1400, 520, 1430), 0.3),
        ],
    )

    assert main([str(path), "--json"]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out == {"text": "Hello world.", "page_number": "42"}


def test_confidence_threshold_override(tmp_path, capsys):
    path = write_response(tmp_path, [vision_block("Faint.", (100, 300, 800, 1200), 0.6)])

    assert main([str(path), "--confidence-threshold", "0.7"]) == 0

    assert capsys.readouterr().out.strip() == ""


def test_plain_output_with_page_number(tmp_path, capsys):
    path = write_response(
        tmp_path,
        [
            vision_block("Body.", (100, 300, 800, 1200)),
            vision_block("7", (450, 20, 520, 80)),
        ],
    )

    assert main([str(path)]) == 0

    out = capsys.readouterr().out
    assert out.startswith("Body.\n")
    assert "[page 7]" in out


def test_unreadable_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.json")]) == 2
    assert "Cannot read" in capsys.readouterr().err
