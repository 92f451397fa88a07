from __future__ import annotations

import math
from io import BytesIO

import pdfplumber
import pytest
from PyPDF2 import PdfReader
from reportlab.lib import colors

from pdfprintln import PDFBuilder, TextAlignment, TextAttributes
from pdfprintln.components import font_line_height, split_text_by_width


def _spy(builder, name, calls):
    """记录后端绘制调用并透传给原方法。"""
    original = getattr(builder._backend, name)

    def wrapper(*args):
        calls.append((name, args))
        return original(*args)

    setattr(builder._backend, name, wrapper)


def _pdf_bytes(builder):
    buf = BytesIO()
    builder.save(buf)
    return buf.getvalue()


class TestAutomaticPageBreak:
    def test_a6_portrait_font_9_holds_22_lines(self):
        pdf = PDFBuilder(page_size="A6", page_orientation="PORTRAIT", font_size=9)
        for _ in range(22):
            pdf.println("The quick brown fox jumps over the lazy dog")
        assert pdf.page_number == 1
        assert pdf.layout_state.available_lines == 0

        pdf.println("The quick brown fox jumps over the lazy dog")
        assert pdf.page_number == 2
        assert pdf.layout_state.lines_consumed == 1

    def test_lines_step_down_by_height_plus_spacing(self):
        pdf = PDFBuilder(page_size="A4", page_orientation="PORTRAIT", output_page_number=False)
        calls = []
        pdf.ensure_page()
        _spy(pdf, "draw_text", calls)
        pdf.println("first")
        pdf.println("second")
        y1 = calls[0][1][1]
        y2 = calls[1][1][1]
        assert math.isclose(y1, pdf.effective_page_height() - pdf.page_margin)
        assert math.isclose(y1 - y2, pdf.line_height + pdf.line_spacing)

    def test_font_change_does_not_move_drawn_lines(self):
        pdf = PDFBuilder(page_size="A4", page_orientation="PORTRAIT", output_page_number=False)
        calls = []
        pdf.ensure_page()
        _spy(pdf, "draw_text", calls)
        pdf.println("Hello World")
        before = pdf.layout_state.used_height

        pdf.font_size = 20
        assert pdf.layout_state.used_height == before
        assert pdf.page_number == 1

        pdf.println("Bigger")
        y_big = calls[-1][1][1]
        assert math.isclose(y_big, before - font_line_height(20) - pdf.line_spacing)

    def test_font_change_on_fresh_page_keeps_page(self):
        pdf = PDFBuilder(page_size="A4", page_orientation="PORTRAIT")
        pdf.force_new_page()
        pdf.font_size = 30
        pdf.println("Title", TextAlignment.MIDDLE)
        assert pdf.page_number == 1

    def test_force_new_page_always_adds_page(self):
        pdf = PDFBuilder()
        pdf.force_new_page()
        pdf.force_new_page()
        assert pdf.page_number == 2
        assert len(PdfReader(BytesIO(_pdf_bytes(pdf))).pages) == 2


class TestPrintAndBackground:
    def test_println_background_spans_margins(self):
        pdf = PDFBuilder(page_size="A4", page_orientation="PORTRAIT", output_page_number=False)
        calls = []
        pdf.ensure_page()
        _spy(pdf, "draw_filled_rect", calls)
        _spy(pdf, "draw_text", calls)
        pdf.println("shaded", bg_color=colors.yellow)

        assert [c[0] for c in calls] == ["draw_filled_rect", "draw_text"]
        x, y, width, height, color = calls[0][1]
        assert x == pdf.page_margin
        assert math.isclose(width, pdf.effective_page_width() - 2 * pdf.page_margin)
        assert height == pdf.line_height
        assert y == calls[1][1][1]
        assert color == colors.yellow

    def test_println_without_background_draws_text_only(self):
        pdf = PDFBuilder(output_page_number=False)
        calls = []
        pdf.ensure_page()
        _spy(pdf, "draw_filled_rect", calls)
        pdf.println("plain")
        assert calls == []

    def test_print_does_not_consume_lines(self):
        pdf = PDFBuilder()
        pdf.print(100, 100, "floating", TextAttributes(font_size=9, fg_color=colors.red))
        assert pdf.page_number == 1
        assert pdf.layout_state.lines_consumed == 0

    def test_alignment_positions(self):
        pdf = PDFBuilder(output_page_number=False)
        calls = []
        pdf.ensure_page()
        _spy(pdf, "draw_text", calls)
        pdf.println("Right", TextAlignment.RIGHT)
        pdf.println("Mid", TextAlignment.MIDDLE)
        w_right = pdf.estimate_string_width("Right")
        w_mid = pdf.estimate_string_width("Mid")
        assert math.isclose(calls[0][1][0], 792 - 40 - w_right)
        assert math.isclose(calls[1][1][0], (792 - w_mid) / 2)

    def test_landscape_letter_effective_width(self):
        pdf = PDFBuilder()
        assert pdf.effective_page_width() == 792
        assert pdf.effective_page_height() == 612
        pdf.println("x")
        assert pdf.current_page.rotation == 90
        assert pdf.effective_page_width() == 792

    def test_page_number_is_rendered(self):
        pdf = PDFBuilder(page_size="A4", page_orientation="PORTRAIT")
        pdf.println("body")
        pdf.force_new_page()
        data = _pdf_bytes(pdf)
        with pdfplumber.open(BytesIO(data)) as doc:
            assert "Page Number 1" in doc.pages[0].extract_text()
            assert "Page Number 2" in doc.pages[1].extract_text()

    def test_page_number_can_be_disabled(self):
        pdf = PDFBuilder(page_size="A4", page_orientation="PORTRAIT", output_page_number=False)
        pdf.println("body")
        with pdfplumber.open(BytesIO(_pdf_bytes(pdf))) as doc:
            assert "Page Number" not in (doc.pages[0].extract_text() or "")


class TestRows:
    def test_invalid_row_raises_before_page_creation(self):
        pdf = PDFBuilder()
        with pytest.raises(ValueError, match="4003"):
            pdf.println_row(["a"], [1, 2])
        with pytest.raises(ValueError, match="4004"):
            pdf.println_row(["a", "b"], [0, 0])
        with pytest.raises(ValueError, match="4003"):
            pdf.println_row(["a", "b"], [1, 1], [TextAttributes()])
        assert pdf.page_number == 0
        assert pdf.current_page is None

    def test_second_cell_starts_at_prorated_offset(self):
        pdf = PDFBuilder(page_size="A4", page_orientation="PORTRAIT", output_page_number=False)
        pdf.println_row(["Foo", "Bar"], [30, 70])
        drawable = pdf.effective_page_width() - 2 * pdf.page_margin
        with pdfplumber.open(BytesIO(_pdf_bytes(pdf))) as doc:
            chars = doc.pages[0].chars
        x_foo = [c["x0"] for c in chars if c["text"] == "F"][0]
        x_bar = [c["x0"] for c in chars if c["text"] == "B"][0]
        assert math.isclose(x_foo, 40, abs_tol=0.05)
        assert math.isclose(x_bar, 40 + 0.3 * drawable, abs_tol=0.05)

    def test_long_cell_wraps_and_row_consumes_tallest_cell(self):
        pdf = PDFBuilder(page_size="A4", page_orientation="PORTRAIT", output_page_number=False)
        text = "alpha beta gamma delta epsilon zeta eta theta"
        pdf.ensure_page()
        first_y = pdf.layout_state.page.effective_height - pdf.page_margin
        col_width = 0.1 * (pdf.effective_page_width() - 2 * pdf.page_margin)
        expected = len(split_text_by_width(text, col_width, pdf.font_size))
        assert expected > 1

        n = pdf.println_row([text, "short"], [10, 90])
        assert n == expected
        state = pdf.layout_state
        assert state.lines_consumed == expected
        assert math.isclose(state.used_height, first_y - (expected - 1) * pdf.line_height)

    def test_row_background_covers_wrapped_lines(self):
        pdf = PDFBuilder(page_size="A4", page_orientation="PORTRAIT", output_page_number=False)
        calls = []
        pdf.ensure_page()
        _spy(pdf, "draw_filled_rect", calls)
        n = pdf.println_row(
            ["alpha beta gamma delta epsilon zeta", "x"],
            [10, 90],
            [TextAttributes(bg_color=colors.lightgrey), TextAttributes(bg_color=colors.yellow)],
        )
        assert len(calls) == 2
        expected_height = font_line_height(pdf.font_size) + (n - 1) * pdf.line_height
        for _, (x, y, width, height, color) in calls:
            assert math.isclose(height, expected_height)
            assert math.isclose(y, pdf.layout_state.used_height)

    def test_row_moves_to_new_page_when_it_does_not_fit(self):
        pdf = PDFBuilder(page_size="A6", page_orientation="PORTRAIT", font_size=9)
        for _ in range(20):
            pdf.println("filler")
        assert pdf.layout_state.available_lines == 2

        text = "one two three four five six"
        n = pdf.println_row([text, "x"], [1, 9])
        assert n > 2
        assert pdf.page_number == 2
        assert pdf.layout_state.lines_consumed == n

    def test_tall_row_on_empty_page_stays(self):
        pdf = PDFBuilder(page_size="A6", page_orientation="PORTRAIT", font_size=9)
        pdf.ensure_page()
        words = " ".join(["word"] * 40)
        pdf.println_row([words, "x"], [1, 9])
        assert pdf.page_number == 1
        assert pdf.layout_state.is_full


class TestSaveAndClose:
    def test_save_without_pages_writes_one_blank_page(self):
        pdf = PDFBuilder()
        data = _pdf_bytes(pdf)
        assert data.startswith(b"%PDF")
        assert len(PdfReader(BytesIO(data)).pages) == 1

    def test_save_to_str_path(self, tmp_path):
        target = tmp_path / "out" / "report.pdf"
        pdf = PDFBuilder()
        pdf.println("x")
        pdf.save(str(target))
        assert target.read_bytes().startswith(b"%PDF")

    def test_save_to_pathlike(self, tmp_path):
        target = tmp_path / "report.pdf"
        pdf = PDFBuilder()
        pdf.println("x")
        pdf.save(target)
        assert target.read_bytes().startswith(b"%PDF")

    def test_save_to_open_file_handle(self, tmp_path):
        target = tmp_path / "report.pdf"
        pdf = PDFBuilder()
        pdf.println("x")
        with open(target, "wb") as f:
            pdf.save(f)
        assert target.read_bytes().startswith(b"%PDF")

    def test_operations_after_save_raise(self):
        pdf = PDFBuilder()
        pdf.println("x")
        _pdf_bytes(pdf)
        assert pdf.closed
        with pytest.raises(RuntimeError, match="5001"):
            pdf.println("again")
        with pytest.raises(RuntimeError, match="5001"):
            pdf.force_new_page()
        with pytest.raises(RuntimeError, match="5001"):
            pdf.save(BytesIO())

    def test_close_is_idempotent_and_blocks_save(self):
        pdf = PDFBuilder()
        pdf.close()
        pdf.close()
        with pytest.raises(RuntimeError, match="already closed"):
            pdf.save(BytesIO())

    def test_context_manager_closes(self):
        with PDFBuilder() as pdf:
            pdf.println("x")
        assert pdf.closed

    def test_failed_write_allows_only_retrying_save(self):
        class BrokenStream:
            def write(self, data):
                raise OSError("disk full")

        pdf = PDFBuilder()
        pdf.println("x")
        with pytest.raises(OSError):
            pdf.save(BrokenStream())
        assert not pdf.closed

        with pytest.raises(RuntimeError, match="5002"):
            pdf.println("after failed save")
        with pytest.raises(RuntimeError, match="5002"):
            pdf.font_size = 20

        buf = BytesIO()
        pdf.save(buf)
        assert pdf.closed
        assert buf.getvalue().startswith(b"%PDF")

    @pytest.mark.parametrize(
        "name, value",
        [
            ("font_size", 20),
            ("font_name", "Courier"),
            ("page_size", "A4"),
            ("page_orientation", "PORTRAIT"),
            ("page_margin", 10),
            ("line_spacing", 2),
        ],
    )
    def test_configuration_after_close_raises(self, name, value):
        pdf = PDFBuilder()
        pdf.close()
        with pytest.raises(RuntimeError, match="already closed"):
            setattr(pdf, name, value)

    def test_landscape_pages_carry_rotation(self):
        pdf = PDFBuilder()
        pdf.println("landscape")
        pdf.page_orientation = "PORTRAIT"
        pdf.force_new_page()
        pages = PdfReader(BytesIO(_pdf_bytes(pdf))).pages
        assert pages[0].get("/Rotate", 0) == 90
        assert pages[1].get("/Rotate", 0) == 0


class TestConfigurationValidation:
    def test_non_positive_font_size_rejected(self):
        with pytest.raises(ValueError, match="4002"):
            PDFBuilder(font_size=0)
        pdf = PDFBuilder()
        with pytest.raises(ValueError):
            pdf.font_size = -3
        assert pdf.font_size == 12

    def test_negative_margin_rejected(self):
        with pytest.raises(ValueError):
            PDFBuilder(page_margin=-1)

    def test_unknown_page_size_rejected(self):
        pdf = PDFBuilder()
        with pytest.raises(ValueError):
            pdf.page_size = "B7"
