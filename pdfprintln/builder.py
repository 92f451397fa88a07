"""
文件路径：pdfprintln/builder.py

模块职责：
- 文档会话 PDFBuilder：按行（println）或按表格行（println_row）输出文本，
  自动计算坐标、在页面写满时自动换页，并为长单元格文本按词换行。
- 页面创建、内容流生命周期与绘制均委托 ReportLab 后端；
  行游标（LayoutCursor）持有唯一的可变页状态。

注意：
- 坐标系为 ReportLab 左下角原点；横向页面已由后端做坐标变换，
  布局计算统一使用“有效宽高”。
- 会话为单线程同步对象；多线程调用需由调用方自行加锁。
- save()/close() 之后的任何操作都会抛出 RuntimeError。

用法示例：
    with PDFBuilder(page_size="A4", page_orientation="PORTRAIT") as pdf:
        pdf.font_size = 30
        pdf.println("This is a Report", TextAlignment.MIDDLE)
        pdf.println_row(["Foo", "Bar"], [30, 70])
        pdf.save("report.pdf")
"""

from __future__ import annotations

from typing import Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.colors import Color

from .attributes import BackgroundBox, TextAlignment, TextAttributes
from .components import (
    ErrorHandler,
    PageGeometry,
    PageOrientation,
    PageSize,
    align_x,
    estimate_text_width,
    font_line_height,
    get_logger,
    page_rect,
    rotation_for,
)
from .processors.engines.reportlab import ReportLabBackend, SaveTarget
from .processors.layout import LayoutCursor, LayoutState
from .processors.rows import RowPlan, plan_row, validate_row_input
from .variables import (
    CONST_DEFAULT_ORIENTATION,
    CONST_DEFAULT_PAGE_SIZE,
    CONST_OUTPUT_PAGE_NUMBER_DEFAULT,
    ERR_DATA_INVALID,
    ERR_DOCUMENT_RENDERED,
    ERR_SESSION_CLOSED,
    STYLE_FONT_NAME,
    STYLE_FONT_SIZE_DEFAULT,
    STYLE_LINE_SPACING,
    STYLE_PAGE_MARGIN,
    STYLE_PAGE_NUMBER_FONT_SIZE,
    STYLE_PAGE_NUMBER_PATTERN,
)


logger = get_logger(__name__)


class PDFBuilder:
    """逐行输出文本的 PDF 文档会话。

    参数：
        page_size: 纸张（PageSize 或名称，如 "A4"），默认 LETTER。
        page_orientation: 方向（PageOrientation 或名称），默认 LANDSCAPE。
        font_name: 字体名（须已在 ReportLab 注册或为标准 14 字体）。
        font_size: 正文字号。
        page_margin: 页面四周边距（pt）。
        line_spacing: 行距（pt）。
        output_page_number: 是否在每页底部居中输出页码。
        page_number_pattern: 页码格式（% 运算符，如 "Page Number %d"）。
        page_number_font_size: 页码字号。
    """

    def __init__(
        self,
        *,
        page_size: "PageSize | str" = CONST_DEFAULT_PAGE_SIZE,
        page_orientation: "PageOrientation | str" = CONST_DEFAULT_ORIENTATION,
        font_name: str = STYLE_FONT_NAME,
        font_size: int = STYLE_FONT_SIZE_DEFAULT,
        page_margin: float = STYLE_PAGE_MARGIN,
        line_spacing: float = STYLE_LINE_SPACING,
        output_page_number: bool = CONST_OUTPUT_PAGE_NUMBER_DEFAULT,
        page_number_pattern: str = STYLE_PAGE_NUMBER_PATTERN,
        page_number_font_size: int = STYLE_PAGE_NUMBER_FONT_SIZE,
    ) -> None:
        self._backend = ReportLabBackend()
        self._closed = False
        self._font_name = font_name
        self._font_size = self._validate_font_size(font_size)
        self._cursor = LayoutCursor(
            line_height=font_line_height(self._font_size, font_name),
            line_spacing=self._validate_length("line_spacing", line_spacing),
            margin=self._validate_length("page_margin", page_margin),
        )
        self._page_size = PageSize.parse(page_size)
        self._page_orientation = PageOrientation.parse(page_orientation)
        self.output_page_number = bool(output_page_number)
        self.page_number_pattern = page_number_pattern
        self.page_number_font_size = int(page_number_font_size)
        self.page_number = 0

    # -----------------------------
    # 配置
    # -----------------------------
    @staticmethod
    def _validate_font_size(font_size: int) -> int:
        size = int(font_size)
        if size <= 0:
            raise ValueError(ErrorHandler.format_error(ERR_DATA_INVALID, f"字号必须为正数：{font_size}"))
        return size

    @staticmethod
    def _validate_length(name: str, value: float) -> float:
        v = float(value)
        if v < 0:
            raise ValueError(ErrorHandler.format_error(ERR_DATA_INVALID, f"{name} 不能为负数：{value}"))
        return v

    @property
    def page_size(self) -> PageSize:
        return self._page_size

    @page_size.setter
    def page_size(self, value: "PageSize | str") -> None:
        self._check_open()
        self._page_size = PageSize.parse(value)

    @property
    def page_orientation(self) -> PageOrientation:
        return self._page_orientation

    @page_orientation.setter
    def page_orientation(self, value: "PageOrientation | str") -> None:
        self._check_open()
        self._page_orientation = PageOrientation.parse(value)

    @property
    def font_size(self) -> int:
        return self._font_size

    @font_size.setter
    def font_size(self, font_size: int) -> None:
        """设置后续文本字号，并立即重算行高与本页剩余行数。"""
        self.set_font_size(font_size)

    def set_font_size(self, font_size: int) -> None:
        self._check_open()
        self._font_size = self._validate_font_size(font_size)
        self._cursor.set_line_height(font_line_height(self._font_size, self._font_name))

    @property
    def font_name(self) -> str:
        return self._font_name

    @font_name.setter
    def font_name(self, font_name: str) -> None:
        self._check_open()
        line_height = font_line_height(self._font_size, font_name)
        self._font_name = font_name
        self._cursor.set_line_height(line_height)

    @property
    def page_margin(self) -> float:
        return self._cursor.margin

    @page_margin.setter
    def page_margin(self, value: float) -> None:
        self._check_open()
        self._cursor.margin = self._validate_length("page_margin", value)

    @property
    def line_spacing(self) -> float:
        return self._cursor.line_spacing

    @line_spacing.setter
    def line_spacing(self, value: float) -> None:
        self._check_open()
        self._cursor.line_spacing = self._validate_length("line_spacing", value)

    @property
    def line_height(self) -> float:
        return self._cursor.line_height

    @property
    def current_page(self) -> Optional[PageGeometry]:
        return self._cursor.state.page

    @property
    def layout_state(self) -> LayoutState:
        return self._cursor.state

    @property
    def closed(self) -> bool:
        return self._closed

    # -----------------------------
    # 度量
    # -----------------------------
    def estimate_string_width(self, text: str, font_size: Optional[int] = None, font_name: Optional[str] = None) -> float:
        return estimate_text_width(
            text,
            self._font_size if font_size is None else font_size,
            font_name or self._font_name,
        )

    def get_font_height(self, font_size: Optional[int] = None, font_name: Optional[str] = None) -> float:
        return font_line_height(self._font_size if font_size is None else font_size, font_name or self._font_name)

    def estimate_max_lines(self, max_height: float, line_height: float, margin_top: float, margin_bottom: float) -> int:
        return self._cursor.estimate_max_lines(max_height, line_height, margin_top, margin_bottom)

    def _page_or_configured(self, page: Optional[PageGeometry]) -> PageGeometry:
        if page is not None:
            return page
        if self._cursor.state.page is not None:
            return self._cursor.state.page
        width, height = page_rect(self._page_size)
        return PageGeometry(self._page_size, width, height, rotation_for(self._page_orientation))

    def effective_page_width(self, page: Optional[PageGeometry] = None) -> float:
        """有效页宽；未指定页面时取当前页，尚无页面时按当前配置计算。"""
        return self._page_or_configured(page).effective_width

    def effective_page_height(self, page: Optional[PageGeometry] = None) -> float:
        return self._page_or_configured(page).effective_height

    # -----------------------------
    # 分页
    # -----------------------------
    def _check_open(self, allow_rendered: bool = False) -> None:
        """会话关闭后拒绝一切操作；文档已输出（保存失败）后只允许重试保存。"""
        if self._closed:
            raise RuntimeError(ErrorHandler.format_error(ERR_SESSION_CLOSED, "文档会话已关闭（already closed），不能继续操作"))
        if self._backend.rendered and not allow_rendered:
            raise RuntimeError(ErrorHandler.format_error(ERR_DOCUMENT_RENDERED, "文档已输出，只能重试保存，不能继续绘制或修改配置"))

    def ensure_page(self, force: bool = False) -> bool:
        """按需创建新页。

        强制、尚无页面或本页剩余行数 <= 0 时创建新页。

        返回：
            True 表示创建了新页，False 表示继续使用当前页。
        """
        self._check_open()
        if not self._cursor.needs_new_page(force):
            return False

        logger.debug("创建新页：page_size=%s, orientation=%s", self._page_size.value, self._page_orientation.value)
        page = self._backend.new_page(self._page_size, self._page_orientation)
        self.page_number += 1
        self._cursor.start_page(page)
        if self.output_page_number:
            self._add_page_number(page, self.page_number, self.page_number_pattern)
        return True

    def force_new_page(self) -> None:
        """强制为后续输出创建新页。"""
        self.ensure_page(True)

    def _add_page_number(self, page: PageGeometry, number: int, pattern: str) -> None:
        """在页面底部居中（距底边 margin/2）输出页码。"""
        text = pattern % number
        text_width = estimate_text_width(text, self.page_number_font_size, self._font_name)
        x = (page.effective_width - text_width) / 2
        y = self.page_margin / 2
        self.print(x, y, text, TextAttributes(font_size=self.page_number_font_size))

    # -----------------------------
    # 输出
    # -----------------------------
    def print(self, x: float, y: float, text: str, attributes: Optional[TextAttributes] = None) -> None:
        """在绝对坐标绘制文本，不参与行计数。

        背景色与背景框均已设置时，先绘制背景矩形再绘制文字。
        尚无页面时会先创建一页。
        """
        self._check_open()
        if self._cursor.state.page is None:
            self.ensure_page(True)
        attrs = attributes or TextAttributes()
        if attrs.paints_background:
            box = attrs.background
            self._backend.draw_filled_rect(box.x, box.y, box.width, box.height, attrs.bg_color)

        logger.debug("移动文本位置到 x=%.2f y=%.2f", x, y)
        self._backend.draw_text(
            x,
            y,
            self._font_name,
            attrs.resolved_font_size(self._font_size),
            attrs.fg_color,
            "" if text is None else str(text),
        )

    def println(
        self,
        text: str = "",
        alignment: TextAlignment = TextAlignment.LEFT,
        *,
        fg_color: Color = colors.black,
        bg_color: Optional[Color] = None,
    ) -> None:
        """输出一行文本（自动换页）。不带参数时输出空行。

        参数：
            text: 文本内容。
            alignment: 水平对齐方式。
            fg_color: 前景色。
            bg_color: 背景色；None 不绘制背景，否则铺满边距之间的整行。
        """
        self.ensure_page(False)
        page = self._cursor.state.page
        alignment = TextAlignment.parse(alignment)
        text = "" if text is None else str(text)

        text_width = estimate_text_width(text, self._font_size, self._font_name)
        x = align_x(alignment, text_width, page.effective_width, self.page_margin)
        y = self._cursor.next_line_y()

        attrs = TextAttributes(
            font_size=self._font_size,
            fg_color=fg_color,
            bg_color=bg_color,
            background=BackgroundBox(
                x=self.page_margin,
                y=y,
                width=page.effective_width - self.page_margin * 2,
                height=self.line_height,
            ),
            alignment=alignment,
        )
        self.print(x, y, text, attrs)
        self._cursor.commit(x, y)

    def _plan_row(self, cells, weights, attributes) -> RowPlan:
        return plan_row(
            cells,
            weights,
            attributes,
            page_width=self._cursor.state.page.effective_width,
            margin=self.page_margin,
            y=self._cursor.next_line_y(),
            line_height=self.line_height,
            default_font_size=self._font_size,
            font_name=self._font_name,
        )

    def println_row(
        self,
        cells: Sequence[object],
        weights: Sequence[float],
        attributes: Optional[Sequence[Optional[TextAttributes]]] = None,
    ) -> int:
        """按权重比例分栏输出一行表格，单元格文本按词换行。

        参数：
            cells: 单元格值。
            weights: 宽度权重，数量须与 cells 一致，总和须为正。
            attributes: 各单元格属性（可选），数量须与 cells 一致。

        返回：
            本行占用的行数（最高单元格的换行行数）。

        异常：
            ValueError: 输入形状或权重非法。
        """
        self._check_open()
        validate_row_input(cells, weights, attributes)
        self.ensure_page(False)

        plan = self._plan_row(cells, weights, attributes)
        state = self._cursor.state
        if plan.line_count > state.available_lines and state.lines_consumed > 0:
            logger.debug("表格行需要 %s 行，本页仅剩 %s 行，整行移至新页", plan.line_count, state.available_lines)
            self.ensure_page(True)
            plan = self._plan_row(cells, weights, attributes)

        for cell in plan.cells:
            attrs = cell.attributes
            if attrs.paints_background:
                box = attrs.background
                self._backend.draw_filled_rect(box.x, box.y, box.width, box.height, attrs.bg_color)
            for i, line in enumerate(cell.lines):
                self._backend.draw_text(
                    cell.x,
                    cell.line_y(plan.y, i, plan.line_height),
                    self._font_name,
                    cell.font_size,
                    attrs.fg_color,
                    line,
                )

        self._cursor.commit(plan.cells[-1].x, plan.y, lines=plan.line_count, last_y=plan.last_y)
        return plan.line_count

    # -----------------------------
    # 保存与关闭
    # -----------------------------
    def save(self, destination: SaveTarget) -> None:
        """保存到文件路径（str / PathLike）或可写二进制流，随后会话关闭。

        此时会话保持打开，可换目标重试保存，但不能再绘制或修改配置。
        此时会话保持打开，可换目标重试保存。
        """
        self._check_open(allow_rendered=True)
        if self._cursor.state.page is None:
            self.ensure_page(False)
        size = self._backend.save(destination)
        self._closed = True
        logger.info("PDF 已保存：%s（%s 页，%.1f KB）", destination, self.page_number, size / 1024.0)

    def close(self) -> None:
        """关闭会话；未保存的内容被丢弃。重复调用无副作用。"""
        if self._closed:
            return
        self._closed = True
        logger.debug("文档会话已关闭，共 %s 页", self.page_number)

    def __enter__(self) -> "PDFBuilder":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["PDFBuilder"]
