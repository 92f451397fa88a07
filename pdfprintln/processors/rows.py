"""
文件路径：pdfprintln/processors/rows.py

说明：表格行（多单元格）布局计算。

- 可绘制总宽 = 有效页宽 - 2 * 边距，按权重比例分配到各单元格；
- 各单元格独立按词换行，换行后的子行自行首 Y 起每行下移一个 line_height
  （同一逻辑行的子行之间不加 line_spacing）；
- 整行占用行数 = 各单元格行数的最大值，最后一行 Y 取最高单元格的末行。

本模块只做计算，不绘制。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..attributes import BackgroundBox, TextAttributes
from ..components import (
    column_offsets,
    font_line_height,
    prorate_widths,
    split_text_by_width,
    validate_row_shape,
)
from ..variables import ERR_ROW_SHAPE_MISMATCH


@dataclass(frozen=True)
class CellPlan:
    """单元格布局结果。"""

    x: float
    width: float
    font_size: int
    lines: List[str]
    attributes: TextAttributes

    def line_y(self, row_y: float, index: int, line_height: float) -> float:
        return row_y - index * line_height


@dataclass(frozen=True)
class RowPlan:
    """整行布局结果。"""

    y: float
    line_height: float
    cells: List[CellPlan]

    @property
    def line_count(self) -> int:
        return max(len(c.lines) for c in self.cells)

    @property
    def last_y(self) -> float:
        """最高单元格末行的基线 Y。"""
        return self.y - (self.line_count - 1) * self.line_height


def validate_row_input(
    cells: Sequence[object],
    weights: Sequence[float],
    attributes: Optional[Sequence[Optional[TextAttributes]]] = None,
) -> None:
    """在 API 边界校验表格行输入，不合法时立即抛出 ValueError。"""
    validate_row_shape(len(cells), weights)
    if attributes is not None and len(attributes) != len(cells):
        raise ValueError(
            f"[{ERR_ROW_SHAPE_MISMATCH}] 单元格数 {len(cells)} 与属性数 {len(attributes)} 不一致"
        )


def plan_row(
    cells: Sequence[object],
    weights: Sequence[float],
    attributes: Optional[Sequence[Optional[TextAttributes]]],
    *,
    page_width: float,
    margin: float,
    y: float,
    line_height: float,
    default_font_size: int,
    font_name: str,
) -> RowPlan:
    """计算一行表格的单元格位置与换行结果。

    参数：
        cells: 单元格值（按 str() 转为文本，None 视为空串）。
        weights: 各单元格宽度权重。
        attributes: 各单元格属性；None 或元素为 None 时使用默认属性。
        page_width: 有效页宽。
        margin: 页面边距。
        y: 行首基线 Y。
        line_height: 子行间距（会话行高）。
        default_font_size: 会话当前字号。
        font_name: 字体名。

    异常：
        ValueError: 单元格/权重/属性数量不一致或权重非法。
    """
    validate_row_input(cells, weights, attributes)

    total_width = page_width - margin * 2
    widths = prorate_widths(total_width, weights)
    offsets = column_offsets(margin, widths)

    staged = []
    for i, value in enumerate(cells):
        attr = (attributes[i] if attributes is not None else None) or TextAttributes()
        size = attr.resolved_font_size(default_font_size)
        text = "" if value is None else str(value)
        lines = split_text_by_width(text, widths[i], size, font_name)
        staged.append((offsets[i], widths[i], size, lines, attr))

    row_lines = max(len(s[3]) for s in staged)
    plans: List[CellPlan] = []
    for x, width, size, lines, attr in staged:
        box = BackgroundBox(
            x=x,
            y=y - (row_lines - 1) * line_height,
            width=width,
            height=font_line_height(size, font_name) + (row_lines - 1) * line_height,
        )
        plans.append(
            CellPlan(
                x=x,
                width=width,
                font_size=size,
                lines=lines,
                attributes=attr.with_font_size(size).with_background(box),
            )
        )
    return RowPlan(y=y, line_height=line_height, cells=plans)


__all__ = ["CellPlan", "RowPlan", "validate_row_input", "plan_row"]
