"""
文件路径：pdfprintln/processors/layout.py

说明：行游标（Layout Cursor）与当前页状态。

- LayoutState 为唯一的可变页状态，只由 LayoutCursor 修改：
  建页时（start_page）重置，每次提交行（commit）递减可用行数。
- 首行按距页顶的绝对偏移定位，之后各行相对上一行基线定位；
  lines_consumed == 0 时两条公式结果一致。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..components import PageGeometry, get_logger


logger = get_logger(__name__)


@dataclass
class LayoutState:
    """当前页状态。

    属性：
        page: 当前页几何信息；None 表示尚未建页。
        max_lines: 本页估算的最大行数。
        available_lines: 本页剩余可用行数，<= 0 即视为满页。
        lines_consumed: 本页已提交的行数。
        used_height: 最后一行的基线 Y；None 表示本页尚未提交任何行。
        cur_x, cur_y: 最后一次提交的起点坐标。
    """

    page: Optional[PageGeometry] = None
    max_lines: int = 0
    available_lines: int = 0
    lines_consumed: int = 0
    used_height: Optional[float] = None
    cur_x: float = 0.0
    cur_y: float = 0.0

    @property
    def is_full(self) -> bool:
        return self.available_lines <= 0


def estimate_max_lines(
    max_height: float,
    line_height: float,
    margin_top: float,
    margin_bottom: float,
    line_spacing: float,
) -> int:
    """估算给定高度内可容纳的行数。

    公式：floor((max_height - margin_top - margin_bottom) / (line_height + line_spacing)) + 1

    末尾的 +1 表示首行锚定在上边距处，不占用一个完整的“行高 + 行距”单位。
    """
    step = float(line_height) + float(line_spacing)
    return int(math.floor((float(max_height) - margin_top - margin_bottom) / step)) + 1


class LayoutCursor:
    """行游标：决定换页、计算下一行 Y 坐标、维护行数计数。"""

    def __init__(self, line_height: float, line_spacing: float, margin: float) -> None:
        self.line_height = float(line_height)
        self.line_spacing = float(line_spacing)
        self.margin = float(margin)
        self.state = LayoutState()

    def estimate_max_lines(
        self,
        max_height: float,
        line_height: float,
        margin_top: float,
        margin_bottom: float,
    ) -> int:
        return estimate_max_lines(max_height, line_height, margin_top, margin_bottom, self.line_spacing)

    def needs_new_page(self, force: bool = False) -> bool:
        """强制、尚无页面或本页已满时需要新页。"""
        return force or self.state.page is None or self.state.is_full

    def start_page(self, page: PageGeometry) -> None:
        """切换到新页并重置计数。"""
        state = self.state
        state.page = page
        state.max_lines = state.available_lines = self.estimate_max_lines(
            page.effective_height, self.line_height, self.margin, self.margin
        )
        state.lines_consumed = 0
        state.cur_x = 0.0
        state.cur_y = page.effective_height
        state.used_height = None
        logger.debug(
            "新页行数预算：max_lines=%s, effective=%.2fx%.2f",
            state.max_lines,
            page.effective_width,
            page.effective_height,
        )

    def next_line_y(self) -> float:
        """下一行的基线 Y 坐标。"""
        state = self.state
        if state.page is None:
            raise RuntimeError("尚未创建页面，无法计算行坐标")
        if state.used_height is None:
            return (
                state.page.effective_height
                - self.margin
                - state.lines_consumed * (self.line_height + self.line_spacing)
            )
        return state.used_height - self.line_height - self.line_spacing

    def commit(self, x: float, y: float, lines: int = 1, last_y: Optional[float] = None) -> None:
        """提交已绘制的行。

        参数：
            x, y: 本次绘制的起点坐标。
            lines: 本次占用的行数（表格行取最高单元格的行数）。
            last_y: 最后一行的基线 Y；None 表示与 y 相同。
        """
        state = self.state
        state.cur_x = x
        state.cur_y = y
        state.used_height = y if last_y is None else last_y
        state.lines_consumed += lines
        state.available_lines -= lines

    def set_line_height(self, line_height: float) -> None:
        """更新行高；已有页面时以已用高度为新上限重算剩余行数，已绘制内容不动。"""
        self.line_height = float(line_height)
        state = self.state
        if state.page is None:
            return
        if state.used_height is None:
            state.available_lines = (
                self.estimate_max_lines(state.page.effective_height, self.line_height, self.margin, self.margin)
                - state.lines_consumed
            )
        else:
            state.available_lines = self.estimate_max_lines(
                state.used_height - self.line_spacing - self.margin, self.line_height, 0, 0
            )
        state.max_lines = state.lines_consumed + state.available_lines
        logger.debug(
            "重算剩余行数：available_lines=%s, used_height=%s",
            state.available_lines,
            state.used_height,
        )


__all__ = ["LayoutState", "LayoutCursor", "estimate_max_lines"]
