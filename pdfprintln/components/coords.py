"""
文件路径：pdfprintln/components/coords.py

说明：水平坐标计算（对齐、按权重分栏）。ReportLab 坐标系左下角为原点。
"""

from __future__ import annotations

from typing import List, Sequence

from ..attributes import TextAlignment
from ..variables import ERR_ROW_SHAPE_MISMATCH, ERR_ROW_WEIGHT_INVALID


def align_x(
    alignment: TextAlignment,
    text_width: float,
    page_width: float,
    margin: float,
) -> float:
    """按对齐方式计算单行文本的起点 X。

    - LEFT：贴左边距。
    - RIGHT：文本右端贴右边距。
    - MIDDLE：在整页宽度内居中（不考虑边距）。
    """
    if alignment is TextAlignment.RIGHT:
        return page_width - margin - text_width
    if alignment is TextAlignment.MIDDLE:
        return (page_width - text_width) / 2
    return margin


def validate_row_shape(cell_count: int, weights: Sequence[float]) -> float:
    """校验表格行的单元格数与权重，返回权重总和。

    异常：
        ValueError: 单元格为空、数量不一致、存在负权重或总权重不为正。
    """
    if cell_count <= 0:
        raise ValueError(f"[{ERR_ROW_SHAPE_MISMATCH}] 表格行至少需要一个单元格")
    if len(weights) != cell_count:
        raise ValueError(
            f"[{ERR_ROW_SHAPE_MISMATCH}] 单元格数 {cell_count} 与权重数 {len(weights)} 不一致"
        )
    if any(float(w) < 0 for w in weights):
        raise ValueError(f"[{ERR_ROW_WEIGHT_INVALID}] 权重不能为负数：{list(weights)}")
    total = float(sum(float(w) for w in weights))
    if total <= 0:
        raise ValueError(f"[{ERR_ROW_WEIGHT_INVALID}] 权重总和必须为正：{list(weights)}")
    return total


def prorate_widths(total_width: float, weights: Sequence[float]) -> List[float]:
    """按权重比例分配总宽度：width_i = total_width * w_i / Σw。"""
    total_weight = validate_row_shape(len(weights), weights)
    return [total_width * float(w) / total_weight for w in weights]


def column_offsets(margin: float, widths: Sequence[float]) -> List[float]:
    """各栏起点 X：margin + 前序栏宽之和。"""
    offsets: List[float] = []
    taken = 0.0
    for w in widths:
        offsets.append(margin + taken)
        taken += w
    return offsets


__all__ = [
    "align_x",
    "validate_row_shape",
    "prorate_widths",
    "column_offsets",
]
