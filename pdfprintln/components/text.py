"""
文件路径：pdfprintln/components/text.py

说明：文本度量与按词换行相关工具函数。

- 宽度估算直接使用 ReportLab 字体度量（pdfmetrics.stringWidth），
  即 Σ 字形宽度 * 字号 / 1000，不考虑字偶距（kerning）。
- 行高依据字体包围盒（FontBBox）高度换算。
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from reportlab.pdfbase import pdfmetrics

from ..variables import (
    CONST_FONT_METRICS_UNITS,
    CONST_STANDARD_FONT_BBOX,
    STYLE_FONT_NAME,
)


# 换行候选点：每个“以非单词字符结尾的最长片段”之后，末尾的单词单独成段
_WRAP_TOKEN_RE = re.compile(r"\w*\W|\w+\Z")


def estimate_text_width(
    text: str,
    font_size: float,
    font_name: str = STYLE_FONT_NAME,
) -> float:
    """估算文本在指定字体与字号下的渲染宽度（pt）。

    参数：
        text: 待度量文本。
        font_size: 字号。
        font_name: 已注册（或标准 14）字体名。

    返回：
        宽度（pt）；空文本返回 0.0。

    异常：
        KeyError: 字体未注册。
    """
    if not text:
        return 0.0
    return float(pdfmetrics.stringWidth(text, font_name, font_size))


def font_bbox(font_name: str = STYLE_FONT_NAME) -> Tuple[float, float, float, float]:
    """返回字体包围盒 (llx, lly, urx, ury)，单位 1/1000 em。

    优先使用字体对象自带的 bbox（TTF/嵌入 Type1），标准 14 字体查 AFM 表，
    都不可用时退化为 (0, descent, 0, ascent)。
    """
    face = pdfmetrics.getFont(font_name).face
    bbox = getattr(face, "bbox", None)
    if bbox and len(bbox) == 4:
        return tuple(float(v) for v in bbox)  # type: ignore[return-value]
    std = CONST_STANDARD_FONT_BBOX.get(face.name)
    if std is not None:
        return tuple(float(v) for v in std)  # type: ignore[return-value]
    return (0.0, float(face.descent), 0.0, float(face.ascent))


def font_line_height(font_size: float, font_name: str = STYLE_FONT_NAME) -> float:
    """按字体包围盒高度估算行高：bbox_height / 1000 * font_size。"""
    _, lly, _, ury = font_bbox(font_name)
    return (ury - lly) / CONST_FONT_METRICS_UNITS * float(font_size)


def find_wrap_points(text: str) -> List[int]:
    """返回允许断行的位置（各片段的结束偏移，升序）。

    片段边界紧跟在任意非单词字符之后，因此标点与空格附着在前一个单词末尾：

        >>> find_wrap_points("The quick, fox")
        [4, 10, 11, 14]
    """
    return [m.end() for m in _WRAP_TOKEN_RE.finditer(text)]


def split_text_by_width(
    text: str,
    max_width: Optional[float],
    font_size: float,
    font_name: str = STYLE_FONT_NAME,
) -> List[str]:
    """按最大宽度在单词边界处将文本分为多行。

    - 返回值永不为空：空字符串返回 [""]。
    - 只在 find_wrap_points 给出的位置断行，不会拆开单词；
      单个单词宽于 max_width 时独占一行并允许溢出。
    - 各行按顺序拼接可还原原文本（不丢弃空格）。
    - max_width 为 None 时不换行。
    """
    if text is None:
        text = ""
    if max_width is None:
        return [text]

    lines: List[str] = []
    line_start = 0
    prev_point = 0
    for point in find_wrap_points(text):
        width = estimate_text_width(text[line_start:point], font_size, font_name)
        if width > max_width and line_start < prev_point:
            lines.append(text[line_start:prev_point])
            line_start = prev_point
        prev_point = point
    lines.append(text[line_start:])
    return lines


__all__ = [
    "estimate_text_width",
    "font_bbox",
    "font_line_height",
    "find_wrap_points",
    "split_text_by_width",
]
