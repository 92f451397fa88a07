"""
文件路径：pdfprintln/attributes.py

模块职责：
- 定义单次打印单元的文字属性（字号、前景色、背景色、背景框、对齐方式）。
- 属性对象为短生命周期值对象：每次调用构造，不在会话中持久保存。

说明：
- 背景色 None 表示“不绘制背景矩形”；背景框 None 表示“尚未定位”。
- 字号 None 表示沿用会话当前字号。
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.colors import Color


class TextAlignment(Enum):
    """水平对齐方式。"""

    LEFT = "LEFT"
    MIDDLE = "MIDDLE"
    RIGHT = "RIGHT"

    @classmethod
    def parse(cls, value: "TextAlignment | str") -> "TextAlignment":
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper()
        if key == "CENTER":
            key = "MIDDLE"
        try:
            return cls(key)
        except ValueError as exc:
            raise ValueError(f"未知对齐方式：{value}") from exc


@dataclass(frozen=True)
class BackgroundBox:
    """背景矩形（左下角 x, y 与宽高，单位 pt）。"""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TextAttributes:
    """文字属性。

    属性：
        font_size: 字号；None 使用会话当前字号。
        fg_color: 前景色（ReportLab Color）。
        bg_color: 背景色；None 表示不绘制背景。
        background: 背景矩形；None 表示未设置，此时即便有背景色也不绘制。
        alignment: 水平对齐方式。
    """

    font_size: Optional[int] = None
    fg_color: Color = colors.black
    bg_color: Optional[Color] = None
    background: Optional[BackgroundBox] = None
    alignment: TextAlignment = TextAlignment.LEFT

    def with_font_size(self, font_size: Optional[int]) -> "TextAttributes":
        return replace(self, font_size=font_size)

    def with_fg_color(self, color: Color) -> "TextAttributes":
        return replace(self, fg_color=color)

    def with_bg_color(self, color: Optional[Color]) -> "TextAttributes":
        return replace(self, bg_color=color)

    def with_background(self, box: Optional[BackgroundBox]) -> "TextAttributes":
        return replace(self, background=box)

    def with_alignment(self, alignment: TextAlignment) -> "TextAttributes":
        return replace(self, alignment=alignment)

    @property
    def paints_background(self) -> bool:
        """背景色与背景框均已设置时才绘制背景。"""
        return self.bg_color is not None and self.background is not None

    def resolved_font_size(self, default: int) -> int:
        return int(self.font_size) if self.font_size is not None else int(default)


__all__ = ["TextAlignment", "BackgroundBox", "TextAttributes"]
