"""
文件路径：pdfprintln/components/page.py

说明：页面尺寸、方向与“有效宽高”相关工具。

坐标约定：ReportLab 左下角为原点。横向页面通过页面旋转 90° 实现，
此时媒体框（media box）的宽高与视觉上的宽高互换，下游所有读取页面尺寸的
逻辑都必须经由 effective_page_width / effective_page_height。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from reportlab.lib import pagesizes

from ..variables import CONST_LANDSCAPE_ROTATION


class PageSize(Enum):
    """支持的纸张尺寸。"""

    A0 = "A0"
    A1 = "A1"
    A2 = "A2"
    A3 = "A3"
    A4 = "A4"
    A5 = "A5"
    A6 = "A6"
    LETTER = "LETTER"

    @classmethod
    def parse(cls, value: "PageSize | str") -> "PageSize":
        """接受枚举或不区分大小写的名称（如 "a4"、"Letter"）。"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            raise ValueError(f"未知纸张尺寸：{value}") from exc


class PageOrientation(Enum):
    """页面方向。"""

    PORTRAIT = "PORTRAIT"
    LANDSCAPE = "LANDSCAPE"

    @classmethod
    def parse(cls, value: "PageOrientation | str") -> "PageOrientation":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            raise ValueError(f"未知页面方向：{value}") from exc


_PAGE_RECTS = {
    PageSize.A0: pagesizes.A0,
    PageSize.A1: pagesizes.A1,
    PageSize.A2: pagesizes.A2,
    PageSize.A3: pagesizes.A3,
    PageSize.A4: pagesizes.A4,
    PageSize.A5: pagesizes.A5,
    PageSize.A6: pagesizes.A6,
    PageSize.LETTER: pagesizes.LETTER,
}


def page_rect(size: PageSize) -> Tuple[float, float]:
    """纸张枚举 -> 媒体框 (width, height)，始终为纵向尺寸。"""
    return _PAGE_RECTS.get(size, pagesizes.LETTER)


def rotation_for(orientation: PageOrientation) -> int:
    """横向页面旋转 90°，纵向不旋转。"""
    return CONST_LANDSCAPE_ROTATION if orientation is PageOrientation.LANDSCAPE else 0


def _is_quarter_turn(rotation: int) -> bool:
    return (int(rotation) % 180) == 90


@dataclass(frozen=True)
class PageGeometry:
    """已创建页面的几何信息（页面句柄的只读视图）。

    属性：
        size: 纸张枚举。
        media_width, media_height: 媒体框宽高（pt）。
        rotation: 页面旋转角度（0 或 90）。
    """

    size: PageSize
    media_width: float
    media_height: float
    rotation: int = 0

    @property
    def effective_width(self) -> float:
        return effective_page_width(self.media_width, self.media_height, self.rotation)

    @property
    def effective_height(self) -> float:
        return effective_page_height(self.media_width, self.media_height, self.rotation)

    @property
    def is_landscape(self) -> bool:
        return _is_quarter_turn(self.rotation)


def effective_page_width(media_width: float, media_height: float, rotation: int = 0) -> float:
    """页面视觉宽度：旋转 90° 时取媒体框高度。"""
    return float(media_height if _is_quarter_turn(rotation) else media_width)


def effective_page_height(media_width: float, media_height: float, rotation: int = 0) -> float:
    """页面视觉高度：旋转 90° 时取媒体框宽度。"""
    return float(media_width if _is_quarter_turn(rotation) else media_height)


__all__ = [
    "PageSize",
    "PageOrientation",
    "PageGeometry",
    "page_rect",
    "rotation_for",
    "effective_page_width",
    "effective_page_height",
]
