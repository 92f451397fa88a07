"""
文件路径：pdfprintln/__init__.py

说明：
- 基于 ReportLab 的逐行文本排版引擎：自动换页、对齐、按权重分栏与按词换行；
- 对外入口为 `PDFBuilder`，文字属性见 `TextAttributes` / `TextAlignment`，
  纸张与方向见 `PageSize` / `PageOrientation`。
"""

from .attributes import BackgroundBox, TextAlignment, TextAttributes
from .builder import PDFBuilder
from .components import PageOrientation, PageSize

__all__ = [
    "PDFBuilder",
    "TextAttributes",
    "TextAlignment",
    "BackgroundBox",
    "PageSize",
    "PageOrientation",
]
