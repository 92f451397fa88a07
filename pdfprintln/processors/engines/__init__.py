"""
文件路径：pdfprintln/processors/engines/__init__.py

说明：绘制后端包，当前仅有 `reportlab.py`。
"""

from typing import List

__all__: List[str] = []
