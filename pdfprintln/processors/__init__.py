"""
文件路径：pdfprintln/processors/__init__.py

说明：
- 排版处理子包：
  - layout.py（当前页状态、行游标、最大行数估算）
  - rows.py（表格行分栏与按词换行布局）
  - engines/reportlab.py（ReportLab 页面与绘制后端）
"""

from typing import List

__all__: List[str] = []
