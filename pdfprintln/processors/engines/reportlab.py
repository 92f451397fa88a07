"""
文件路径：pdfprintln/processors/engines/reportlab.py

说明：ReportLab 绘制后端（页面创建、内容流生命周期、绘制与保存）。

- 整个文档使用同一个 canvas，先写入内存缓冲区，保存时再输出到路径或流；
- “关闭当前内容流”（showPage）与“打开新内容流”作为原子操作只在 new_page 中成对出现；
- 横向页面：页面旋转 90°，并在内容流开头应用坐标变换，
  使绘制命令与纵向页面采用相同的“有效宽高”约定。
"""

from __future__ import annotations

import os
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional, Union

from reportlab.lib.colors import Color
from reportlab.pdfgen import canvas

from ...components import (
    ErrorHandler,
    FileHandler,
    PageGeometry,
    PageOrientation,
    PageSize,
    get_logger,
    page_rect,
    rotation_for,
)
from ...variables import ERR_PDF_WRITE_FAILED


logger = get_logger(__name__)


SaveTarget = Union[str, "os.PathLike[str]", BinaryIO]


class ReportLabBackend:
    """基于 ReportLab canvas 的页面与绘制后端。"""

    def __init__(self) -> None:
        self._buffer = BytesIO()
        self._canvas = canvas.Canvas(self._buffer)
        self._stream_open = False
        self._data: Optional[bytes] = None

    @property
    def rendered(self) -> bool:
        """文档是否已输出为字节（此后只允许重试保存）。"""
        return self._data is not None

    # -----------------------------
    # 页面与内容流
    # -----------------------------
    def new_page(self, size: PageSize, orientation: PageOrientation) -> PageGeometry:
        """关闭上一页的内容流，创建指定尺寸与方向的新页并打开其内容流。"""
        if self._data is not None:
            raise RuntimeError("文档已输出，不能再创建页面")
        self.close_page()

        width, height = page_rect(size)
        rotation = rotation_for(orientation)
        c = self._canvas
        c.setPageSize((width, height))
        c.setPageRotation(rotation)

        page = PageGeometry(size=size, media_width=float(width), media_height=float(height), rotation=rotation)
        self._open_stream(page)
        logger.debug("创建页面：size=%s, rotation=%s, media=%.2fx%.2f", size.value, rotation, width, height)
        return page

    def _open_stream(self, page: PageGeometry) -> None:
        c = self._canvas
        c.saveState()
        if page.is_landscape:
            c.transform(0, 1, -1, 0, page.media_width, 0)
        self._stream_open = True

    def close_page(self) -> None:
        """结束当前页的内容流（写入文档）；无打开的内容流时不做任何事。"""
        if not self._stream_open:
            return
        c = self._canvas
        c.restoreState()
        c.showPage()
        self._stream_open = False

    # -----------------------------
    # 绘制
    # -----------------------------
    def _require_stream(self) -> canvas.Canvas:
        if not self._stream_open:
            raise RuntimeError("当前没有打开的页面内容流")
        return self._canvas

    def draw_filled_rect(self, x: float, y: float, width: float, height: float, color: Color) -> None:
        c = self._require_stream()
        c.saveState()
        c.setFillColor(color)
        c.rect(x, y, width, height, stroke=0, fill=1)
        c.restoreState()

    def draw_text(self, x: float, y: float, font_name: str, font_size: float, color: Color, text: str) -> None:
        c = self._require_stream()
        c.saveState()
        c.setFont(font_name, font_size)
        c.setFillColor(color)
        c.drawString(x, y, text)
        c.restoreState()

    # -----------------------------
    # 保存
    # -----------------------------
    def render(self) -> bytes:
        """结束当前页并返回完整 PDF 字节；此后不可再绘制，重复调用返回同一结果。"""
        if self._data is None:
            self.close_page()
            self._canvas.save()
            self._data = self._buffer.getvalue()
        return self._data

    def save(self, destination: SaveTarget) -> int:
        """保存到文件路径或可写二进制流，返回写入字节数。"""
        data = self.render()
        if hasattr(destination, "write"):
            destination.write(data)  # type: ignore[union-attr]
        else:
            target = Path(os.fspath(destination))  # type: ignore[arg-type]
            FileHandler.ensure_parent_writable(target)
            try:
                with open(target, "wb") as f:  # noqa: P103
                    f.write(data)
            except OSError:
                logger.error(ErrorHandler.format_error(ERR_PDF_WRITE_FAILED, f"PDF 写入失败：{target}"))
                raise
        return len(data)


__all__ = ["ReportLabBackend", "SaveTarget"]
