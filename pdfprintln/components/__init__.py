"""
文件路径：pdfprintln/components/__init__.py

说明：
- 通用组件包入口：日志、文件与路径、错误信息格式化；
- 按职责拆分的子模块：`components/{coords.py, page.py, text.py}`；
- 业务模块与测试统一使用 `from pdfprintln.components import ...` 导入。
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional

from ..variables import (
    PATH_LOGS_DIR,
    PATH_OUTPUT_DIR,
    PATH_LOG_FILE,
    CONST_DEFAULT_OUTPUT_SUFFIX,
    CONST_OUTPUT_PREFIX_DEFAULT,
    CONST_LOG_FORMAT,
    CONST_LOG_DATEFMT,
    ERR_PATH_NOT_WRITABLE,
    ERR_FILE_NOT_FOUND,
)

# 聚合导出：拆分后的子模块
from .coords import (
    align_x,
    validate_row_shape,
    prorate_widths,
    column_offsets,
)
from .page import (
    PageSize,
    PageOrientation,
    PageGeometry,
    page_rect,
    rotation_for,
    effective_page_width,
    effective_page_height,
)
from .text import (
    estimate_text_width,
    font_bbox,
    font_line_height,
    find_wrap_points,
    split_text_by_width,
)


# =============================
# 日志工具
# =============================
_LOGGER_CONFIGURED: bool = False


def get_logger(name: str) -> logging.Logger:
    """获取 logger，首次调用时配置文件与控制台双输出。

    参数：
        name: 日志记录器名称（一般使用 __name__）。

    返回：
        logging.Logger 对象。

    说明：
        日志目录不可创建时仅输出到控制台。
    """
    global _LOGGER_CONFIGURED
    if not _LOGGER_CONFIGURED:
        handlers: List[logging.Handler] = [logging.StreamHandler()]
        try:
            PATH_LOGS_DIR.mkdir(parents=True, exist_ok=True)
            handlers.insert(0, logging.FileHandler(PATH_LOG_FILE, encoding="utf-8"))
        except OSError:
            pass
        logging.basicConfig(
            level=logging.INFO,
            format=CONST_LOG_FORMAT,
            datefmt=CONST_LOG_DATEFMT,
            handlers=handlers,
        )
        _LOGGER_CONFIGURED = True
    return logging.getLogger(name)


# =============================
# 文件操作
# =============================
class FileHandler:
    """文件与路径相关的通用处理器。"""

    @staticmethod
    def validate_readable_file(path: Path) -> None:
        """校验文件可读。

        异常：
            FileNotFoundError: 文件不存在或不可读。
        """
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"[{ERR_FILE_NOT_FOUND}] 文件不存在或不可读: {path}")

    @staticmethod
    def ensure_parent_writable(target: Path) -> None:
        """确保目标文件的父目录可写，不存在则创建。

        异常：
            PermissionError: 目录不可写。
        """
        parent = target.parent
        parent.mkdir(parents=True, exist_ok=True)
        # Windows 上 os.access 可能不可靠，尝试创建临时文件验证
        probe = parent / f".__writable_probe_{int(time.time()*1000)}"
        try:
            with open(probe, "w", encoding="utf-8") as f:  # noqa: P103
                f.write("probe")
        except OSError as exc:
            raise PermissionError(f"[{ERR_PATH_NOT_WRITABLE}] 目录不可写: {parent}") from exc
        else:
            probe.unlink(missing_ok=True)

    @staticmethod
    def timestamped_output_path(
        source: Optional[Path] = None,
        suffix: str = CONST_DEFAULT_OUTPUT_SUFFIX,
        prefix: Optional[str] = None,
        output_dir: Optional[Path] = None,
    ) -> Path:
        """生成带时间戳的输出路径，默认位于 output 目录。

        参数：
            source: 输入文件（文本/CSV）；前缀为空时使用其 stem。
            suffix: 输出文件名后缀（默认 ".pdf"）。
            prefix: 自定义文件名前缀；优先于 source 的 stem。
            output_dir: 自定义输出目录。

        返回：
            输出路径，例如 output/report_20240101_120000.pdf
        """
        target_dir = output_dir if output_dir is not None else PATH_OUTPUT_DIR
        target_dir.mkdir(parents=True, exist_ok=True)
        ts = time.strftime("%Y%m%d_%H%M%S")
        use_prefix = (prefix or "").strip()
        if use_prefix:
            stem = use_prefix
        elif source is not None:
            stem = source.stem
        else:
            stem = CONST_OUTPUT_PREFIX_DEFAULT
        return target_dir / f"{stem}_{ts}{suffix}"


class ErrorHandler:
    """错误处理相关工具。"""

    @staticmethod
    def format_error(err_code: int, message: str) -> str:
        """生成统一错误信息字符串。"""
        return f"[{err_code}] {message}"


# =============================
# 导出声明
# =============================
__all__ = [
    # 日志工具
    "get_logger",
    # 文件操作
    "FileHandler",
    "ErrorHandler",
    # 坐标处理
    "align_x",
    "validate_row_shape",
    "prorate_widths",
    "column_offsets",
    # 页面
    "PageSize",
    "PageOrientation",
    "PageGeometry",
    "page_rect",
    "rotation_for",
    "effective_page_width",
    "effective_page_height",
    # 文本度量与换行
    "estimate_text_width",
    "font_bbox",
    "font_line_height",
    "find_wrap_points",
    "split_text_by_width",
]
