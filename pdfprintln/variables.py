"""
文件路径：pdfprintln/variables.py

模块职责：
- 统一管理全局跨模块变量，确保模块化、无冲突、可追溯，可复用。
- 变量命名规范：{分类前缀}_{描述性名称}（全大写+下划线）。
  - PATH_：路径相关
  - STYLE_：样式相关（页面边距、行距、字体等排版默认值）
  - CONST_：通用常量
  - ERR_：错误码

使用说明：
- 业务模块严禁定义新的全局变量，必须从本模块导入所需常量。
- 目录路径均使用 pathlib.Path 对象表示，使用时如需字符串请显式 str() 转换。
"""

import os
from pathlib import Path
from typing import Dict, Tuple


# =============================
# 路径（PATH_）
# =============================
# 项目根目录：定位到当前文件（variables.py）的上两级目录
PATH_ROOT: Path = Path(__file__).resolve().parents[1]

# 各功能目录
PATH_CONFIG_DIR: Path = PATH_ROOT / "config"
PATH_OUTPUT_DIR: Path = PATH_ROOT / "output"
# 日志目录：可通过环境变量 PDFPRINTLN_LOG_DIR 重定向
PATH_LOGS_DIR: Path = Path(os.environ.get("PDFPRINTLN_LOG_DIR", str(PATH_ROOT / "logs")))

# 关键文件路径
PATH_LOG_FILE: Path = PATH_LOGS_DIR / "app.log"  # 应用运行日志
PATH_LAYOUT_JSON: Path = PATH_CONFIG_DIR / "layout.json"  # 排版配置（可选）


# =============================
# 样式（STYLE_）
# =============================
STYLE_FONT_NAME: str = "Helvetica-Bold"  # 默认字体（ReportLab 内置标准 14 字体之一）
STYLE_FONT_SIZE_DEFAULT: int = 12  # 默认正文字号（pt）
STYLE_PAGE_MARGIN: float = 40.0  # 页面四周统一边距（pt）
STYLE_LINE_SPACING: float = 5.0  # 相邻两行之间额外留白（pt），与字体行高无关
STYLE_PAGE_NUMBER_FONT_SIZE: int = 6  # 页码字号
STYLE_PAGE_NUMBER_PATTERN: str = "Page Number %d"  # 页码格式，使用 % 运算符格式化


# =============================
# 常量（CONST_）
# =============================
CONST_ENCODING: str = "utf-8"  # 文件读写默认编码
CONST_DEFAULT_OUTPUT_SUFFIX: str = ".pdf"  # 默认输出文件名后缀
CONST_OUTPUT_PREFIX_DEFAULT: str = "report"  # 默认输出文件名前缀
CONST_DEFAULT_PAGE_SIZE: str = "LETTER"  # 默认纸张
CONST_DEFAULT_ORIENTATION: str = "LANDSCAPE"  # 默认方向
CONST_OUTPUT_PAGE_NUMBER_DEFAULT: bool = True  # 默认输出页码

# 字体度量单位：字形宽度与字体包围盒均以 1/1000 em 存储
CONST_FONT_METRICS_UNITS: float = 1000.0
# 横向页面的旋转角度
CONST_LANDSCAPE_ROTATION: int = 90

# 标准 14 字体的 AFM FontBBox（llx, lly, urx, ury）。
# ReportLab 内置字体只提供 ascent/descent，行高需依据完整包围盒计算。
CONST_STANDARD_FONT_BBOX: Dict[str, Tuple[int, int, int, int]] = {
    "Courier": (-23, -250, 715, 805),
    "Courier-Bold": (-113, -250, 749, 801),
    "Courier-Oblique": (-27, -250, 849, 805),
    "Courier-BoldOblique": (-57, -250, 869, 801),
    "Helvetica": (-166, -225, 1000, 931),
    "Helvetica-Bold": (-170, -228, 1003, 962),
    "Helvetica-Oblique": (-170, -225, 1116, 931),
    "Helvetica-BoldOblique": (-174, -228, 1114, 962),
    "Times-Roman": (-168, -218, 1000, 898),
    "Times-Bold": (-168, -218, 1000, 935),
    "Times-Italic": (-169, -217, 1010, 883),
    "Times-BoldItalic": (-200, -218, 996, 921),
    "Symbol": (-180, -293, 1090, 1010),
    "ZapfDingbats": (-1, -143, 981, 820),
}

# 表格行：CSV 权重分隔符
CONST_WEIGHT_SEPARATOR: str = ","

# 排版配置 JSON 中允许出现的键
CONST_LAYOUT_CONFIG_KEYS: Tuple[str, ...] = (
    "page_size",
    "page_orientation",
    "font_name",
    "font_size",
    "page_margin",
    "line_spacing",
    "output_page_number",
    "page_number_pattern",
    "page_number_font_size",
)

# 日志格式（供 logging.basicConfig 使用）
CONST_LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONST_LOG_DATEFMT: str = "%Y-%m-%d %H:%M:%S"


# =============================
# 错误码（ERR_）
# =============================
# 1xxx：文件/路径相关
ERR_FILE_NOT_FOUND: int = 1001  # 输入文件不存在
ERR_PATH_NOT_WRITABLE: int = 1003  # 目标路径不可写

# 3xxx：写入相关
ERR_PDF_WRITE_FAILED: int = 3002  # PDF 写入失败

# 4xxx：配置/数据相关
ERR_CONFIG_LOAD_FAILED: int = 4001  # 配置加载失败
ERR_DATA_INVALID: int = 4002  # 输入数据非法
ERR_ROW_SHAPE_MISMATCH: int = 4003  # 表格行单元格数与权重数/属性数不一致
ERR_ROW_WEIGHT_INVALID: int = 4004  # 表格行权重非法（负数或总和不为正）

# 5xxx：会话状态相关
ERR_SESSION_CLOSED: int = 5001  # 文档会话已关闭
ERR_DOCUMENT_RENDERED: int = 5002  # 文档已输出，只允许重试保存


# =============================
# 导出声明
# =============================
__all__ = [
    # PATH_
    "PATH_ROOT",
    "PATH_CONFIG_DIR",
    "PATH_OUTPUT_DIR",
    "PATH_LOGS_DIR",
    "PATH_LOG_FILE",
    "PATH_LAYOUT_JSON",
    # STYLE_
    "STYLE_FONT_NAME",
    "STYLE_FONT_SIZE_DEFAULT",
    "STYLE_PAGE_MARGIN",
    "STYLE_LINE_SPACING",
    "STYLE_PAGE_NUMBER_FONT_SIZE",
    "STYLE_PAGE_NUMBER_PATTERN",
    # CONST_
    "CONST_ENCODING",
    "CONST_DEFAULT_OUTPUT_SUFFIX",
    "CONST_OUTPUT_PREFIX_DEFAULT",
    "CONST_DEFAULT_PAGE_SIZE",
    "CONST_DEFAULT_ORIENTATION",
    "CONST_OUTPUT_PAGE_NUMBER_DEFAULT",
    "CONST_FONT_METRICS_UNITS",
    "CONST_LANDSCAPE_ROTATION",
    "CONST_STANDARD_FONT_BBOX",
    "CONST_WEIGHT_SEPARATOR",
    "CONST_LAYOUT_CONFIG_KEYS",
    "CONST_LOG_FORMAT",
    "CONST_LOG_DATEFMT",
    # ERR_
    "ERR_FILE_NOT_FOUND",
    "ERR_PATH_NOT_WRITABLE",
    "ERR_PDF_WRITE_FAILED",
    "ERR_CONFIG_LOAD_FAILED",
    "ERR_DATA_INVALID",
    "ERR_ROW_SHAPE_MISMATCH",
    "ERR_ROW_WEIGHT_INVALID",
    "ERR_SESSION_CLOSED",
    "ERR_DOCUMENT_RENDERED",
]
