"""
文件路径：pdfprintln/data_handler.py

模块职责：
- 读取待排版的数据：纯文本行、CSV 表格；
- 解析表格列宽权重字符串；
- 加载排版配置 JSON（纸张、方向、字号、边距、行距、页码），供 PDFBuilder(**config) 使用。

说明：
- 仅依赖标准库、`pdfprintln/variables.py` 与通用组件（日志、文件校验），不直接依赖排版模块。

变量引用说明（来自 pdfprintln/variables.py）：
- PATH_LAYOUT_JSON, CONST_ENCODING, CONST_WEIGHT_SEPARATOR, CONST_LAYOUT_CONFIG_KEYS,
  ERR_CONFIG_LOAD_FAILED, ERR_DATA_INVALID
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .components import FileHandler, get_logger
from .variables import (
    PATH_LAYOUT_JSON,
    CONST_ENCODING,
    CONST_WEIGHT_SEPARATOR,
    CONST_LAYOUT_CONFIG_KEYS,
    ERR_CONFIG_LOAD_FAILED,
    ERR_DATA_INVALID,
)


logger = get_logger(__name__)


def _json_loads_strip_bom(content: str):
    """解析 JSON 字符串，自动去除 UTF-8 BOM。"""
    if content.startswith("\ufeff"):
        content = content.lstrip("\ufeff")
    return json.loads(content)


def load_text_lines(path: Path) -> List[str]:
    """读取文本文件，按行返回（去除行尾换行符，保留空行）。"""
    FileHandler.validate_readable_file(path)
    content = path.read_text(encoding=CONST_ENCODING)
    if content.startswith("\ufeff"):
        content = content.lstrip("\ufeff")
    return content.splitlines()


def load_table_csv(path: Path, has_header: bool = True) -> Tuple[Optional[List[str]], List[List[str]]]:
    """从 CSV 文件加载表格。

    参数：
        path: CSV 文件路径。
        has_header: 首行是否为表头。

    返回：
        (表头或 None, 数据行列表)；空行被跳过，None 单元格转为空串。
    """
    FileHandler.validate_readable_file(path)
    header: Optional[List[str]] = None
    rows: List[List[str]] = []
    with path.open("r", encoding=CONST_ENCODING, newline="") as f:  # noqa: P103
        reader = csv.reader(f)
        for row in reader:
            if not row:
                continue
            cells = ["" if c is None else str(c) for c in row]
            if has_header and header is None:
                if cells and cells[0].startswith("\ufeff"):
                    cells[0] = cells[0].lstrip("\ufeff")
                header = cells
                continue
            rows.append(cells)
    return header, rows


def parse_weights(raw: Optional[str], column_count: int) -> List[float]:
    """解析列宽权重字符串，如 "30,70"。

    - raw 为空时各列等宽（权重均为 1）；
    - 权重个数须与列数一致，且不能为负、总和须为正。

    异常：
        ValueError: 无法解析或个数不一致。
    """
    if column_count <= 0:
        raise ValueError(f"[{ERR_DATA_INVALID}] 列数必须为正：{column_count}")
    if raw is None or not str(raw).strip():
        return [1.0] * column_count
    try:
        weights = [float(p.strip()) for p in str(raw).split(CONST_WEIGHT_SEPARATOR) if p.strip()]
    except ValueError as exc:
        raise ValueError(f"[{ERR_DATA_INVALID}] 无法解析列宽权重：{raw}") from exc
    if len(weights) != column_count:
        raise ValueError(f"[{ERR_DATA_INVALID}] 权重个数 {len(weights)} 与列数 {column_count} 不一致")
    if any(w < 0 for w in weights) or sum(weights) <= 0:
        raise ValueError(f"[{ERR_DATA_INVALID}] 权重不能为负且总和须为正：{raw}")
    return weights


def load_layout_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """加载排版配置 JSON。

    参数：
        config_path: 配置路径；未指定时读取 `config/layout.json`，默认文件不存在则返回空配置。

    返回：
        可直接传给 PDFBuilder(**config) 的关键字参数字典；未知键会被忽略并记录告警。

    异常：
        FileNotFoundError: 显式指定的配置文件不存在。
        RuntimeError: 文件存在但内容无法解析或结构非法。
    """
    path = config_path or PATH_LAYOUT_JSON
    if not path.exists():
        if config_path is not None:
            raise FileNotFoundError(f"[{ERR_CONFIG_LOAD_FAILED}] 排版配置不存在：{path}")
        logger.info("未找到排版配置文件，将使用默认配置：%s", path)
        return {}
    try:
        data = _json_loads_strip_bom(path.read_text(encoding=CONST_ENCODING))
    except (OSError, ValueError) as exc:
        raise RuntimeError(f"[{ERR_CONFIG_LOAD_FAILED}] 配置加载失败: {exc}") from exc
    if not isinstance(data, dict):
        raise RuntimeError(f"[{ERR_CONFIG_LOAD_FAILED}] 排版配置须为对象结构：{path}")

    config: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in CONST_LAYOUT_CONFIG_KEYS:
            logger.warning("忽略未知排版配置项：%s", key)
            continue
        if value is None:
            continue
        config[key] = value
    return config


__all__ = [
    "load_text_lines",
    "load_table_csv",
    "parse_weights",
    "load_layout_config",
]
