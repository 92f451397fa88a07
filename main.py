"""
文件路径：main.py

命令行入口：
- 功能：将文本文件或 CSV 表格逐行排版输出为 PDF，自动换页；或生成演示报告。
- 依赖：`pdfprintln/builder.py`、`pdfprintln/data_handler.py`、`pdfprintln/components`、`pdfprintln/variables.py`。

快速使用示例：
    # 1) 生成演示报告（标题、空白页、双栏表格、A6 纵向自动换页）
    python main.py --demo

    # 2) 将文本文件逐行输出，A4 纵向，字号 10
    python main.py --text notes.txt --page-size A4 --orientation portrait --font-size 10

    # 3) 将 CSV 输出为表格，两列宽度比例 30:70
    python main.py --table data.csv --weights 30,70 --output out/table.pdf

运行说明：
- 排版参数优先级：命令行 > --config 指定的 JSON > config/layout.json > 内置默认值。
- 未指定 --output 时，输出到 output/ 目录下带时间戳的文件。
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

from reportlab.lib import colors

from pdfprintln import PDFBuilder, TextAlignment, TextAttributes
from pdfprintln.components import FileHandler, get_logger
from pdfprintln.data_handler import (
    load_layout_config,
    load_table_csv,
    load_text_lines,
    parse_weights,
)
from pdfprintln.variables import CONST_DEFAULT_OUTPUT_SUFFIX


logger = get_logger(__name__)


DEMO_TEST_TEXT = "The quick brown fox jumps over the lazy dog"
DEMO_TEXT_ON_BLANK_PAGE = "This page is intentionally left blank"
DEMO_REPEAT_LINES = 80


def build_demo_report(pdf: PDFBuilder) -> None:
    """演示报告：覆盖居中标题、空行、字号切换、空白页、绝对定位、双栏表格与自动换页。"""
    # 大号标题
    pdf.font_size = 30
    pdf.println("This is a Report", TextAlignment.MIDDLE)
    pdf.println()

    pdf.font_size = 12
    pdf.println("Hello World", TextAlignment.LEFT)

    # 插入一页“有意留白”页，文字按绝对坐标居中
    pdf.force_new_page()
    text_width = pdf.estimate_string_width(DEMO_TEXT_ON_BLANK_PAGE, 9)
    pdf.print(
        (pdf.effective_page_width() - text_width) / 2,
        pdf.effective_page_height() / 2,
        DEMO_TEXT_ON_BLANK_PAGE,
        TextAttributes(font_size=9, fg_color=colors.red),
    )

    # 双栏表格，按 30:70 分配宽度
    pdf.force_new_page()
    cells = ["Foo", "Bar"]
    weights = [30, 70]
    cell_attrs = [
        TextAttributes(bg_color=colors.lightgrey),
        TextAttributes(bg_color=colors.yellow),
    ]
    pdf.println_row(cells, weights, cell_attrs)
    pdf.println_row(cells, weights, cell_attrs)

    # 切换为 A6 纵向，连续输出触发自动换页
    pdf.page_size = "A6"
    pdf.page_orientation = "PORTRAIT"
    pdf.font_size = 9
    pdf.force_new_page()
    for _ in range(DEMO_REPEAT_LINES):
        pdf.println(DEMO_TEST_TEXT, TextAlignment.LEFT)


def render_text(pdf: PDFBuilder, lines: List[str], alignment: TextAlignment) -> None:
    for line in lines:
        pdf.println(line, alignment)


def render_table(
    pdf: PDFBuilder,
    header: Optional[List[str]],
    rows: List[List[str]],
    weights_raw: Optional[str],
) -> None:
    column_count = max([len(header or [])] + [len(r) for r in rows])
    weights = parse_weights(weights_raw, column_count)

    def _pad(cells: List[str]) -> List[str]:
        return list(cells) + [""] * (column_count - len(cells))

    if header:
        header_attrs = [TextAttributes(bg_color=colors.lightgrey)] * column_count
        pdf.println_row(_pad(header), weights, header_attrs)
    for row in rows:
        pdf.println_row(_pad(row), weights)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="PDF 逐行排版工具（自动换页 + 分栏换行）")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--demo", action="store_true", help="生成演示报告")
    source.add_argument("--text", type=Path, default=None, help="逐行输出的文本文件")
    source.add_argument("--table", type=Path, default=None, help="按表格输出的 CSV 文件")
    parser.add_argument("--weights", type=str, default=None, help="表格列宽权重，如 '30,70'；默认等宽")
    parser.add_argument("--no-header", dest="no_header", action="store_true", help="CSV 首行不是表头")
    parser.add_argument("--align", type=str, choices=["left", "middle", "right"], default="left", help="文本对齐方式")
    parser.add_argument("--config", type=Path, default=None, help="排版配置 JSON")
    parser.add_argument("--page-size", dest="page_size", type=str, default=None, help="纸张：A0~A6 / LETTER")
    parser.add_argument("--orientation", type=str, choices=["portrait", "landscape"], default=None, help="页面方向")
    parser.add_argument("--font-size", dest="font_size", type=int, default=None, help="正文字号")
    parser.add_argument("--margin", dest="page_margin", type=float, default=None, help="页面边距（pt）")
    parser.add_argument("--line-spacing", dest="line_spacing", type=float, default=None, help="行距（pt）")
    parser.add_argument("--no-page-number", dest="no_page_number", action="store_true", help="不输出页码")
    parser.add_argument("--page-number-pattern", dest="page_number_pattern", type=str, default=None, help="页码格式，如 'Page %%d'")
    parser.add_argument("--output", type=Path, default=None, help="输出 PDF 路径（可省略，自动生成）")
    parser.add_argument("--output-prefix", dest="output_prefix", type=str, default=None, help="自动生成输出文件名时使用的前缀")
    return parser.parse_args(argv)


def build_layout_options(args: argparse.Namespace) -> Dict[str, Any]:
    """合并 JSON 配置与命令行参数，命令行优先。"""
    options = load_layout_config(args.config)
    overrides = {
        "page_size": args.page_size,
        "page_orientation": args.orientation,
        "font_size": args.font_size,
        "page_margin": args.page_margin,
        "line_spacing": args.line_spacing,
        "page_number_pattern": args.page_number_pattern,
    }
    options.update({k: v for k, v in overrides.items() if v is not None})
    if args.no_page_number:
        options["output_page_number"] = False
    return options


def main(argv: Optional[List[str]] = None) -> Path:
    args = parse_args(argv)
    options = build_layout_options(args)
    source: Optional[Path] = args.text or args.table

    output: Path = args.output or FileHandler.timestamped_output_path(
        source,
        suffix=CONST_DEFAULT_OUTPUT_SUFFIX,
        prefix=args.output_prefix,
    )

    with PDFBuilder(**options) as pdf:
        if args.demo:
            build_demo_report(pdf)
        elif args.text is not None:
            render_text(pdf, load_text_lines(args.text), TextAlignment.parse(args.align))
        else:
            header, rows = load_table_csv(args.table, has_header=not args.no_header)
            if not header and not rows:
                raise SystemExit("CSV 中没有任何数据行")
            render_table(pdf, header, rows, args.weights)
        pdf.save(output)
        pages = pdf.page_number

    print(f"排版完成，共 {pages} 页，保存至：{output}")
    return output


if __name__ == "__main__":
    main()
