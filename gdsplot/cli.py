"""
命令行入口

用法：
    gdsplot [-s STYLESHEET]... [-o OUTPUT_DIR] [-c CONFIG] FILE [CELLNAME...]
    gdsplot --list FILE
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .config import RuntimeConfig, reload_config
from .interfaces import GdsPlotError
from .layout import open_library
from .pipeline import PlotExecutor

logger = logging.getLogger("gdsplot")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gdsplot",
        description="将GDS版图单元按样式表渲染为PNG",
    )
    parser.add_argument("file", help="GDS版图文件")
    parser.add_argument("cells", nargs="*", metavar="CELLNAME", help="要出图的单元名")
    parser.add_argument(
        "-s",
        "--style",
        action="append",
        default=[],
        metavar="STYLESHEET",
        help="加载样式表（可重复，按顺序叠加）",
    )
    parser.add_argument("-o", "--output-dir", default="", help="输出目录（覆盖配置）")
    parser.add_argument("-c", "--config", default="", help="运行期配置文件（默认：gdsplot.yaml）")
    parser.add_argument("--list", action="store_true", help="列出全部单元名后退出")
    return parser


def _setup_logging(config: RuntimeConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.logging.log_level.upper(), logging.INFO),
        format=config.logging.log_format,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = reload_config(args.config or None)
    if args.output_dir:
        config.output.output_dir = Path(args.output_dir)
    _setup_logging(config)

    try:
        if args.list:
            library = open_library(args.file)
            for struct in library.structs():
                print(struct.name)
            return 0

        results = PlotExecutor(config=config).run(args.file, args.cells, args.style)
    except GdsPlotError as e:
        logger.error(str(e))
        return 1

    for result in results:
        if result.ok:
            print(f"{result.cell_name}: {result.output_path} ({result.width}x{result.height})")
        else:
            print(f"{result.cell_name}: {result.error}", file=sys.stderr)
    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
