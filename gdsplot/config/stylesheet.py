"""
样式表加载器 - 解析样式表文本并折叠为只读 Context

职责：
- 按行解析指令（alias/general/fill/stroke/bgcolor/only/order/resolution/size/margin）
- 解析样式属性（color/alpha/width/pattern/dashes）
- 多个样式表按顺序叠加到同一个 ContextBuilder

语法要点：
- 以空白分词，遇到以 // 开头的词即截断该行
- dashes 会吞掉该行剩余的全部词，必须放在最后
- 任何未知指令/属性、非法数字或颜色都是致命错误

使用方式：
    builder = ContextBuilder(lib_units_per_meter=1e-9)
    builder = load_stylesheet(builder, "styles/default.style")
    ctx = builder.build()
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from pathlib import Path

from ..interfaces import StylesheetError
from ..models import (
    ColorRgb,
    Context,
    FillPattern,
    LayerClass,
    LayerClassSheet,
    ResolutionScale,
    ScaleMode,
    SizeScale,
    parse_layer_id,
)

logger = logging.getLogger(__name__)

COMMENT_MARKER = "//"
SHEET_DIRECTIVES = ("general", "fill", "stroke")
SHEET_ATTRIBUTES = ("color", "alpha", "width", "pattern")
I32_MIN = -(2**31)
I32_MAX = 2**31 - 1


def tokenize(line: str) -> list[str]:
    """分词并去掉注释部分"""
    tokens = []
    for tok in line.split():
        if tok.startswith(COMMENT_MARKER):
            break
        tokens.append(tok)
    return tokens


class _DirectiveError(Exception):
    """单条指令内部的解析错误（由调用方补全文件/行号）"""


class ContextBuilder:
    """Context 构建器（可变），build() 产出不可变 Context"""

    def __init__(self, lib_units_per_meter: float):
        self.lib_units_per_meter = lib_units_per_meter
        self.scale: ScaleMode = SizeScale(width=512, height=512)
        self.aliases: dict[str, int] = {}
        self.only_layers: set[int] = set()
        self.assignments: dict[int, list[str]] = {}
        self.classes: dict[str, LayerClass] = {}
        self.orders: dict[int, int] = {}
        self.bg_color: ColorRgb | None = None
        self.margin = 0

    # === 构建 ===

    def build(self) -> Context:
        return Context(
            lib_units_per_meter=self.lib_units_per_meter,
            scale=self.scale,
            aliases=dict(self.aliases),
            only_layers=frozenset(self.only_layers),
            assignments={k: list(v) for k, v in self.assignments.items()},
            classes=dict(self.classes),
            orders=dict(self.orders),
            bg_color=self.bg_color,
            margin=self.margin,
        )

    def snapshot(self) -> ContextBuilder:
        """复制当前状态"""
        copy = ContextBuilder(self.lib_units_per_meter)
        copy.scale = self.scale
        copy.aliases = dict(self.aliases)
        copy.only_layers = set(self.only_layers)
        copy.assignments = {k: list(v) for k, v in self.assignments.items()}
        copy.classes = dict(self.classes)
        copy.orders = dict(self.orders)
        copy.bg_color = self.bg_color
        copy.margin = self.margin
        return copy

    # === 指令解析 ===

    def feed_lines(self, lines: Iterable[str], filename: str = "<stylesheet>") -> int:
        """
        逐行应用样式表指令

        Returns:
            已应用的指令数

        Raises:
            StylesheetError: 任意一行出错（携带文件名/行号/指令）
        """
        count = 0
        for line_no, line in enumerate(lines, start=1):
            args = tokenize(line)
            if not args:
                continue
            try:
                self.apply(args)
            except _DirectiveError as e:
                raise StylesheetError(str(e), filename, line_no, args[0]) from None
            count += 1
        return count

    def apply(self, args: list[str]) -> None:
        """应用一条已分词的指令"""
        cmd, rest = args[0], args[1:]

        if cmd == "alias":
            layer_id = _layer_id(_take(rest, 0, "layer id"))
            name = _take(rest, 1, "alias name")
            self.aliases[name] = layer_id
            for cls in rest[2:]:
                self.assignments.setdefault(layer_id, []).append(cls)

        elif cmd in SHEET_DIRECTIVES:
            classname = _take(rest, 0, "class name")
            current = self.classes.get(classname, LayerClass())
            sheet = getattr(current, cmd)
            updated = current.model_copy(update={cmd: parse_sheet(sheet, rest[1:])})
            self.classes[classname] = updated

        elif cmd == "bgcolor":
            self.bg_color = _color(_take(rest, 0, "color"))

        elif cmd == "only":
            for tok in rest:
                self.only_layers.add(self._resolve_layer(tok))

        elif cmd == "order":
            layer_id = self._resolve_layer(_take(rest, 0, "layer"))
            self.orders[layer_id] = _int(_take(rest, 1, "order"), "layer order", I32_MIN, I32_MAX)

        elif cmd == "resolution":
            ppm = _float(_take(rest, 0, "resolution"), "resolution")
            if not ppm > 0:
                raise _DirectiveError(f"分辨率必须为正: {rest[0]}")
            self.scale = ResolutionScale(pixels_per_meter=ppm)

        elif cmd == "size":
            self.scale = SizeScale(
                width=_int(_take(rest, 0, "width"), "width", 1, I32_MAX),
                height=_int(_take(rest, 1, "height"), "height", 1, I32_MAX),
            )

        elif cmd == "margin":
            self.margin = _int(_take(rest, 0, "margin"), "margin", I32_MIN, I32_MAX)

        else:
            raise _DirectiveError(f"未知样式表指令 `{cmd}`")

    def _resolve_layer(self, token: str) -> int:
        if token in self.aliases:
            return self.aliases[token]
        return _layer_id(token)


def parse_sheet(base: LayerClassSheet, tokens: list[str]) -> LayerClassSheet:
    """在 base 上应用属性序列，返回新子表"""
    update: dict[str, object] = {}
    i = 0
    while i < len(tokens):
        opt = tokens[i]
        if opt == "dashes":
            update["dashes"] = [_float(t, "dash width") for t in tokens[i + 1:]]
            break
        if opt not in SHEET_ATTRIBUTES:
            raise _DirectiveError(f"未知样式属性 `{opt}`")
        value = _take(tokens, i + 1, opt)
        if opt == "color":
            update["color"] = _color(value)
        elif opt == "alpha":
            alpha = _float(value, "alpha")
            if not 0.0 <= alpha <= 1.0:
                raise _DirectiveError(f"alpha 超出[0,1]: {value}")
            update["alpha"] = alpha
        elif opt == "width":
            update["width"] = _float(value, "width")
        else:
            try:
                update["pattern"] = FillPattern(value)
            except ValueError:
                raise _DirectiveError(f"未知填充图案 `{value}`") from None
        i += 2
    return base.model_copy(update=update)


# === 字面量解析 ===

def _take(args: list[str], idx: int, what: str) -> str:
    if idx >= len(args):
        raise _DirectiveError(f"缺少参数: {what}")
    return args[idx]


def _float(token: str, what: str) -> float:
    """有限浮点数（不接受 inf/nan 与数字分隔符 _）"""
    if "_" in token or not token.isascii():
        raise _DirectiveError(f"无效的{what}: {token}")
    try:
        value = float(token)
    except ValueError:
        raise _DirectiveError(f"无效的{what}: {token}") from None
    if not math.isfinite(value):
        raise _DirectiveError(f"无效的{what}: {token}")
    return value


def _int(token: str, what: str, lo: int, hi: int) -> int:
    if "_" in token or not token.isascii():
        raise _DirectiveError(f"无效的{what}: {token}")
    try:
        value = int(token)
    except ValueError:
        raise _DirectiveError(f"无效的{what}: {token}") from None
    if not lo <= value <= hi:
        raise _DirectiveError(f"{what}超出范围: {token}")
    return value


def _layer_id(token: str) -> int:
    layer_id = parse_layer_id(token)
    if layer_id is None:
        raise _DirectiveError(f"无效的图层号: {token}")
    return layer_id


def _color(token: str) -> ColorRgb:
    try:
        return ColorRgb.parse(token)
    except ValueError:
        raise _DirectiveError(f"无效颜色: {token}") from None


# === 文件加载 ===

def load_stylesheet(builder: ContextBuilder, path: str | Path) -> ContextBuilder:
    """
    在 builder 基础上加载一个样式表文件

    Returns:
        叠加了该样式表的新 builder；传入的 builder 不变，
        因此加载失败时不会留下半个样式表的状态

    Raises:
        StylesheetError: 文件不可读或内容有误
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StylesheetError(f"无法打开样式表: {e}", str(path)) from e

    staged = builder.snapshot()
    count = staged.feed_lines(text.splitlines(), filename=str(path))
    logger.info(f"已加载样式表: {path} ({count}条指令)")
    return staged


def load_context(
    stylesheets: Iterable[str | Path],
    lib_units_per_meter: float,
) -> Context:
    """按顺序加载多个样式表并构建 Context"""
    builder = ContextBuilder(lib_units_per_meter)
    for path in stylesheets:
        builder = load_stylesheet(builder, path)
    ctx = builder.build()
    logger.debug(
        f"样式上下文: {len(ctx.aliases)}个别名, {len(ctx.classes)}个样式类, "
        f"{len(ctx.assignments)}个图层分配"
    )
    return ctx
