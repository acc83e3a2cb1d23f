"""
Rich text flattening.

Walks markdown-it inline nodes and produces plain text together with
disjoint, offset-based style runs. Nested styles are folded into the runs of
their subtree instead of producing overlapping ranges.
"""

import re
from typing import TYPE_CHECKING, Dict, List, NamedTuple, Optional, Sequence, Tuple

import emoji
import webcolors
from markdown_it.tree import SyntaxTreeNode

from md2slides.models import ListMarker, TextNode, TextRun, TextStyle

if TYPE_CHECKING:
    from md2slides.extractors.media import MediaCollector


# Styles for markdown emphasis node types
INLINE_STYLES: Dict[str, TextStyle] = {
    "em": TextStyle(italic=True),
    "strong": TextStyle(bold=True),
    "s": TextStyle(strikethrough=True),
}

# Inline HTML tags that carry styling when properly closed
HTML_STYLE_TAGS = ("span", "sub", "sup")

_TAG_RE = re.compile(r"^<(/)?([A-Za-z][A-Za-z0-9-]*)(\s[^>]*?)?\s*(/)?>$", re.DOTALL)
_ATTR_RE = re.compile(
    r"""([A-Za-z_:][-\w:.]*)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+))"""
)
_HEX_COLOR_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_COLOR_RE = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$", re.IGNORECASE)


class HtmlTag(NamedTuple):
    """A single parsed inline HTML tag."""

    name: str
    closing: bool
    self_closing: bool
    attrs: Dict[str, str]


def parse_html_tag(markup: str) -> Optional[HtmlTag]:
    """Parse `<tag attr="x">`, `</tag>` or `<tag/>`. Returns None for anything else."""
    match = _TAG_RE.match(markup.strip())
    if not match:
        return None

    attrs = {}
    for attr in _ATTR_RE.finditer(match.group(3) or ""):
        value = next((v for v in attr.groups()[1:] if v is not None), "")
        attrs[attr.group(1).lower()] = value

    return HtmlTag(
        name=match.group(2).lower(),
        closing=bool(match.group(1)),
        self_closing=bool(match.group(4)),
        attrs=attrs,
    )


def parse_color(value: str) -> Optional[str]:
    """Normalize `#rgb`, `#rrggbb`, `rgb(r, g, b)` or a CSS color name to `#RRGGBB`."""
    value = value.strip()

    match = _HEX_COLOR_RE.match(value)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return f"#{digits.upper()}"

    match = _RGB_COLOR_RE.match(value)
    if match:
        red, green, blue = (min(int(c), 255) for c in match.groups())
        return f"#{red:02X}{green:02X}{blue:02X}"

    try:
        return webcolors.name_to_hex(value.lower()).upper()
    except ValueError:
        return None


def parse_css_style(declarations: str) -> TextStyle:
    """Map the CSS properties slides can represent onto a TextStyle."""
    props = {}
    for declaration in declarations.split(";"):
        name, sep, value = declaration.partition(":")
        if sep:
            props[name.strip().lower()] = value.strip()

    values = {}

    color = parse_color(props.get("color", ""))
    if color:
        values["foreground_color"] = color

    weight = props.get("font-weight", "").lower()
    if weight in ("bold", "bolder") or (weight.isdigit() and int(weight) >= 600):
        values["bold"] = True

    if props.get("font-style", "").lower() in ("italic", "oblique"):
        values["italic"] = True

    if "line-through" in props.get("text-decoration", "").lower():
        values["strikethrough"] = True

    return TextStyle(**values)


def html_tag_style(tag: HtmlTag) -> TextStyle:
    """Style contributed by a supported inline HTML tag."""
    if tag.name == "sub":
        return TextStyle(baseline_offset="SUBSCRIPT")
    if tag.name == "sup":
        return TextStyle(baseline_offset="SUPERSCRIPT")
    return parse_css_style(tag.attrs.get("style", ""))


def substitute_emoji(text: str) -> str:
    """Replace :shortcode: occurrences with emoji. Unknown codes stay as-is."""
    if ":" not in text:
        return text
    return emoji.emojize(text, language="alias")


class RichTextBuilder:
    """
    Accumulates flattened text and style runs for one text container.

    The builder owns the cursor for a single title, body, cell or notes
    block; create a new builder for every container so offsets start at 0.

    Line breaks and indentation are deferred until real text follows them,
    so breaks left around removed media never reach the output.
    """

    def __init__(
        self,
        media: Optional["MediaCollector"] = None,
        emoji_shortcodes: bool = True,
    ):
        self.media = media
        self.emoji_shortcodes = emoji_shortcodes

        self._parts: List[str] = []
        self._cursor = 0
        self._pending = ""
        self._block_start = 0
        self._block_part = 0
        self._runs: List[Tuple[int, int, TextStyle]] = []

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def text(self) -> str:
        return "".join(self._parts)

    # --- text output ---

    def _write(self, text: str) -> None:
        self._parts.append(text)
        self._cursor += len(text)

    def append(self, text: str) -> None:
        """Append literal text, flushing any deferred breaks first."""
        if not text:
            return
        if self._pending:
            text = self._pending + text
            self._pending = ""
        self._write(text)

    def defer(self, text: str) -> None:
        """Queue text that is only written if more text follows."""
        self._pending += text

    def line_break(self) -> None:
        # A break before any text of the block has nothing to separate
        if self._cursor > self._block_start:
            self.defer("\n")

    def begin_block(self) -> None:
        self._block_start = self._cursor
        self._block_part = len(self._parts)

    def end_block(self, terminator: str = "\n") -> None:
        """Close a paragraph-like block. Empty or whitespace-only blocks leave no trace."""
        self._pending = ""
        if self._cursor > self._block_start and not "".join(self._parts[self._block_part:]).strip():
            # only spacing left between removed media
            del self._parts[self._block_part:]
            self._cursor = self._block_start
            self._runs = [run for run in self._runs if run[0] < self._block_start]
        if self._cursor > self._block_start:
            self._write(terminator)
        self._block_start = self._cursor
        self._block_part = len(self._parts)

    # --- inline walk ---

    def add_inline(self, node: SyntaxTreeNode) -> None:
        """Flatten the children of an `inline` node."""
        self._walk(node.children)

    def add_styled(self, style: TextStyle, nodes: Sequence[SyntaxTreeNode]) -> None:
        """
        Flatten nodes and apply `style` to everything they produce.

        Ranges already covered by nested runs inherit the style; the gaps
        between them get a run of their own.
        """
        start = self._cursor + len(self._pending)
        first = len(self._runs)

        self._walk(nodes)

        end = self._cursor
        if style.is_empty() or start >= end:
            return

        merged = []
        pos = start
        for run_start, run_end, run_style in self._runs[first:]:
            if run_start > pos:
                merged.append((pos, run_start, style))
            merged.append((run_start, run_end, run_style.inherit(style)))
            pos = max(pos, run_end)
        if pos < end:
            merged.append((pos, end, style))

        self._runs[first:] = merged

    def _walk(self, nodes: Sequence[SyntaxTreeNode]) -> None:
        i = 0
        while i < len(nodes):
            node = nodes[i]
            kind = node.type

            if kind == "html_inline":
                i = self._html_inline(nodes, i)
                continue

            if kind == "text":
                content = node.content
                if self.emoji_shortcodes:
                    content = substitute_emoji(content)
                self.append(content)
            elif kind in INLINE_STYLES:
                self.add_styled(INLINE_STYLES[kind], node.children)
            elif kind in ("softbreak", "hardbreak"):
                self.line_break()
            elif kind == "code_inline":
                self.append(node.content)
            elif kind in ("image", "video"):
                if self.media is not None:
                    self.media.collect(node)
            else:
                # link and any other container: text only
                self._walk(node.children)
            i += 1

    def _html_inline(self, nodes: Sequence[SyntaxTreeNode], i: int) -> int:
        """Handle an inline HTML node at `i`; returns the next index to visit."""
        markup = nodes[i].content
        if markup.startswith("<!--"):
            return i + 1

        tag = parse_html_tag(markup)
        if tag is not None and not tag.closing:
            if tag.name == "br":
                self.line_break()
                return i + 1
            if tag.name in HTML_STYLE_TAGS and not tag.self_closing:
                close = _find_closing_tag(nodes, i, tag.name)
                if close is not None:
                    self.add_styled(html_tag_style(tag), nodes[i + 1:close])
                    return close + 1

        # Unsupported or unbalanced markup passes through as text
        self.append(markup)
        return i + 1

    # --- result ---

    def build(self, list_markers: Optional[List[ListMarker]] = None) -> TextNode:
        """Produce the TextNode, merging adjacent runs with equal styles."""
        merged: List[Tuple[int, int, TextStyle]] = []
        for start, end, style in sorted(self._runs, key=lambda r: r[0]):
            if merged and merged[-1][1] == start and merged[-1][2] == style:
                merged[-1] = (merged[-1][0], end, style)
            else:
                merged.append((start, end, style))

        return TextNode(
            raw_text=self.text,
            text_runs=[
                TextRun(start=start, end=end, **style.model_dump(exclude_none=True))
                for start, end, style in merged
            ],
            list_markers=list_markers or [],
        )


def _find_closing_tag(nodes: Sequence[SyntaxTreeNode], i: int, name: str) -> Optional[int]:
    depth = 0
    for j in range(i + 1, len(nodes)):
        if nodes[j].type != "html_inline":
            continue
        tag = parse_html_tag(nodes[j].content)
        if tag is None or tag.name != name or tag.self_closing:
            continue
        if not tag.closing:
            depth += 1
        elif depth == 0:
            return j
        else:
            depth -= 1
    return None
