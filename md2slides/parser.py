"""
Markdown tokenization using markdown-it-py.

Configures the parser with the syntax extensions slides rely on:
- tables and ~~strikethrough~~
- inline HTML (span/sub/sup styling, comments for speaker notes)
- {.class} attributes on images (mdit-py-plugins attrs)
- @[provider](id) video embeds
"""

import re
from typing import Iterable, Optional

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.attrs import attrs_plugin

from md2slides.config import ExtractionSettings, DEFAULT_VIDEO_PROVIDERS


class MarkdownParseError(ValueError):
    """The markdown source could not be tokenized."""


_VIDEO_RE = re.compile(r"@\[([A-Za-z]+)\]\(\s*([^)\s]+)\s*\)")

_YOUTUBE_URL_RE = re.compile(
    r"^(?:https?://)?(?:www\.|m\.)?"
    r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|embed/|v/)|youtu\.be/)"
    r"([\w-]{11})"
)
_VIMEO_URL_RE = re.compile(r"^(?:https?://)?(?:www\.|player\.)?vimeo\.com/(?:video/)?(\d+)")


def normalize_video_id(provider: str, value: str) -> str:
    """Reduce a pasted video URL to the provider's video id."""
    if provider == "youtube":
        match = _YOUTUBE_URL_RE.match(value)
        if match:
            return match.group(1)
    elif provider == "vimeo":
        match = _VIMEO_URL_RE.match(value)
        if match:
            return match.group(1)
    return value


def video_plugin(md: MarkdownIt, providers: Optional[Iterable[str]] = None) -> None:
    """
    Tokenize `@[provider](id)` as a `video` token.

    The token carries `meta = {"provider": ..., "id": ...}`. Embeds naming
    a provider outside `providers` are kept verbatim as text.
    """
    known = {p.lower() for p in (providers or DEFAULT_VIDEO_PROVIDERS)}

    def _video_rule(state: StateInline, silent: bool) -> bool:
        if state.src[state.pos] != "@":
            return False

        match = _VIDEO_RE.match(state.src, state.pos, state.posMax)
        if not match:
            return False

        provider = match.group(1).lower()
        if provider not in known:
            # Unknown provider: keep the embed verbatim instead of letting
            # the link rule eat the brackets
            if not silent:
                state.pending += match.group(0)
            state.pos = match.end()
            return True

        if not silent:
            token = state.push("video", "", 0)
            token.markup = match.group(0)
            token.content = match.group(2)
            token.meta = {
                "provider": provider,
                "id": normalize_video_id(provider, match.group(2)),
            }

        state.pos = match.end()
        return True

    md.inline.ruler.before("link", "video", _video_rule)


class MarkdownParser:
    """
    Markdown-to-tree parser using markdown-it-py.

    The parser is stateless between calls; one instance can serve any
    number of documents.
    """

    def __init__(self, settings: Optional[ExtractionSettings] = None):
        self.settings = settings or ExtractionSettings()

        self.md = (
            MarkdownIt("commonmark", {"html": True})
            .enable(["table", "strikethrough"])
            .use(attrs_plugin)                                      # ![](img){.background}
            .use(video_plugin, providers=self.settings.video_providers)  # @[youtube](id)
        )

    def parse(self, markdown_text: str) -> SyntaxTreeNode:
        """
        Parse markdown text into a syntax tree.

        Args:
            markdown_text: Raw markdown content

        Returns:
            Root SyntaxTreeNode whose children are the top-level blocks

        Raises:
            MarkdownParseError: If markdown-it fails on the input
        """
        try:
            tokens = self.md.parse(markdown_text)
            return SyntaxTreeNode(tokens)
        except Exception as e:
            raise MarkdownParseError(f"Failed to parse markdown: {e}") from e
