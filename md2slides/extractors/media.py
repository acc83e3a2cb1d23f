"""
Media and background classification.

Images annotated with the background class become the slide background;
other images and video embeds are collected in document order. None of
them contribute text to the slide.
"""

from typing import List, Optional

from markdown_it.tree import SyntaxTreeNode

from md2slides.models import Media


class MediaCollector:
    """Collects the media of one slide as its text is flattened."""

    def __init__(self, background_class: str = "background"):
        self.background_class = background_class
        self.background_image: Optional[Media] = None
        self.images: List[Media] = []
        self.videos: List[Media] = []

    def is_background(self, node: SyntaxTreeNode) -> bool:
        classes = (node.attrs.get("class") or "").split()
        return self.background_class in classes

    def collect(self, node: SyntaxTreeNode) -> None:
        """Classify an `image` or `video` node."""
        if node.type == "video":
            media = Media(provider=node.meta["provider"], id=node.meta["id"])
        elif node.type == "image":
            media = Media(url=str(node.attrs.get("src", "")))
        else:
            raise ValueError(f"Not a media node: {node.type}")

        if media.is_video:
            self.videos.append(media)
        elif self.is_background(node):
            # Only one background per slide; the last one wins
            self.background_image = media
        else:
            self.images.append(media)
