"""
Extraction settings.

Settings can be passed explicitly or read from MD2SLIDES_* environment
variables (a .env file is loaded if present).
"""

import os
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "MD2SLIDES_"

DEFAULT_VIDEO_PROVIDERS = ["youtube", "vimeo", "vine", "prezi", "osf"]


class ExtractionSettings(BaseModel):
    """Settings for a slide extraction run."""

    title_level: int = Field(
        default=1, ge=1, le=6, description="Deepest heading level accepted as a slide title"
    )
    column_class: str = Field(default="column", description="Class marking a column break")
    background_class: str = Field(
        default="background", description="Class marking an image as slide background"
    )
    substitute_emoji: bool = Field(default=True, description="Replace :shortcodes: with emoji")
    nested_list_indent: str = Field(
        default="\t", description="Prefix repeated once per nesting level of list items"
    )
    video_providers: List[str] = Field(
        default_factory=lambda: list(DEFAULT_VIDEO_PROVIDERS),
        description="Providers recognized in @[provider](id) embeds",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "title_level": 1,
                "column_class": "column",
                "background_class": "background",
                "substitute_emoji": True,
                "nested_list_indent": "\t",
                "video_providers": DEFAULT_VIDEO_PROVIDERS,
            }
        },
    }

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "ExtractionSettings":
        """
        Build settings from the environment.

        Args:
            env_file: Optional .env file to load first (default: search upwards from cwd)

        Returns:
            ExtractionSettings with environment overrides applied
        """
        load_dotenv(env_file)

        values = {}
        for name in ("title_level", "column_class", "background_class", "nested_list_indent"):
            value = os.getenv(ENV_PREFIX + name.upper())
            if value is not None:
                values[name] = value

        emoji_flag = os.getenv(ENV_PREFIX + "SUBSTITUTE_EMOJI")
        if emoji_flag is not None:
            values["substitute_emoji"] = emoji_flag.strip().lower() in ("1", "true", "yes", "on")

        providers = os.getenv(ENV_PREFIX + "VIDEO_PROVIDERS")
        if providers:
            values["video_providers"] = [
                p.strip().lower() for p in providers.split(",") if p.strip()
            ]

        return cls(**values)
