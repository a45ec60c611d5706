"""Data models for storybook-mcp."""

from .custom_tool import CustomToolDefinition
from .storybook_index import (
    EntryV5,
    StorybookIndex,
    StorybookV3Index,
    StorybookV5Index,
    StoryV3,
    parse_index,
)

__all__ = [
    'CustomToolDefinition',
    'EntryV5',
    'StorybookIndex',
    'StorybookV3Index',
    'StorybookV5Index',
    'StoryV3',
    'parse_index',
]
