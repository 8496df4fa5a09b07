#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the scrapmd library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Dialects - Names and aliases accepted by the API and CLI
3. Grammar - Character classes and markers shared by both grammars
4. Conversion Defaults - Default values of the conversion configuration
5. Rendering Defaults - Printer-specific defaults
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

DialectName = Literal["markdown", "scrapbox"]
IndentType = Literal["tab", "space"]

# =============================================================================
# Dialects
# =============================================================================

DIALECT_MARKDOWN: DialectName = "markdown"
DIALECT_SCRAPBOX: DialectName = "scrapbox"

SUPPORTED_DIALECTS: tuple[str, ...] = (DIALECT_MARKDOWN, DIALECT_SCRAPBOX)

DIALECT_ALIASES: dict[str, DialectName] = {
    "markdown": DIALECT_MARKDOWN,
    "md": DIALECT_MARKDOWN,
    "scrapbox": DIALECT_SCRAPBOX,
    "sb": DIALECT_SCRAPBOX,
}

# Pseudo target that dumps the syntax tree instead of rendering a dialect
AST_TARGET = "ast"

# =============================================================================
# Grammar
# =============================================================================

FULL_WIDTH_SPACE = "　"

# Suffixes (not dotted extensions) that classify a URL as an image
IMAGE_EXTENSIONS: tuple[str, ...] = ("svg", "jpg", "jpeg", "png", "gif")

URL_SCHEMES: tuple[str, ...] = ("https://", "http://")

# Characters that end a hashtag
HASHTAG_TERMINATORS = frozenset({" ", FULL_WIDTH_SPACE, "\n"})

# Scrapbox decoration markers inside brackets: [*/- text]
BOLD_MARKER = "*"
ITALIC_MARKER = "/"
STRIKETHROUGH_MARKER = "-"
DECORATION_MARKERS = frozenset({BOLD_MARKER, ITALIC_MARKER, STRIKETHROUGH_MARKER})

# Scrapbox command-line pseudo blocks
COMMAND_LINE_PROMPTS: tuple[str, ...] = ("$ ", "% ")

# Name given to every table parsed from Markdown, which has no table names
MARKDOWN_TABLE_NAME = "table"

# Placeholder until nodes get real identifiers
DUMMY_NODE_ID = 0

# =============================================================================
# Conversion Defaults
# =============================================================================

DEFAULT_HEADING1_MAPPING = 3
DEFAULT_BOLD_TO_HEADING = False
DEFAULT_INDENT_SIZE = 2

DEFAULT_SCRAPBOX_BASE_URL = "https://scrapbox.io"

# =============================================================================
# Rendering Defaults
# =============================================================================

# Untitled links to image-host pages are rendered as thumbnails in Markdown
DEFAULT_IMAGE_HOST_PREFIX = "https://gyazo.com/"
DEFAULT_IMAGE_THUMBNAIL_SUFFIX = "/max_size/400"

DEFAULT_SCRAPBOX_INDENT = "\t"
DEFAULT_SCRAPBOX_HEADING1_MAPPING = 4

# =============================================================================
# Configuration Files
# =============================================================================

CONFIG_FILENAMES: tuple[str, ...] = (".scrapmd.toml", ".scrapmd.yaml", ".scrapmd.yml", ".scrapmd.json")
PYPROJECT_SECTION = "scrapmd"
