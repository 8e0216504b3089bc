#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mailpost package.

This module centralizes the literal values shared across mailpost: the
shortcode template text, file naming suffixes, title suggestion limits and
configuration defaults.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Shortcodes - Directive tokens and template lines
3. Storage - Post file naming
4. Title Suggestion - Candidate filtering limits
5. Conversion - Cutoff marker and reflow settings
6. Mail Transport - Delivery defaults
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

TransportType = Literal["smtp", "outbox"]
ConfigFormat = Literal["toml", "yaml", "json"]

# =============================================================================
# Shortcodes
# =============================================================================

# Presence of this token (anywhere in the post) marks a post as configured
STATUS_TOKEN = "[status "
DEFAULT_STATUS = "draft"

# Mail signature delimiter; the trailing space is significant
SIGNATURE_LINE = "-- "

SHORTCODE_FOOTER_LINES: tuple[str, ...] = (
    SIGNATURE_LINE,
    'Anything after the signature line "-- " will not appear in the post.',
    "Status can be publish, pending, or draft.",
    "[slug some-url-name]",
    "[excerpt]some excerpt[/excerpt]",
    "[delay +1 hour]",
    "[comments on | off]",
    "[password secret-password]",
)

# =============================================================================
# Storage
# =============================================================================

POST_SUFFIX = "post"
CONVERTER_SUFFIX = "md"

# =============================================================================
# Title Suggestion
# =============================================================================

# Candidates must be longer than this once trimmed
TITLE_MIN_TRIMMED_LENGTH = 4
# ... and shorter than this before trimming
TITLE_MAX_RAW_LENGTH = 60

# =============================================================================
# Conversion
# =============================================================================

DEFAULT_CUTOFF_MARKER = "<!-- end of post -->"
DEFAULT_CONVERTER: str | None = None

# Fill width used after conversion; large enough that paragraphs never wrap
REFLOW_FILL_COLUMN = 100_000

# =============================================================================
# Configuration Defaults
# =============================================================================

DEFAULT_RECIPIENT = ""
DEFAULT_TAGS = ""
DEFAULT_CATEGORY_IS_TAG = False
DEFAULT_CATEGORIES: tuple[str, ...] = ()

# =============================================================================
# Mail Transport
# =============================================================================

DEFAULT_TRANSPORT: TransportType = "smtp"
DEFAULT_SMTP_HOST = "localhost"
DEFAULT_SMTP_PORT = 25
DEFAULT_SMTP_STARTTLS = False
DEFAULT_SMTP_TIMEOUT = 30.0
DEFAULT_OUTBOX_DIRECTORY = "outbox"

# =============================================================================
# Configuration Files
# =============================================================================

CONFIG_FILENAMES: tuple[str, ...] = (".mailpost.toml", ".mailpost.yaml", ".mailpost.yml", ".mailpost.json")
ENV_PREFIX = "MAILPOST_"

# Spellings accepted for booleans given as strings (env vars, quoted config values)
TRUE_VALUES: tuple[str, ...] = ("true", "1", "yes", "on")
FALSE_VALUES: tuple[str, ...] = ("false", "0", "no", "off")
