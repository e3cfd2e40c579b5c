__version__ = '1.1.0'

from .colors import (
    RGB as RGB,
    color_from_int as color_from_int,
    color_to_int as color_to_int,
    parse_hex_color as parse_hex_color,
)
from .config import (
    Config as Config,
    LayoutConfig as LayoutConfig,
    StyleConfig as StyleConfig,
    LineNumberMode as LineNumberMode,
    PageNumberMode as PageNumberMode,
    DEFAULTS as DEFAULTS,
)
from .errors import (
    AsapdfError as AsapdfError,
    ConfigError as ConfigError,
    AllocationError as AllocationError,
)
from .pdf import (
    build_document as build_document,
    convert_text as convert_text,
    DocumentSummary as DocumentSummary,
)
from .validation import (
    validate_config as validate_config,
    ValidationIssue as ValidationIssue,
    ValidationResult as ValidationResult,
)
