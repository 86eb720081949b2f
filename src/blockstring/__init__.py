"""Tagged template processing with indentation-normalised block strings.

The package exposes :data:`block_string`, a ready made processor that strips
the common indentation of multi-line text, together with the factories used
to build custom processors from per-segment tag functions and optional
post-processors.
"""

from __future__ import annotations

from .config import ProcessorConfig
from .errors import BlockStringError, ProcessorConfigError, TemplateShapeError
from .indentation import dedent_literals, detect_indentation, strip_indentation
from .literals import TaggedTemplate, TemplateLiterals, cook
from .processor import (
    BlockTagProcessor,
    TagProcessor,
    block_string,
    make_block_tag_processor,
    make_tag_processor,
    raw_block_string,
)
from .tags import default_concatenate, map_values, raw_concatenate

__all__ = [
    "BlockStringError",
    "BlockTagProcessor",
    "ProcessorConfig",
    "ProcessorConfigError",
    "TagProcessor",
    "TaggedTemplate",
    "TemplateLiterals",
    "TemplateShapeError",
    "block_string",
    "cook",
    "dedent_literals",
    "default_concatenate",
    "detect_indentation",
    "make_block_tag_processor",
    "make_tag_processor",
    "map_values",
    "raw_block_string",
    "raw_concatenate",
    "strip_indentation",
]

__version__ = "0.1.0"
