"""Clippings parsing interfaces.

`parse_string` lives in `clipkit.parsing.parser`; it is not re-exported here
because the processing stages import these models.
"""

from .models import AnnotationRecord, Location, ParseWarning, QualityFlags, RawBlock
from .options import ParseOptions
from .tokenizer import tokenize

__all__ = [
    "AnnotationRecord",
    "Location",
    "ParseOptions",
    "ParseWarning",
    "QualityFlags",
    "RawBlock",
    "tokenize",
]
