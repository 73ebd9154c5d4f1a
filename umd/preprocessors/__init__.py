# umd/preprocessors/__init__.py

from .block_decorations import block_decorations_default, block_placement_default
from .calls import calls_default
from .comments import comments_default
from .definition_lists import definition_lists_default
from .header_ids import header_ids_default
from .link_attributes import link_attributes_default
from .normalize import normalize_default
from .quote_blocks import quote_blocks_default
from .raw_html import raw_html_default
from .tables import tables_default
from .task_markers import task_markers_default
from .underline import underline_default

PREPROCESSORS = [
    normalize_default,  # CRLF/CR -> LF before anything counts lines
    comments_default,  # Drop // and /* */ comments
    calls_default,  # Must run before every other protection pass
    tables_default,  # Extended tables; cells may already hold call tokens
    block_placement_default,  # Needs the table and call tokens above
    block_decorations_default,  # COLOR(...): / SIZE(...): / CENTER: paragraphs
    quote_blocks_default,  # > text <
    definition_lists_default,  # :term|definition
    header_ids_default,  # ## Heading {#id}
    link_attributes_default,  # [text](url){.class #id}
    task_markers_default,  # - [-] item
    underline_default,  # __text__
    raw_html_default,  # Last: typed tags become text, call payloads are already tokens
    # Order matters - they run sequentially
]


def apply_preprocessors(text, context):
    """Apply all preprocessors in order"""
    for processor in PREPROCESSORS:
        text = processor(text, context)
    return text
