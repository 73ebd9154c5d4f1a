# umd/postprocessors/__init__.py

from .blockquote_enhancer import blockquote_enhancer_default
from .emphasis import emphasis_enhancer_default
from .header_ids import header_ids_default
from .link_attributes import link_attributes_default
from .restore import restore_default
from .sanitizer import sanitize_html
from .table_enhancer import table_enhancer_default
from .task_markers import task_markers_default

POSTPROCESSORS = [
    sanitize_html,  # Engine output only; extension markup is still tokenised
    emphasis_enhancer_default,  # ''bold'' '''italic''' %%strike%% ||spoiler||
    header_ids_default,  # Shares one parsed soup with the two passes below
    link_attributes_default,
    task_markers_default,
    restore_default,  # Tokens -> HTML; raises on anything left over
    table_enhancer_default,  # Base class on engine tables
    blockquote_enhancer_default,  # Blockquote class and GitHub alerts
    # Order matters - they run sequentially
]


def apply_postprocessors(html, context):
    """Apply all postprocessors in order"""
    for processor in POSTPROCESSORS:
        html = processor(html, context)
    return html
