# umd/preprocessors/normalize.py
"""
Preprocessor that normalises line endings.

Every later pass works line by line on ``\\n``; CRLF and lone CR input would
otherwise leave stray carriage returns inside tokens' paragraphs.
"""


def normalize_line_endings(text: str, context: dict) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def normalize_default(text: str, context: dict) -> str:
    """
    Default configuration for normalize_line_endings.

    This is the function that should be registered in PREPROCESSORS.
    """
    return normalize_line_endings(text, context)
