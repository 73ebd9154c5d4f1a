# umd/calls/__init__.py

from .builtins import BLOCK_BUILTINS, INLINE_BUILTINS, Wrap
from .envelope import render_envelope
from .grammar import scan_braces, scan_double_braces, scan_parens, split_arguments
from .invocation import CallInvocation, CallShape
from .parser import CallParser, find_calls, parse_calls, scan_call

__all__ = [
    "BLOCK_BUILTINS",
    "INLINE_BUILTINS",
    "CallInvocation",
    "CallParser",
    "CallShape",
    "Wrap",
    "find_calls",
    "parse_calls",
    "render_envelope",
    "scan_braces",
    "scan_call",
    "scan_double_braces",
    "scan_parens",
    "split_arguments",
]
