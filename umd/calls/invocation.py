# umd/calls/invocation.py

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class CallShape(Enum):
    """The seven recognised call shapes."""

    INLINE_FULL = "InlineFull"  # &name(args){content};  or  &name{content};
    INLINE_ARGS_ONLY = "InlineArgsOnly"  # &name(args);
    INLINE_NONE = "InlineNone"  # &name;
    BLOCK_MULTI_LINE = "BlockMultiLine"  # @name(args){{content}}
    BLOCK_SINGLE_LINE = "BlockSingleLine"  # @name(args){content}
    BLOCK_ARGS_ONLY = "BlockArgsOnly"  # @name(args)
    BLOCK_NONE = "BlockNone"  # @name()

    @property
    def is_block(self) -> bool:
        return self.name.startswith("BLOCK")

    @property
    def has_content(self) -> bool:
        return self in (CallShape.INLINE_FULL, CallShape.BLOCK_MULTI_LINE, CallShape.BLOCK_SINGLE_LINE)


@dataclass
class CallInvocation:
    """
    One recognised call.

    ``start``/``end`` are offsets into the text the call was found in, and
    ``source`` is the exact text between them.
    """

    name: str
    shape: CallShape
    arguments: List[str] = field(default_factory=list)
    content: str = ""
    nesting_depth: int = 0
    start: int = 0
    end: int = 0
    source: str = ""

    @property
    def argument_text(self) -> str:
        return ", ".join(self.arguments)
