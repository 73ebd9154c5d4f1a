# umd/preprocessors/utils.py

from typing import List


def append_paragraph(output: List[str], line: str) -> None:
    """Append ``line`` to ``output`` as a paragraph of its own."""
    if output and output[-1].strip():
        output.append("")
    output.append(line)
    output.append("")
