"""
Rendering of classified imports as a single Go import block.
"""
from sortimport.support.models import ClassifiedImports

BLOCK_OPEN = "import ("
BLOCK_CLOSE = ")"


def render_block(classified: ClassifiedImports) -> str:
    """
    Render a grouped import block.

    Groups appear in fixed order, separated by one blank line. Empty groups
    contribute nothing. Each entry is rendered on its own tab-indented line.

    Example:
        import (
            "fmt"

            "github.com/org/proj/pkg"
        )
    """
    if classified.count() == 0:
        raise ValueError("Cannot render an import block with no imports")

    sections = []
    for _, entries in classified.groups():
        if not entries:
            continue
        sections.append("".join(f"\t{entry.render()}\n" for entry in entries))

    return BLOCK_OPEN + "\n" + "\n".join(sections) + BLOCK_CLOSE
