"""
Memo export boundary.

Design intent:
- Project a validated trace plus its draft into one self-contained document.
- Escape every user-supplied string before it reaches markup.
- Keep output byte-identical for identical inputs.
"""

from .render import memo_filename, render_memo_html

__all__ = ["memo_filename", "render_memo_html"]
