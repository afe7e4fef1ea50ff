"""
plainweb - Plain-language website compiler.

Turns a plain-text description of a website into servable routes:
- A language model emits an ordered list of tool calls (BUILD-TIME only)
- The tool calls are replayed deterministically onto a Site Model
- The compiled plan is cached on disk and reused while inputs are unchanged
- Pages are rendered per request with dynamic placeholders filled in
"""

__version__ = "0.1.0"
