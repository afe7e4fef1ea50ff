"""
Compiler Prompts - System instructions for the site compiler.

The user turn is the raw source text; these prompts only describe
the tool conventions and the build environment.
"""

from dataclasses import dataclass

from .assets import AssetInventory


@dataclass
class CompilerPrompts:
    """
    Collection of prompts for site compilation.
    """

    @staticmethod
    def rules() -> str:
        """Tool usage conventions."""
        return """
You are a web compiler. Translate a plain-English description into a sequence of tool calls that builds a website.
Rules:
- Return tool calls only, with valid JSON arguments. No commentary.
- Use set_layout() for the shared wrapper (document start, metadata, title, opening body; closing body and document end).
- Use create_page() for BODY-only content. The user writes in plain English; you generate the HTML.
- Use add_dynamic_content() to mark placeholders like {{CURRENT_TIME}}.
- Use add_asset() to insert images from the local assets/ directory; prefer exact filenames from the inventory below.
""".strip()

    @staticmethod
    def environment(inventory: AssetInventory) -> str:
        """Static file mount and the asset inventory."""
        if inventory.files:
            listing = "\n".join(f"- {name}" for name in inventory.files)
            assets = f"Available assets (relative to /assets):\n{listing}"
        else:
            assets = "No assets found."
        return (
            "Environment:\n"
            "- Static files are served from /assets (mapped to the local ./assets directory).\n"
            f"{assets}"
        )

    @classmethod
    def system_prompt(cls, inventory: AssetInventory) -> str:
        return f"{cls.rules()}\n\n{cls.environment(inventory)}"
