"""Report renderers (text, Markdown)."""
