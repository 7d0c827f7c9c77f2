"""
chanterm – Browse 4chan boards and catalogs from the terminal.

Supports:
  • Listing every board from boards.json
  • Rendering a board's catalog (all pages, OPs only)
  • Inspecting a single thread with its attachment URL
  • Printing boards / catalog previews as tables from the CLI
"""
