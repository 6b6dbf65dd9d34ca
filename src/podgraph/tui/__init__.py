"""Textual TUI for browsing pod dependency trees."""
