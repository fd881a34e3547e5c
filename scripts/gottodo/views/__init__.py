"""Textual render adapter: screens and panels that draw a Snapshot."""
