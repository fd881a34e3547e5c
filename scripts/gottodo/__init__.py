"""
gottodo - a keyboard-driven terminal task list.

Architecture:
- models.py: Task, mode variants, render snapshot, renderer protocol
- codec.py / store.py: JSON persistence and the write-through task store
- machine.py: key -> mutation / mode transition dispatch
- session.py: toolkit-independent event loop core
- app.py + views/: Textual driver and render adapter

Extensibility points:
1. New renderers: Implement the Renderer protocol
2. New bindings: Add a branch to the per-mode handler in machine.py
"""

__version__ = "0.1.0"
