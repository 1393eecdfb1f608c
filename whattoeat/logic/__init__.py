"""Core business logic layer.

Subpackages:
- store: the food store (list ownership, filtering, random picks)
- lottery: the spin/settle lottery state machine

The clock status line and its scheduled refresh live in `logic.clock`.
"""
__all__ = ["store", "lottery", "clock"]
