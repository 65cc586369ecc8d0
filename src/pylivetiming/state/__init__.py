"""State layer.

This package is the single source of truth for how incoming feed patches
are merged into per-session state and its derived lap history.
"""
