"""Public package surface for echonav.

Exports ``main`` for programmatic CLI invocation.
Navigation logic lives in ``echonav.navigator`` and ``echonav.outline``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
