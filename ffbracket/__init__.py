"""Top-level ffbracket package.

Standings aggregation and postseason bracket resolution for head-to-head plus
median fantasy leagues. Subpackages are imported eagerly so ``ffbracket.compute``
and friends are available after ``import ffbracket``.
"""

from importlib import import_module as _imp

_SUBPACKAGES = ["compute", "playoffs", "report", "cli"]

for _name in _SUBPACKAGES:
    _imp(f"ffbracket.{_name}")

__all__ = list(_SUBPACKAGES)
