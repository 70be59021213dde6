from . import postseason_report

__all__ = ["postseason_report"]
