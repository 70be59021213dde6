from . import collect, formatters, models, render

build_postseason_context = collect.build_postseason_context
format_markdown = formatters.format_markdown
format_json = formatters.format_json
PostseasonContext = models.PostseasonContext

__all__ = ["build_postseason_context", "format_markdown", "format_json", "PostseasonContext"]
