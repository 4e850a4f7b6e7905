from __future__ import annotations

import html
from datetime import datetime

import markdown as md

from notestory.core.models import Note, status_icon
from notestory.core.sanitize import sanitize_rendered_html


class MarkdownRenderer:
    def __init__(self, *, date_format: str = "%d.%m.%Y %H:%M"):
        self.date_format = date_format

    def render_body(self, text: str) -> str:
        rendered = md.markdown(text or "", extensions=["fenced_code", "tables", "nl2br"])
        return sanitize_rendered_html(rendered)

    def render_note(self, note: Note) -> str:
        created = _local(note.created_at).strftime(self.date_format)
        return f"""\
<html>
<head>
  <meta charset="utf-8"/>
  <style>
    body {{ font-family: sans-serif; padding: 12px; line-height: 1.5; }}
    .meta {{ color: #888; font-size: small; }}
    code, pre {{ background: #f5f5f5; }}
  </style>
</head>
<body>
<h2>{status_icon(note.is_complete)} {html.escape(note.title)}</h2>
<p class="meta">{html.escape(created)}</p>
{self.render_body(note.body)}
</body>
</html>
"""

    def render_empty(self) -> str:
        return "<html><body><p class=\"meta\">Выберите заметку</p></body></html>"


def _local(ts: datetime) -> datetime:
    # naive timestamps are shown as stored
    return ts.astimezone() if ts.tzinfo is not None else ts
