"""Presentation helpers for timeline messages.

Pure functions with no NiceGUI dependency, so the chat page stays a thin
layout layer and the display policy can be tested directly.
"""

import html
import re
from datetime import datetime

from ragchat.models.schemas import CitationRecord, Message

MAX_VISIBLE_SOURCES = 3
PREVIEW_LENGTH = 100

_BULLET = re.compile(r"^[-*]\s+")
_NUMBERED = re.compile(r"^\d+\.\s+")


def visible_sources(message: Message, limit: int = MAX_VISIBLE_SOURCES) -> list[CitationRecord]:
    """Citations to display for a message.

    Only the first ``limit`` are shown; the message keeps all of them.
    Messages without sources and messages with an empty tuple both yield [].
    """
    if not message.sources or limit <= 0:
        return []
    return list(message.sources[:limit])


def source_preview(citation: CitationRecord, length: int = PREVIEW_LENGTH) -> str:
    """Short single-line excerpt of a citation."""
    excerpt = " ".join(citation.excerpt.split())
    if len(excerpt) <= length:
        return excerpt
    return excerpt[:length].rstrip() + "..."


def format_timestamp(moment: datetime) -> str:
    return moment.strftime("%I:%M %p")


def _wrap_lists(text: str, marker: re.Pattern[str], tag: str, classes: str) -> str:
    """Group consecutive list lines into a single <ul>/<ol> block."""
    result: list[str] = []
    in_list = False
    for line in text.split("\n"):
        stripped = line.strip()
        if marker.match(stripped):
            if not in_list:
                result.append(f'<{tag} class="{classes}">')
                in_list = True
            result.append(f"<li>{marker.sub('', stripped)}</li>")
            continue
        if in_list:
            result.append(f"</{tag}>")
            in_list = False
        result.append(line)
    if in_list:
        result.append(f"</{tag}>")
    return "\n".join(result)


def markdown_to_html(text: str) -> str:
    """Convert the markdown subset RAG answers use into chat HTML.

    Supports: code blocks, inline code, bold, italic, links, lists.
    """
    text = html.escape(text, quote=False)

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs">'
        r"<code>\2</code></pre>",
        text,
    )
    text = re.sub(
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
        text,
    )
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"__(.+?)__", r"<strong>\1</strong>", text)
    text = re.sub(r"(?<![\w*])\*([^*\n]+)\*(?!\w)", r"<em>\1</em>", text)
    text = re.sub(r"(?<!\w)_([^_\n]+)_(?!\w)", r"<em>\1</em>", text)
    text = re.sub(
        r"\[([^\]]+)\]\(([^)\s]+)\)",
        r'<a href="\2" class="text-blue-600 underline" target="_blank">\1</a>',
        text,
    )

    text = _wrap_lists(text, _BULLET, "ul", "list-disc list-inside my-2 space-y-1")
    text = _wrap_lists(text, _NUMBERED, "ol", "list-decimal list-inside my-2 space-y-1")

    return text.replace("\n", "<br>")


def message_html(message: Message) -> str:
    """Bubble body: markdown for answers, escaped text for the user."""
    if message.is_user:
        return html.escape(message.content, quote=False).replace("\n", "<br>")
    return markdown_to_html(message.content)
