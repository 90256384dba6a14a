"""Markdown Sanitizer — restrictive Markdown-to-HTML for untrusted blog bodies.

Invariants:
    - Raw HTML is removed BEFORE any Markdown is interpreted (strip, then render)
    - Output tags are only h1/h2/h3/p/ul/li/strong/a[href]/br, all self-generated
    - All user text is HTML-escaped before inline syntax is applied
    - Link hrefs with javascript:/data:/vbscript: schemes become "#"
    - Total: any str yields a str; malformed syntax degrades to literal text

Design Decisions:
    - Hand-rolled grammar over python-markdown + bleach: the accepted subset is
      tiny and exact output shape is part of the contract
    - Links and bold share one alternation regex so a substitution can never
      land inside markup produced by another substitution
    - href is unescaped once before the scheme check so entity-encoded schemes
      ("javascript&#58;") are caught, then escaped again for attribute context
"""

import html
import logging
import re

logger = logging.getLogger(__name__)

_SCRIPT_OR_STYLE_OPEN = re.compile(r"<\s*(script|style)\b[^<>]*>", re.IGNORECASE)
_SCRIPT_OR_STYLE_CLOSE = {
    name: re.compile(rf"<\s*/\s*{name}\s*>", re.IGNORECASE) for name in ("script", "style")
}
_EVENT_HANDLER_ATTR = re.compile(
    r"""\son\w+\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+)""", re.IGNORECASE,
)
# a tag never spans another "<", quoted values included
_TAG_WITH_ATTRS = re.compile(r"""<(?:[^<>"']|"[^"<]*"|'[^'<]*')+>""")
_ANY_TAG = re.compile(r"<[^<>]+>")

_BLOCK_SEPARATOR = re.compile(r"\n\s*\n")
_LIST_ITEM = re.compile(r"^-\s+")
_HEADING_PREFIXES = (("### ", "h3"), ("## ", "h2"), ("# ", "h1"))

# label stops at the next bracket; href allows one level of balanced
# parentheses: [x](javascript:alert(1))
_INLINE_SPAN = re.compile(
    r"\[(?P<label>[^\[\]\n]*)\]\((?P<href>(?:[^()]|\([^()]*\))*)\)"
    r"|\*\*(?P<bold>.+?)\*\*"
)

_CONTROL_OR_SPACE = re.compile(r"[\x00-\x1f\x7f\s]+")
_BLOCKED_SCHEMES = ("javascript:", "data:", "vbscript:")
_LINE_BREAK = "<br/>"


# ─── Phase 1: raw HTML removal ───────────────────────────────────

def _drop_event_handlers(match: re.Match) -> str:
    return _EVENT_HANDLER_ATTR.sub("", match.group(0))


def _drop_script_and_style_blocks(text: str) -> str:
    """Remove each opening tag through its nearest closing tag, contents included."""
    kept = []
    position = 0
    unclosed = set()
    for opening in _SCRIPT_OR_STYLE_OPEN.finditer(text):
        name = opening.group(1).lower()
        if opening.start() < position or name in unclosed:
            continue
        closing = _SCRIPT_OR_STYLE_CLOSE[name].search(text, opening.end())
        if closing is None:
            # no closing tag later in the text, so no later opening can close either
            unclosed.add(name)
            continue
        kept.append(text[position:opening.start()])
        position = closing.end()
    kept.append(text[position:])
    return "".join(kept)


def strip_raw_html(text: str) -> str:
    """Remove script/style blocks, event handlers inside tags, then every tag."""
    cleaned = _drop_script_and_style_blocks(text)
    cleaned = _TAG_WITH_ATTRS.sub(_drop_event_handlers, cleaned)
    cleaned = _ANY_TAG.sub("", cleaned)
    if cleaned != text:
        logger.debug("Stripped raw HTML from markdown input")
    return cleaned


# ─── Phase 2: inline rendering ───────────────────────────────────

def escape_html(value: str) -> str:
    return html.escape(value, quote=True)


def sanitize_url(url: str) -> str:
    """First whitespace token, unquoted, with dangerous schemes replaced by '#'."""
    tokens = url.strip().split()
    first_token = tokens[0].strip("'\"") if tokens else ""
    compact = _CONTROL_OR_SPACE.sub("", first_token)
    if compact.lower().startswith(_BLOCKED_SCHEMES):
        logger.debug("Neutralized unsafe link scheme")
        return "#"
    return compact


def _render_spans(escaped: str) -> str:
    return _INLINE_SPAN.sub(_replace_span, escaped)


def _replace_span(match: re.Match) -> str:
    bold = match.group("bold")
    if bold is not None:
        return f"<strong>{_render_spans(bold)}</strong>"
    href = escape_html(sanitize_url(html.unescape(match.group("href"))))
    return f'<a href="{href}">{_render_spans(match.group("label"))}</a>'


def render_inline(text: str) -> str:
    """Escape text, then apply [label](url) and **bold**."""
    return _render_spans(escape_html(text))


# ─── Phase 3: blocks ─────────────────────────────────────────────

def _render_block(block: str) -> str:
    lines = [line.strip() for line in block.split("\n")]

    if len(lines) == 1:
        for prefix, tag in _HEADING_PREFIXES:
            if lines[0].startswith(prefix):
                return f"<{tag}>{render_inline(lines[0][len(prefix):])}</{tag}>"

    if all(_LIST_ITEM.match(line) for line in lines):
        items = "".join(
            f"<li>{render_inline(_LIST_ITEM.sub('', line, count=1))}</li>"
            for line in lines
        )
        return f"<ul>{items}</ul>"

    return f"<p>{_LINE_BREAK.join(render_inline(line) for line in lines)}</p>"


def render_markdown(markdown: str | None) -> str:
    """Render untrusted Markdown to an HTML fragment safe for direct embedding."""
    if markdown is None:
        return ""
    if not isinstance(markdown, str):
        raise TypeError(f"Expected markdown text, got {type(markdown).__name__}")

    text = strip_raw_html(markdown.replace("\r\n", "\n").replace("\r", "\n"))
    blocks = (raw.strip() for raw in _BLOCK_SEPARATOR.split(text))
    return "".join(_render_block(block) for block in blocks if block)
