"""Conversion of Prismic structured text to plain text and HTML.

Text content and attribute values are escaped here. Embed blocks carry
provider markup which is emitted as is, since the content source is
trusted.
"""
from itertools import groupby
from typing import Any, Callable, Iterable

from markupsafe import escape

from app.models.post import RichTextBlock, Span

LinkResolver = Callable[[dict[str, Any]], str]

HEADINGS = {f"heading{level}": f"h{level}" for level in range(1, 7)}
LIST_TAGS = {"list-item": "ul", "o-list-item": "ol"}
SPAN_TAGS = {"strong": "strong", "em": "em"}


def resolve_link(link: dict[str, Any]) -> str:
    """Resolves a hyperlink span or ``linkTo`` field to an href."""
    if link.get("link_type") == "Document":
        if link.get("type") == "posts" and link.get("uid"):
            return f"/post/{link['uid']}"
        return "/"
    return link.get("url") or "#"


def as_text(blocks: Iterable[RichTextBlock], join_string: str = " ") -> str:
    return join_string.join(block.text for block in blocks)


def as_html(
    blocks: Iterable[RichTextBlock], link_resolver: LinkResolver = resolve_link
) -> str:
    html = []
    for list_tag, group in groupby(blocks, key=lambda block: LIST_TAGS.get(block.type)):
        items = "".join(_serialize_block(block, link_resolver) for block in group)
        html.append(f"<{list_tag}>{items}</{list_tag}>" if list_tag else items)
    return "".join(html)


def _serialize_block(block: RichTextBlock, link_resolver: LinkResolver) -> str:
    if block.type == "image":
        return _serialize_image(block, link_resolver)
    if block.type == "embed":
        return _serialize_embed(block)
    content = _serialize_spans(block.text, block.spans, link_resolver)
    if block.type in HEADINGS:
        tag = HEADINGS[block.type]
    elif block.type in LIST_TAGS:
        tag = "li"
    elif block.type == "preformatted":
        tag = "pre"
    else:
        tag = "p"
    return f"<{tag}>{content}</{tag}>"


def _serialize_image(block: RichTextBlock, link_resolver: LinkResolver) -> str:
    img = f'<img src="{escape(block.url or "")}" alt="{escape(block.alt or "")}" />'
    link_to = (block.model_extra or {}).get("linkTo")
    if link_to:
        img = f'<a href="{escape(link_resolver(link_to))}">{img}</a>'
    return f'<p class="block-img">{img}</p>'


def _serialize_embed(block: RichTextBlock) -> str:
    oembed = block.oembed or {}
    return (
        f'<div data-oembed="{escape(oembed.get("embed_url", ""))}" '
        f'data-oembed-type="{escape(oembed.get("type", ""))}" '
        f'data-oembed-provider="{escape(oembed.get("provider_name", ""))}">'
        f'{oembed.get("html") or ""}</div>'
    )


def _serialize_spans(text: str, spans: list[Span], link_resolver: LinkResolver) -> str:
    clipped = [
        span.model_copy(update={"start": max(span.start, 0), "end": min(span.end, len(text))})
        for span in spans
    ]
    nodes = _nest([span for span in clipped if span.start < span.end])
    return _render(text, nodes, 0, len(text), link_resolver)


def _nest(spans: list[Span]) -> list[tuple[Span, list]]:
    # Spans crossing the end of an enclosing span are split in two.
    nodes = []
    pending = sorted(spans, key=lambda span: (span.start, -span.end))
    while pending:
        span, inner, rest = pending[0], [], []
        for other in pending[1:]:
            if other.start >= span.end:
                rest.append(other)
            elif other.end <= span.end:
                inner.append(other)
            else:
                inner.append(other.model_copy(update={"end": span.end}))
                rest.append(other.model_copy(update={"start": span.end}))
        nodes.append((span, _nest(inner)))
        pending = sorted(rest, key=lambda span: (span.start, -span.end))
    return nodes


def _render(
    text: str,
    nodes: list[tuple[Span, list]],
    start: int,
    end: int,
    link_resolver: LinkResolver,
) -> str:
    html = []
    cursor = start
    for span, children in nodes:
        html.append(_escape_text(text[cursor : span.start]))
        inner = _render(text, children, span.start, span.end, link_resolver)
        html.append(_wrap(span, inner, link_resolver))
        cursor = span.end
    html.append(_escape_text(text[cursor:end]))
    return "".join(html)


def _wrap(span: Span, inner: str, link_resolver: LinkResolver) -> str:
    data = span.data or {}
    if span.type in SPAN_TAGS:
        tag = SPAN_TAGS[span.type]
        return f"<{tag}>{inner}</{tag}>"
    if span.type == "hyperlink":
        target = ' target="_blank" rel="noopener"' if data.get("target") else ""
        return f'<a href="{escape(link_resolver(data))}"{target}>{inner}</a>'
    if span.type == "label":
        return f'<span class="{escape(data.get("label", ""))}">{inner}</span>'
    return inner


def _escape_text(text: str) -> str:
    return str(escape(text)).replace("\n", "<br />")
