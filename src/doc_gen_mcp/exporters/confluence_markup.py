"""Markdown to Confluence storage format.

Markdown is rendered to HTML with the ``markdown`` library and the
Confluence-specific constructs are rewritten afterwards:

- fenced code blocks become ``code`` macros (language parameter kept)
- blockquotes starting with ``INFO:``, ``NOTE:`` or ``WARNING:`` become
  the matching panel macros
- links with a ``confluence:Page Title`` target become page links
- images whose title is ``WIDTHxHEIGHT`` carry that size
"""

from __future__ import annotations

import html
import re

import markdown as md

CODE_BLOCK = re.compile(
    r'<pre><code(?: class="language-(?P<lang>[^"]+)")?>(?P<code>.*?)</code></pre>',
    re.DOTALL,
)
PANEL_BLOCKQUOTE = re.compile(
    r"<blockquote>\s*<p>(?P<kind>INFO|NOTE|WARNING):\s*(?P<body>.*?)</p>\s*</blockquote>",
    re.DOTALL,
)
PAGE_LINK = re.compile(r'<a href="confluence:(?P<page>[^"]*)"[^>]*>.*?</a>', re.DOTALL)
IMAGE = re.compile(r"<img(?P<attrs>[^>]*?)\s*/?>")
ATTR = re.compile(r'(\w+)="([^"]*)"')
SIZE = re.compile(r"^(\d+)x(\d+)$")


def _code_macro(match: re.Match[str]) -> str:
    # A literal "]]>" would end the CDATA section early.
    code = html.unescape(match.group("code")).rstrip("\n").replace("]]>", "]]]]><![CDATA[>")
    lang = match.group("lang")
    param = f'<ac:parameter ac:name="language">{lang}</ac:parameter>' if lang else ""
    return (
        f'<ac:structured-macro ac:name="code">{param}'
        f"<ac:plain-text-body><![CDATA[{code}]]></ac:plain-text-body>"
        "</ac:structured-macro>"
    )


def _panel_macro(match: re.Match[str]) -> str:
    kind = match.group("kind").lower()
    return (
        f'<ac:structured-macro ac:name="{kind}">'
        f"<ac:rich-text-body><p>{match.group('body')}</p></ac:rich-text-body>"
        "</ac:structured-macro>"
    )


def _page_link(match: re.Match[str]) -> str:
    return f'<ac:link><ri:page ri:content-title="{match.group("page")}" /></ac:link>'


def _image(match: re.Match[str]) -> str:
    attrs = dict(ATTR.findall(match.group("attrs")))
    size = SIZE.match(attrs.get("title", ""))
    dims = f' ac:width="{size.group(1)}" ac:height="{size.group(2)}"' if size else ""
    return f'<ac:image{dims}><ri:url ri:value="{attrs.get("src", "")}" /></ac:image>'


def markdown_to_confluence(text: str) -> str:
    """Convert Markdown to Confluence storage-format XHTML."""
    rendered = md.markdown(text, extensions=["fenced_code", "tables"])
    rendered = CODE_BLOCK.sub(_code_macro, rendered)
    rendered = PANEL_BLOCKQUOTE.sub(_panel_macro, rendered)
    rendered = PAGE_LINK.sub(_page_link, rendered)
    rendered = IMAGE.sub(_image, rendered)
    # Adjacent lists of the same kind are merged.
    rendered = re.sub(r"</ul>\s*<ul>", "", rendered)
    rendered = re.sub(r"</ol>\s*<ol>", "", rendered)
    return re.sub(r"\n\s*\n", "\n", rendered)
