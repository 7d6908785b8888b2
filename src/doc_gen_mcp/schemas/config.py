"""Configuration schemas for document generation and the built-in exporters."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Lang = Literal["de", "en"]


class _CamelModel(BaseModel):
    """JSON config files use camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class OutputFormat(str, Enum):
    """Output of the in-process generator."""
    MARKDOWN = "markdown"
    JSON = "json"


class OutputStyle(_CamelModel):
    """Heading depth and bullet character for rendered Markdown."""
    heading_level: int = Field(default=2, ge=1, le=5)
    bullet: str = "-"


class GeneratorConfig(_CamelModel):
    """Effective settings for one generate/validate/diff call."""
    output_format: OutputFormat = OutputFormat.MARKDOWN
    output_style: OutputStyle = Field(default_factory=OutputStyle)
    languages: list[str] = Field(default_factory=list)
    lang: Lang = "de"


# Markdown exporter

class CodeBlockOptions(_CamelModel):
    add_language: bool = True
    default_language: str = "text"


class MarkdownConfig(_CamelModel):
    flavor: Literal["github", "commonmark", "standard"] = "github"
    heading_level: int = Field(default=2, ge=1, le=5)
    bullet_char: str = "-"
    table_of_contents: bool = True
    code_blocks: CodeBlockOptions = Field(default_factory=CodeBlockOptions)
    template_file: str | None = None


# HTML exporter

class HtmlStyles(_CamelModel):
    css_file: str | None = None
    inline_styles: str | None = None
    external_stylesheets: list[str] = Field(default_factory=list)
    theme: Literal["light", "dark", "auto"] = "light"


class HtmlScripts(_CamelModel):
    js_file: str | None = None
    inline_script: str | None = None
    external_scripts: list[str] = Field(default_factory=list)
    enable_interactive_features: bool = True
    enable_search: bool = True


class HtmlDisplay(_CamelModel):
    table_of_contents: bool = True
    category_navigation: bool = True
    breadcrumbs: bool = True
    meta_info: bool = True


class HtmlConfig(_CamelModel):
    template_file: str | None = None
    styles: HtmlStyles = Field(default_factory=HtmlStyles)
    scripts: HtmlScripts = Field(default_factory=HtmlScripts)
    display: HtmlDisplay = Field(default_factory=HtmlDisplay)


# PDF exporter

class PdfFontSize(_CamelModel):
    title: int = 24
    heading: int = 18
    subheading: int = 14
    body: int = 12
    code: int = 10


class PdfMargins(_CamelModel):
    top: int = 72
    bottom: int = 72
    left: int = 72
    right: int = 72


class PdfColors(_CamelModel):
    primary: str = "#1a73e8"
    secondary: str = "#4285f4"
    text: str = "#202124"
    heading: str = "#202124"
    link: str = "#1a73e8"
    code: str = "#37474f"
    code_background: str = "#f5f5f5"
    border: str = "#dadce0"


class PdfConfig(_CamelModel):
    font_family: str = "Helvetica"
    font_size: PdfFontSize = Field(default_factory=PdfFontSize)
    page_size: str = "A4"
    margins: PdfMargins = Field(default_factory=PdfMargins)
    include_table_of_contents: bool = True
    include_cover_page: bool = True
    header_template: str = "{{title}}"
    footer_template: str = "Page {{page}} of {{pages}}"
    colors: PdfColors = Field(default_factory=PdfColors)


# Confluence exporter

class ConfluenceAuth(_CamelModel):
    method: Literal["token", "basic"] = "token"
    token: str | None = None
    username: str | None = None
    password: str | None = None

    def is_complete(self) -> bool:
        if self.method == "token":
            return bool(self.token)
        return bool(self.username and self.password)


class ConfluenceConfig(_CamelModel):
    base_url: str = ""
    space_key: str = ""
    parent_page_id: str | None = None
    auth: ConfluenceAuth = Field(default_factory=ConfluenceAuth)
    default_labels: list[str] = Field(default_factory=list)
    timeout: float = 30.0
