"""
HTML Extraction - Reader-mode content and sanitization for article pages.

Handles:
- Absolute URLs and safe link attributes (normalize_urls)
- Main-content extraction via trafilatura, falling back to readability-lxml
- Allowlist sanitization of extracted HTML before it is stored or rendered
"""

import logging
from urllib.parse import urljoin

import trafilatura
from bs4 import BeautifulSoup, CData, Comment, Declaration, Doctype, ProcessingInstruction
from readability import Document

logger = logging.getLogger(__name__)

# Removed together with everything inside them
DROP_TAGS = [
    "script", "style", "noscript", "template", "iframe", "frame", "frameset",
    "object", "embed", "applet", "form", "input", "button", "select",
    "textarea", "link", "meta", "base", "head", "title", "svg", "math",
    "canvas", "audio", "video",
]

ALLOWED_TAGS = {
    "a", "abbr", "article", "b", "blockquote", "br", "caption", "cite",
    "code", "dd", "del", "details", "div", "dl", "dt", "em", "figcaption",
    "figure", "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "ins",
    "kbd", "li", "mark", "ol", "p", "pre", "q", "s", "section", "small",
    "span", "strong", "sub", "summary", "sup", "table", "tbody", "td",
    "tfoot", "th", "thead", "time", "tr", "u", "ul",
}

GLOBAL_ATTRIBUTES = {"title", "lang", "dir"}

ALLOWED_ATTRIBUTES = {
    "a": {"href", "target", "rel"},
    "img": {"src", "alt", "width", "height"},
    "blockquote": {"cite"},
    "q": {"cite"},
    "td": {"colspan", "rowspan"},
    "th": {"colspan", "rowspan", "scope"},
    "ol": {"start"},
    "time": {"datetime"},
}

URL_ATTRIBUTES = {"href", "src", "cite"}

UNSAFE_SCHEMES = ("javascript:", "vbscript:", "data:", "file:")

LINK_TARGET = "_blank"
LINK_REL = "noopener nofollow"


def normalize_urls(html: str, base_url: str) -> str:
    """
    Make image and link URLs absolute against base_url.

    Links also open in a new tab with rel="noopener nofollow".
    """
    soup = BeautifulSoup(html, "html.parser")

    for img in soup.find_all("img", src=True):
        img["src"] = _absolute(img["src"], base_url)

    for link in soup.find_all("a"):
        if link.get("href") is not None:
            link["href"] = _absolute(link["href"], base_url)
        link["target"] = LINK_TARGET
        link["rel"] = LINK_REL

    return str(soup)


def _absolute(url: str, base_url: str) -> str:
    try:
        return urljoin(base_url, url.strip())
    except ValueError:
        # Malformed URL (e.g. broken IPv6 host), leave as is for the sanitizer
        return url


def has_text(html: str | None) -> bool:
    """Check whether HTML contains any visible text."""
    if not html:
        return False
    return bool(BeautifulSoup(html, "html.parser").get_text(strip=True))


def extract_article(html: str, url: str) -> str | None:
    """
    Extract the main article content from a page as HTML.

    Tries trafilatura first, then readability. Returns None when neither
    finds any text. Extraction errors are logged, never raised.
    """
    try:
        content = _extract_with_trafilatura(html, url)
        if has_text(content):
            return content
    except Exception as e:
        logger.warning(f"trafilatura failed for {url}: {e}")

    try:
        content = _extract_with_readability(html, url)
        if has_text(content):
            return content
    except Exception as e:
        logger.warning(f"readability failed for {url}: {e}")

    return None


def _extract_with_trafilatura(html: str, url: str) -> str | None:
    """Reader-mode extraction keeping links, images and tables."""
    return trafilatura.extract(
        html,
        url=url,
        output_format="html",
        include_links=True,
        include_images=True,
        include_tables=True,
        favor_recall=True,
    )


def _extract_with_readability(html: str, url: str) -> str | None:
    """Mozilla Readability-style extraction as a fallback."""
    return Document(html, url=url).summary(html_partial=True)


def sanitize_html(html: str) -> str:
    """
    Strip everything that could run script from an HTML fragment.

    Dangerous elements are removed with their contents, unknown tags are
    unwrapped, and only allowlisted attributes survive. Event handlers and
    javascript:/data: URLs never do.
    """
    soup = BeautifulSoup(html, "html.parser")

    for node in soup.find_all(string=lambda s: isinstance(
        s, (Comment, CData, Doctype, Declaration, ProcessingInstruction)
    )):
        node.extract()

    while tag := soup.find(DROP_TAGS):
        tag.decompose()

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue

        allowed = ALLOWED_ATTRIBUTES.get(tag.name, set()) | GLOBAL_ATTRIBUTES
        for attr in list(tag.attrs):
            if attr not in allowed:
                del tag[attr]
            elif attr in URL_ATTRIBUTES and not _is_safe_url(tag[attr], tag.name):
                del tag[attr]

        if tag.name == "a" and tag.get("target"):
            tag["rel"] = LINK_REL

    return str(soup).strip()


def _is_safe_url(value: str, tag_name: str) -> bool:
    # Browsers ignore whitespace and control characters inside the scheme
    compact = "".join(ch for ch in value if ch > " ").lower()
    if tag_name == "img" and compact.startswith("data:image/"):
        return True
    return not compact.startswith(UNSAFE_SCHEMES)
