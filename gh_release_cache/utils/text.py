"""Text sanitising for release notes and pull request descriptions."""

from bs4 import BeautifulSoup


def strip_html(text: str | None) -> str | None:
    """Remove HTML tags from text, keeping the visible content.

    Markdown is left alone; only tags such as ``<details>`` or ``<img>``
    that GitHub users embed in release notes and PR bodies are removed.

    Args:
        text: Raw text which may contain HTML markup

    Returns:
        Plain text, or None when no text was given

    Example:
        >>> strip_html("<b>Fixed</b> a crash")
        'Fixed a crash'
    """
    if text is None:
        return None
    if "<" not in text:
        return text
    return BeautifulSoup(text, "html.parser").get_text()
