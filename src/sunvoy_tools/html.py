"""HTML field extraction for scraped pages."""

from typing import Protocol

from bs4 import BeautifulSoup


class HtmlExtractor(Protocol):
    """Anything that can pull one attribute out of an HTML document."""

    def extract_attribute(
        self, html: str, selector: str, attribute: str
    ) -> str | None: ...

    def body_text(self, html: str) -> str: ...


class SoupExtractor:
    """HtmlExtractor backed by BeautifulSoup CSS selectors."""

    def __init__(self, features: str = "html.parser"):
        self.features = features

    def extract_attribute(self, html: str, selector: str, attribute: str) -> str | None:
        """Return the attribute of the first element matching selector, if any."""
        element = BeautifulSoup(html, self.features).select_one(selector)
        if element is None:
            return None
        value = element.get(attribute)
        if isinstance(value, list):  # multi-valued attributes such as class
            return " ".join(value)
        return value

    def body_text(self, html: str) -> str:
        """Return the stripped visible text of the document body."""
        soup = BeautifulSoup(html, self.features)
        body = soup.body if soup.body is not None else soup
        return body.get_text(" ", strip=True)
