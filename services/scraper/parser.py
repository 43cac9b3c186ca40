from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from core.exceptions import ParseFailedException
from core.logger import get_logger

logger = get_logger(__name__)


class ContentExtractor:
    """
    Applies a CSS selector to a document and concatenates the text of every
    matched element in document order. No separator and no whitespace
    normalization, so the block hashes the same way on every run.
    """

    def __init__(self, features: str = "html.parser"):
        self.features = features

    def extract(self, html: str, rule: str) -> str:
        """
        Raises:
            ParseFailedException: document cannot be parsed or selector is invalid
        """
        try:
            soup = BeautifulSoup(html, self.features)
        except Exception as e:
            raise ParseFailedException(
                "Error parsing the HTML document", {"error": str(e)}
            ) from e

        try:
            matches = soup.select(rule)
        except (SelectorSyntaxError, ValueError, NotImplementedError) as e:
            raise ParseFailedException(
                "Invalid extraction selector", {"selector": rule, "error": str(e)}
            ) from e

        if not matches:
            logger.debug(f"[PARSER] Selector '{rule}' matched nothing")

        return "".join(el.get_text() for el in matches)
