"""Extract the branch name from build release notes.

Release notes arrive as an HTML fragment; the branch is the text of the
first paragraph, e.g. ``<p>feature/login-fix</p><p>Fixes login</p>``.
"""

from html.parser import HTMLParser
from typing import List


class BranchExtractionError(Exception):
    """Raised when release notes cannot be parsed as markup."""

    pass


class _FirstParagraphParser(HTMLParser):
    """Collects text of the first <p> element; stops at its end (or the next <p>)."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.parts: List[str] = []
        self._inside = False
        self.done = False

    def handle_starttag(self, tag: str, attrs: list) -> None:
        if self.done or tag != "p":
            return
        if self._inside:
            # <p> cannot nest: a new one implicitly closes the first
            self._inside = False
            self.done = True
            return
        self._inside = True

    def handle_endtag(self, tag: str) -> None:
        if tag == "p" and self._inside:
            self._inside = False
            self.done = True

    def handle_data(self, data: str) -> None:
        if self._inside and not self.done:
            self.parts.append(data)


def extract_branch(notes: str) -> str:
    """Return the text of the first paragraph of notes, stripped.

    Empty notes or notes without a paragraph yield "". HTMLParser recovers
    from malformed markup (unclosed tags, stray "<") instead of failing, so
    BranchExtractionError is raised only when the parser itself raises.
    """
    if not notes:
        return ""
    parser = _FirstParagraphParser()
    try:
        parser.feed(notes)
        parser.close()
    except (AssertionError, ValueError, TypeError) as e:
        raise BranchExtractionError(f"cannot parse release notes: {e}") from e
    return "".join(parser.parts).strip()
