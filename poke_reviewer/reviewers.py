"""Find reviewer email addresses mentioned in a PR description."""

import re
from typing import List


def reviewer_email_pattern(domain: str) -> re.Pattern[str]:
    """Regex matching local-part@domain addresses for the organization domain."""
    return re.compile(rf"[a-zA-Z0-9._-]+@{re.escape(domain)}")


def extract_reviewer_emails(body: str | None, domain: str) -> List[str]:
    """Return every organization email in body, in order of appearance.

    Duplicates are kept.
    """
    if not body:
        return []
    return reviewer_email_pattern(domain).findall(body)
