"""
Compound industry strings.

Profiles store "main-sub" industries as one lowercase string where the
sub-industry's words are joined with "-", e.g. "tech-software-development"
for main "tech" and sub "Software Development".
"""
from typing import Optional, Tuple

DELIMITER = "-"


def split_industry(industry: Optional[str]) -> Tuple[Optional[str], str]:
    """Return (main_industry, sub_industry) with the sub part title-cased."""
    if not industry or DELIMITER not in industry:
        return industry, ""

    main, _, rest = industry.partition(DELIMITER)
    words = [w for w in rest.split(DELIMITER) if w]
    sub = " ".join(w[:1].upper() + w[1:] for w in words)
    return main, sub


def join_industry(main: str, sub: Optional[str] = None) -> str:
    """Inverse of split_industry."""
    main = main.strip().lower()
    if not sub or not sub.strip():
        return main
    sub_part = DELIMITER.join(sub.strip().lower().split())
    return f"{main}{DELIMITER}{sub_part}"
