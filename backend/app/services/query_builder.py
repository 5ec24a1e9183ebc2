"""
Scheme Search Agent — Query Builder
Turns loosely structured search criteria into the natural-language
query typed into the MyScheme search box.
"""

import re
from decimal import Decimal
from typing import Optional

from app.models.scheme import SchemeSearchRequest


def _present(value) -> bool:
    """Missing, blank and zero values count as absent."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def format_income(income: float) -> str:
    """Render income the way a person would type it: 50000, 1250.5, 0.0000001."""
    if isinstance(income, float) and income.is_integer():
        return str(int(income))
    return format(Decimal(repr(income)), "f")


def has_search_criteria(criteria: SchemeSearchRequest) -> bool:
    """True when at least one usable field is set."""
    user = criteria.user
    if _present(criteria.category):
        return True
    if user is None:
        return False
    return any(_present(v) for v in (user.profession, user.state, user.income))


def build_search_query(criteria: SchemeSearchRequest) -> Optional[str]:
    """
    Build the search text from criteria.

    Clauses are appended in a fixed order (category, profession, state, income),
    each only when its field is present. Returns None when nothing is present
    so the caller can reject the request instead of searching for "".
    """
    if not has_search_criteria(criteria):
        return None

    user = criteria.user
    parts = []

    if _present(criteria.category):
        parts.append(f"schemes related to {criteria.category.lower()}")
    if user is not None:
        if _present(user.profession):
            parts.append(f"for {user.profession.lower()} professionals")
        if _present(user.state):
            parts.append(f"in {user.state}")
        if _present(user.income):
            parts.append(f"with income under {format_income(user.income)}")

    query = re.sub(r"\s+", " ", " ".join(parts)).strip()
    return query[:1].upper() + query[1:]
