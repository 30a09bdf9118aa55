"""Category filtering of registered checks."""

from typing import Iterable, List, Optional, Sequence

from .models import CheckDescriptor


def filter_checks(checks: Sequence[CheckDescriptor],
                  categories: Optional[Iterable[str]] = None) -> List[CheckDescriptor]:
    """
    Select the checks to run for the requested categories.

    With no categories every check is selected. Otherwise a check is
    selected if it carries at least one requested category; checks with
    no categories are never selected by a filter. Registration order is
    preserved.
    """
    requested = set(categories or ())
    if not requested:
        return list(checks)
    return [check for check in checks if check.matches(requested)]
