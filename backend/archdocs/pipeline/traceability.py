"""
Requirement traceability heuristic.

A requirement is associated with an element when one of the element's
keywords (responsibilities for containers, capabilities for components)
and the requirement's title or description contain one another,
case-insensitively. Loose on purpose: a missed link costs more than a
spurious one.
"""

from typing import Iterable, List, Sequence

from archdocs.ir.requirement import Requirement


def requirement_matches(requirement: Requirement, keyword: str) -> bool:
    k = keyword.strip().lower()
    if not k:
        return False

    for text in (requirement.title.lower(), requirement.description.lower()):
        if k in text:
            return True
        # "" would be contained in every keyword
        if text.strip() and text in k:
            return True
    return False


def trace_requirements(
    requirements: Sequence[Requirement], keywords: Iterable[str]
) -> List[str]:
    """Ids of every requirement matching any keyword, in input order, no duplicates."""
    keywords = list(keywords)
    matched: List[str] = []
    for requirement in requirements:
        if requirement.id in matched:
            continue
        if any(requirement_matches(requirement, k) for k in keywords):
            matched.append(requirement.id)
    return matched


def union_ids(groups: Iterable[Iterable[str]]) -> List[str]:
    seen: List[str] = []
    for group in groups:
        for item in group:
            if item not in seen:
                seen.append(item)
    return seen
