"""Ordering, searching and app filtering over template lists."""

from __future__ import annotations

from collections.abc import Iterable

from promptist.models.app_target import PromptAppFilter
from promptist.models.template import PromptTemplate


def sort_templates(templates: Iterable[PromptTemplate]) -> list[PromptTemplate]:
    """Sort by ``sort_order``; ties keep their insertion order."""
    return sorted(templates, key=lambda t: t.sort_order)


def sort_templates_for_display(
    templates: Iterable[PromptTemplate],
) -> list[PromptTemplate]:
    """Sort by ``sort_order``, then case-insensitive title."""
    return sorted(templates, key=lambda t: (t.sort_order, t.title.casefold()))


def matches_search(template: PromptTemplate, term: str) -> bool:
    """Case-insensitive substring match over title, content and tags."""
    needle = term.strip().lower()
    if not needle:
        return True
    return (
        needle in template.title.lower()
        or needle in template.content.lower()
        or any(needle in tag.lower() for tag in template.tags)
    )


def search_templates(
    templates: Iterable[PromptTemplate], term: str
) -> list[PromptTemplate]:
    """Templates matching the search term; a blank term matches everything."""
    return [t for t in templates if matches_search(t, term)]


def filter_by_app(
    templates: Iterable[PromptTemplate],
    app_filter: PromptAppFilter | None,
    *,
    include_unlinked: bool = False,
) -> list[PromptTemplate]:
    """Templates linked to the filtered app.

    Args:
        templates: Templates to filter.
        app_filter: The app to match; None returns every template.
        include_unlinked: Also keep templates with no linked apps.
    """
    if app_filter is None:
        return list(templates)
    return [
        t
        for t in templates
        if t.is_linked_to(app_filter) or (include_unlinked and not t.linked_apps)
    ]


def fuzzy_match(query: str, text: str) -> bool:
    """Check whether query's characters appear in text in order.

    ``"fb"`` matches ``"foobar"``. An empty query never matches.
    """
    if not query:
        return False
    remaining = iter(text)
    return all(char in remaining for char in query)
