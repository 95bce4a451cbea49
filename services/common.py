from typing import List, Dict, Any, Iterable, Optional
from datetime import datetime
from streamlit_searchbox import st_searchbox


def missing_fields(data: Dict[str, Any], required: Iterable[str]) -> List[str]:
    """
    Returns the names of required fields that are absent or blank in data.
    Only presence is checked; formats are not validated.
    """
    missing = []
    for name in required:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing


def filter_hr_entries(entries: List[Dict[str, Any]], search_term: str) -> List[Dict[str, Any]]:
    """
    Filters HR entries by company name or HR name (case-insensitive)
    or by HR contact (plain substring, so phone numbers match as typed).
    An empty search term returns every entry.
    """
    term = search_term.lower()
    return [
        e for e in entries
        if term in (e.get("company_name") or "").lower()
        or term in (e.get("hr_name") or "").lower()
        or search_term in (e.get("hr_contact") or "")
    ]


def _matches_any(row: Dict[str, Any], fields: Iterable[str], search_term: str) -> bool:
    term = search_term.lower()
    return any(term in str(row.get(f) or "").lower() for f in fields)


def filter_questions(questions: List[Dict[str, Any]], search_term: str) -> List[Dict[str, Any]]:
    return [q for q in questions if _matches_any(q, ("text", "topic", "asked_by"), search_term)]


def filter_jobs(jobs: List[Dict[str, Any]], search_term: str) -> List[Dict[str, Any]]:
    return [j for j in jobs if _matches_any(j, ("company_name", "da_name", "phone_number"), search_term)]


def format_created_at(value: Optional[str]) -> str:
    """
    Formats an ISO timestamp as a date ('2025-03-01'); unparseable values are returned as-is.
    """
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value


def create_searchbox(
    label: str,
    placeholder: str,
    key: str,
    data: list,
    display_fn=lambda x: str(x),
    return_fn=lambda x: x,
) -> str:
    """
    Creates a Streamlit searchbox for selecting an item from data.

    :param label: Label for the searchbox
    :param placeholder: Placeholder text
    :param key: Unique key for Streamlit widget
    :param data: List of items (dicts, tuples or single values)
    :param display_fn: Function to format display text (default: str)
    :param return_fn: Function to extract return value (default: identity)
    :return: Selected value based on return_fn
    """
    # Build options dictionary dynamically
    options = {display_fn(item): return_fn(item) for item in data}

    # Search function
    def search_items(search_term: str):
        if not search_term:
            return list(options)
        return [item for item in options if search_term.lower() in item.lower()]

    # Render searchbox
    selected = st_searchbox(
        search_items,
        placeholder=placeholder,
        label=label,
        key=key,
    )
    return options.get(selected)
