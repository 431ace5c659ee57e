"""
Template personalization.

Replaces the placeholder tokens ``{{name}}``, ``{{company}}``, ``{{title}}``
and ``{{industry}}`` with lead attributes. Replacement is global and
literal: no nesting, no conditionals, no escaping. Tokens outside that
vocabulary are left as written.
"""
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

# Stable vocabulary; templates stored by users depend on these names
PLACEHOLDER_FIELDS = ("name", "company", "title", "industry")

VARIABLE_PATTERN = re.compile(r"\{\{(\w+)\}\}")

# Used by template previews when no lead is selected
SAMPLE_LEAD = {
    "name": "John Smith",
    "company": "TechCorp Inc",
    "title": "VP of Marketing",
    "industry": "SaaS",
}


@dataclass(frozen=True)
class RenderedMessage:
    subject: Optional[str]
    content: str


def _lead_value(lead: Any, field: str) -> str:
    """Read a field from a mapping or an object, '' when absent."""
    if lead is None:
        return ""
    if isinstance(lead, Mapping):
        value = lead.get(field)
    else:
        value = getattr(lead, field, None)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def substitute(template: Optional[str], lead: Any) -> str:
    """
    Replace every placeholder token in ``template`` with the lead's value.

    ``lead`` may be a dict, a Pydantic/SQLModel object or None. A None
    template renders as an empty string.
    """
    if not template:
        return ""
    if not isinstance(template, str):
        template = str(template)

    def replace(match: "re.Match") -> str:
        field = match.group(1)
        if field not in PLACEHOLDER_FIELDS:
            return match.group(0)
        return _lead_value(lead, field)

    # Single pass, so values that themselves contain tokens are not expanded
    return VARIABLE_PATTERN.sub(replace, template)


def render(
    subject_template: Optional[str],
    content_template: Optional[str],
    lead: Any
) -> RenderedMessage:
    """Personalize subject (when present) and content independently."""
    subject = substitute(subject_template, lead) if subject_template else None
    return RenderedMessage(subject=subject, content=substitute(content_template, lead))


def extract_variables(*texts: Optional[str]) -> List[str]:
    """Extract {{variable}} names from one or more template strings."""
    found = set()
    for text in texts:
        if text:
            found.update(VARIABLE_PATTERN.findall(text))
    return sorted(found)


def unknown_variables(*texts: Optional[str]) -> List[str]:
    """Variables that substitution will leave untouched."""
    return [v for v in extract_variables(*texts) if v not in PLACEHOLDER_FIELDS]
