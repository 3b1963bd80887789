"""
Render-time resolution of inline fields, shared by both exporters so the
editable and print outputs never differ in content.
"""

from typing import Mapping, Optional

from pleadings.models.document import ChoiceField, DateField
from pleadings.services.field_options import FieldOptionSet


def format_date(node: DateField) -> str:
    """long: "January 5, 2024"; short: "01/05/2024"."""
    value = node.attrs.value
    if node.attrs.format == "short":
        return value.strftime("%m/%d/%Y")
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def choice_placeholder(label: str) -> str:
    return f"[Select {label}]"


def resolve_choice(
    node: ChoiceField,
    option_sets: Optional[Mapping[str, FieldOptionSet]] = None,
) -> str:
    """Label of the selected option, or the placeholder when unresolved."""
    attrs = node.attrs
    option_set = (option_sets or {}).get(attrs.field_type)
    selected = option_set.label_for(attrs.selected_value) if option_set and attrs.selected_value else None
    return selected or choice_placeholder(attrs.label)


def primary_font_family(family: Optional[str]) -> Optional[str]:
    """First family of a CSS font list: "'Times New Roman', Times, serif" -> "Times New Roman"."""
    if not family:
        return None
    first = family.split(",")[0].strip().strip("'\"")
    return first or None
