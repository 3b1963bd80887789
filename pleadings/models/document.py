"""
Document tree model - the canonical representation of filing content.

The tree is a tagged union of pydantic models discriminated on ``type``.
Tags follow the editor JSON the authoring surface stores, so
``to_dict`` / ``load_tree`` round-trip that JSON without translation.

Block kinds:  doc, paragraph, heading, codeBlock, orderedList, bulletList,
              listItem, horizontalRule
Inline kinds: text, dateNode, dropdownField

Containers own their children exclusively; nodes hold no parent
references. ``validate_tree`` enforces the single-parent rule for trees
assembled in code.
"""

from datetime import date, datetime
from typing import Annotated, Any, Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from pleadings.core.errors import TreeStructureError, UnknownNodeKindError


TextAlign = Literal["left", "center", "right", "justify"]
MarkKind = Literal["bold", "italic", "underline", "textStyle"]

BODY_FONT = "'Times New Roman', Times, serif"


class _Model(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


# =============================================================================
# Marks
# =============================================================================

class Mark(_Model):
    """Inline formatting. ``textStyle`` carries ``{"fontFamily": ...}``."""
    type: MarkKind
    attrs: Optional[dict[str, Any]] = None


def normalize_marks(marks: list[Mark]) -> list[Mark]:
    """Collapse marks of the same kind; the first occurrence wins."""
    seen: set[str] = set()
    result: list[Mark] = []
    for mark in marks:
        if mark.type in seen:
            continue
        seen.add(mark.type)
        result.append(mark)
    return result


# =============================================================================
# Inline nodes
# =============================================================================

class TextRun(_Model):
    type: Literal["text"] = "text"
    text: str
    marks: list[Mark] = Field(default_factory=list)

    @field_validator("marks")
    @classmethod
    def _collapse_marks(cls, marks: list[Mark]) -> list[Mark]:
        return normalize_marks(marks)

    def has_mark(self, kind: str) -> bool:
        return any(m.type == kind for m in self.marks)

    @property
    def font_family(self) -> Optional[str]:
        for mark in self.marks:
            if mark.type == "textStyle" and mark.attrs:
                return mark.attrs.get("fontFamily")
        return None


class DateAttrs(_Model):
    date: str  # ISO 8601 timestamp, never a display string
    format: Literal["long", "short"] = "long"

    @field_validator("date")
    @classmethod
    def _check_iso(cls, value: str) -> str:
        datetime.fromisoformat(value)
        return value

    @property
    def value(self) -> datetime:
        return datetime.fromisoformat(self.date)


class DateField(_Model):
    """Atomic date, formatted only when rendered."""
    type: Literal["dateNode"] = "dateNode"
    attrs: DateAttrs


class ChoiceAttrs(_Model):
    field_type: str
    label: str = ""
    selected_value: str = ""


class ChoiceField(_Model):
    """Atomic placeholder resolved against an external option set."""
    type: Literal["dropdownField"] = "dropdownField"
    attrs: ChoiceAttrs


Inline = Annotated[Union[TextRun, DateField, ChoiceField], Field(discriminator="type")]


# =============================================================================
# Block nodes
# =============================================================================

class ParagraphAttrs(_Model):
    text_align: Optional[TextAlign] = None


class Paragraph(_Model):
    type: Literal["paragraph"] = "paragraph"
    attrs: ParagraphAttrs = Field(default_factory=ParagraphAttrs)
    content: list[Inline] = Field(default_factory=list)


class HeadingAttrs(_Model):
    level: int = Field(1, ge=1, le=3)
    text_align: Optional[TextAlign] = None


class Heading(_Model):
    type: Literal["heading"] = "heading"
    attrs: HeadingAttrs = Field(default_factory=HeadingAttrs)
    content: list[Inline] = Field(default_factory=list)


class CodeBlock(_Model):
    """Monospaced, whitespace-preserving block; holds the rendered caption."""
    type: Literal["codeBlock"] = "codeBlock"
    content: list[TextRun] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.content)


class HorizontalRule(_Model):
    type: Literal["horizontalRule"] = "horizontalRule"


class ListItem(_Model):
    type: Literal["listItem"] = "listItem"
    content: list["Block"] = Field(default_factory=list)


class OrderedListAttrs(_Model):
    start: int = Field(1, ge=0)


class OrderedList(_Model):
    type: Literal["orderedList"] = "orderedList"
    attrs: OrderedListAttrs = Field(default_factory=OrderedListAttrs)
    content: list[ListItem] = Field(default_factory=list)


class BulletList(_Model):
    type: Literal["bulletList"] = "bulletList"
    content: list[ListItem] = Field(default_factory=list)


Block = Annotated[
    Union[Paragraph, Heading, CodeBlock, OrderedList, BulletList, HorizontalRule],
    Field(discriminator="type"),
]

ListItem.model_rebuild()
OrderedList.model_rebuild()
BulletList.model_rebuild()


class Document(_Model):
    type: Literal["doc"] = "doc"
    content: list[Block] = Field(default_factory=list)


Node = Union[
    Document, Paragraph, Heading, CodeBlock, OrderedList, BulletList, ListItem,
    HorizontalRule, TextRun, DateField, ChoiceField,
]

INLINE_KINDS = frozenset({"text", "dateNode", "dropdownField"})
BLOCK_KINDS = frozenset({
    "paragraph", "heading", "codeBlock", "orderedList", "bulletList", "horizontalRule",
})

# Child kinds each container accepts
_ALLOWED_CHILDREN: dict[str, frozenset[str]] = {
    "doc": BLOCK_KINDS,
    "listItem": BLOCK_KINDS,
    "paragraph": INLINE_KINDS,
    "heading": INLINE_KINDS,
    "codeBlock": frozenset({"text"}),
    "orderedList": frozenset({"listItem"}),
    "bulletList": frozenset({"listItem"}),
}


# =============================================================================
# Constructors
# =============================================================================

def bold() -> Mark:
    return Mark(type="bold")


def italic() -> Mark:
    return Mark(type="italic")


def underline() -> Mark:
    return Mark(type="underline")


def font(family: str = BODY_FONT) -> Mark:
    return Mark(type="textStyle", attrs={"fontFamily": family})


def text(value: str, *marks: Mark) -> TextRun:
    return TextRun(text=value, marks=list(marks))


def _inline(items: tuple) -> list:
    return [text(item) if isinstance(item, str) else item for item in items]


def paragraph(*content: Union[str, TextRun, DateField, ChoiceField], align: Optional[str] = None) -> Paragraph:
    return Paragraph(attrs=ParagraphAttrs(text_align=align), content=_inline(content))


def heading(*content: Union[str, TextRun, DateField, ChoiceField], level: int = 1, align: Optional[str] = None) -> Heading:
    return Heading(attrs=HeadingAttrs(level=level, text_align=align), content=_inline(content))


def code_block(lines: Union[str, list[str]]) -> CodeBlock:
    value = lines if isinstance(lines, str) else "\n".join(lines)
    return CodeBlock(content=[text(value)] if value else [])


def horizontal_rule() -> HorizontalRule:
    return HorizontalRule()


def list_item(*blocks) -> ListItem:
    return ListItem(content=[paragraph(b) if isinstance(b, str) else b for b in blocks])


def _items(items: tuple) -> list[ListItem]:
    return [i if isinstance(i, ListItem) else list_item(i) for i in items]


def ordered_list(*items, start: int = 1) -> OrderedList:
    return OrderedList(attrs=OrderedListAttrs(start=start), content=_items(items))


def bullet_list(*items) -> BulletList:
    return BulletList(content=_items(items))


def date_field(value: Union[str, date, datetime], fmt: str = "long") -> DateField:
    if isinstance(value, datetime):
        iso = value.isoformat()
    elif isinstance(value, date):
        iso = datetime(value.year, value.month, value.day).isoformat()
    else:
        iso = value
    return DateField(attrs=DateAttrs(date=iso, format=fmt))


def choice_field(field_type: str, label: str, selected_value: str = "") -> ChoiceField:
    return ChoiceField(attrs=ChoiceAttrs(
        field_type=field_type, label=label, selected_value=selected_value,
    ))


def document(*blocks) -> Document:
    return Document(content=list(blocks))


# =============================================================================
# Traversal & validation
# =============================================================================

def children(node: Node, path: str = "doc") -> list:
    """Direct children of ``node``; leaves return an empty list."""
    match node:
        case Document() | ListItem() | OrderedList() | BulletList():
            return list(node.content)
        case Paragraph() | Heading() | CodeBlock():
            return list(node.content)
        case TextRun() | DateField() | ChoiceField() | HorizontalRule():
            return []
        case _:
            raise UnknownNodeKindError(getattr(node, "type", type(node).__name__), path)


def walk(node: Node, path: str = "doc") -> Iterator[tuple[str, Node]]:
    """Depth-first pre-order traversal yielding ``(path, node)``."""
    yield path, node
    for index, child in enumerate(children(node, path)):
        yield from walk(child, f"{path}.content[{index}]")


def validate_tree(root: Node) -> None:
    """
    Check that every node has exactly one parent.

    A node object reachable twice (shared subtree or cycle) raises
    ``TreeStructureError`` before the traversal can loop.
    """
    seen: set[int] = {id(root)}
    stack: list[tuple[str, Node]] = [("doc", root)]
    while stack:
        path, node = stack.pop()
        for index, child in enumerate(children(node, path)):
            child_path = f"{path}.content[{index}]"
            if id(child) in seen:
                raise TreeStructureError("Node has more than one parent", child_path)
            seen.add(id(child))
            stack.append((child_path, child))


# =============================================================================
# Serialization
# =============================================================================

def to_dict(node: Node) -> dict[str, Any]:
    """Plain nested-dict form, independent of any renderer."""
    return node.model_dump(mode="json", by_alias=True, exclude_none=True)


def _check_kinds(data: Any, path: str, parent_kind: str) -> None:
    allowed = _ALLOWED_CHILDREN.get(parent_kind)
    content = data.get("content") if isinstance(data, dict) else None
    if allowed is None or not isinstance(content, list):
        return
    for index, child in enumerate(content):
        child_path = f"{path}.content[{index}]"
        kind = child.get("type") if isinstance(child, dict) else type(child).__name__
        if kind not in allowed:
            raise UnknownNodeKindError(kind, child_path, context=parent_kind)
        _check_kinds(child, child_path, kind)


def load_tree(data: Union[dict[str, Any], Document]) -> Document:
    """
    Load a document tree from its plain-dict form.

    Unknown or misplaced node kinds raise ``UnknownNodeKindError`` naming
    the kind and its path; malformed attributes raise pydantic's
    ``ValidationError``.
    """
    if isinstance(data, Document):
        return data
    kind = data.get("type") if isinstance(data, dict) else type(data).__name__
    if kind != "doc":
        raise UnknownNodeKindError(kind, "doc", context="document root")
    _check_kinds(data, "doc", "doc")
    return Document.model_validate(data)
