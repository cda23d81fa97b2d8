"""
Box tree used for source content and paginated output.

A Box mirrors a DOM node: elements carry a tag, attributes, a computed style
and ordered children; text nodes (tag ``#text``) carry only text. Boxes have
identity semantics so they can key lookup tables, and every clone remembers
the source box it was made from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from .style import ComputedStyle, TEXT_TAG


@dataclass(eq=False)
class Box:
    """Single node of a content tree."""

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Box"] = field(default_factory=list)
    style: Optional[ComputedStyle] = None
    text: Optional[str] = None
    parent: Optional["Box"] = field(default=None, repr=False)
    origin: Optional["Box"] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.style is None:
            self.style = ComputedStyle.for_tag(self.tag)
        for child in self.children:
            child.parent = self

    @classmethod
    def text_node(cls, text: str) -> "Box":
        return cls(tag=TEXT_TAG, text=text)

    @property
    def is_text(self) -> bool:
        return self.tag == TEXT_TAG

    @property
    def source(self) -> "Box":
        """Source box this box was cloned from (itself for source boxes)."""
        return self.origin if self.origin is not None else self

    def has_children(self) -> bool:
        return bool(self.children)

    # ------------------------------------------------------------------
    # Attributes

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(name, default)

    def set(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def has_class(self, name: str) -> bool:
        return name in (self.attributes.get("class") or "").split()

    # ------------------------------------------------------------------
    # Tree mutation

    def append(self, child: "Box") -> "Box":
        """
        Append a child, detaching it from its previous parent.

        Args:
            child: Box to append

        Returns:
            The appended child
        """
        if child.parent is not None:
            child.remove()
        child.parent = self
        self.children.append(child)
        return child

    def extend(self, children: Iterable["Box"]) -> None:
        for child in list(children):
            self.append(child)

    def remove(self) -> None:
        """Detach this box from its parent."""
        if self.parent is None:
            return
        siblings = self.parent.children
        for index, sibling in enumerate(siblings):
            if sibling is self:
                del siblings[index]
                break
        self.parent = None

    def replace_children(self, children: Iterable["Box"]) -> None:
        for child in self.children:
            child.parent = None
        self.children = []
        self.extend(children)

    def clone(self, deep: bool = False) -> "Box":
        """
        Clone this box.

        A shallow clone copies tag, attributes, style and text but no
        children; a deep clone copies the whole subtree.

        Args:
            deep: Whether to clone descendants too

        Returns:
            Detached copy whose ``origin`` points at the source box
        """
        copy = Box(
            tag=self.tag,
            attributes=dict(self.attributes),
            style=self.style.copy(),
            text=self.text,
            origin=self.source,
        )
        if deep:
            for child in self.children:
                copy.append(child.clone(deep=True))
        return copy

    # ------------------------------------------------------------------
    # Navigation

    def previous_siblings(self) -> Iterator["Box"]:
        """Yield preceding siblings, nearest first."""
        if self.parent is None:
            return
        siblings = self.parent.children
        index = next(i for i, sibling in enumerate(siblings) if sibling is self)
        for sibling in reversed(siblings[:index]):
            yield sibling

    def iter(self) -> Iterator["Box"]:
        """Pre-order walk over this box and its descendants."""
        yield self
        for child in self.children:
            yield from child.iter()

    def find_all(self, tag: str, predicate: Optional[Callable[["Box"], bool]] = None) -> List["Box"]:
        """Descendants (excluding self) with the given tag, in document order."""
        return [
            box
            for box in self.iter()
            if box is not self and box.tag == tag and (predicate is None or predicate(box))
        ]

    def leaves(self) -> List["Box"]:
        return [box for box in self.iter() if not box.children and box is not self]

    def inner_text(self) -> str:
        if self.is_text:
            return self.text or ""
        return "".join(child.inner_text() for child in self.children)

    def __repr__(self) -> str:
        if self.is_text:
            return f"Box(#text {self.text!r})"
        return f"Box(<{self.tag}> attrs={self.attributes!r} children={len(self.children)})"
