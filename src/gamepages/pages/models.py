"""
Data models for game pages.

Contains the value types passed between the pipeline stages. Each model is
intentionally lightweight and immutable: no stream, file or rendering logic.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import orjson


# =============================================================================
# Game Objects
# =============================================================================

@dataclass(frozen=True)
class GameObject:
    """An item or fact the player holds, or that a page requires.

    Two objects are equal only when both name and value match exactly
    (case-sensitive).
    """
    name: str
    value: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameObject":
        """Create GameObject from a decoded mapping.

        Missing keys become empty strings.
        """
        return cls(
            name=_scalar_to_str(data.get("name")),
            value=_scalar_to_str(data.get("value")),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "value": self.value}

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


def _scalar_to_str(value: Any) -> str:
    """Convert a decoded scalar to its string form (None becomes empty)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# =============================================================================
# Page Models
# =============================================================================

@dataclass(frozen=True)
class PageMetadata:
    """Metadata decoded from a page front matter block.

    Attributes:
        icon: Display hint for the page icon (e.g. "fa-key")
        title: Page title
        editor: True if the page enables the editing affordance
        required: Lock conditions, checked in order
        discovered: Objects granted to the player when the page is viewed
    """
    icon: str = ""
    title: str = ""
    editor: bool = False
    required: Tuple[GameObject, ...] = ()
    discovered: Tuple[GameObject, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain mapping in front matter field order."""
        return {
            "icon": self.icon,
            "title": self.title,
            "editor": self.editor,
            "required": [obj.to_dict() for obj in self.required],
            "discovered": [obj.to_dict() for obj in self.discovered],
        }


@dataclass(frozen=True)
class RenderContext:
    """Per-request values bound into a page body before markdown conversion."""
    player_name: str = ""
    locked: bool = False

    def template_vars(self) -> Dict[str, Any]:
        """Variables visible to the body template."""
        return {"Name": self.player_name, "Locked": self.locked}


@dataclass(frozen=True)
class PageView:
    """Everything a caller needs to display a page.

    Field names follow the JSON payload served to the game client.
    """
    title: str
    icon: str
    text: str
    editor: bool = False
    objects: Tuple[GameObject, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        objects: List[Dict[str, str]] = [obj.to_dict() for obj in self.objects]
        return {
            "title": self.title,
            "icon": self.icon,
            "text": self.text,
            "editor": self.editor,
            "objects": objects,
        }

    def to_json(self) -> bytes:
        """Serialize the view with orjson."""
        return orjson.dumps(self.to_dict())
