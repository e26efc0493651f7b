"""
Typed content blocks that make up a blog post.

A block is a plain dataclass so the editor session can be snapshotted to
JSON and restored without an ORM in between.
"""
from __future__ import annotations

import uuid
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


BLOCK_TYPES = ("text", "image", "divider", "list", "checklist", "map", "calendar")
IMAGE_SHAPES = ("square", "4:3", "16:9", "polaroid")
TEXT_SUBTYPES = ("title", "subtitle", "body")

# Canvas geometry
DEFAULT_X = 100
DEFAULT_Y = 100
TEXT_SIZE = (300, 60)
BLOCK_SIZE = (200, 200)
MIN_WIDTH = 100
MIN_HEIGHT = 50


def default_settings(block_type: str) -> Dict[str, Any]:
    if block_type == "image":
        return {"url": "", "shape": "square", "rounded": False, "darken": False}
    if block_type in ("list", "checklist"):
        return {"items": [""]}
    if block_type == "map":
        return {"country": "", "lat": 0, "lng": 0}
    return {}


def default_size(block_type: str):
    return TEXT_SIZE if block_type == "text" else BLOCK_SIZE


def new_block_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Block:
    type: str
    id: str = field(default_factory=new_block_id)
    content: str = ""
    settings: Dict[str, Any] = field(default_factory=dict)
    x: float = DEFAULT_X
    y: float = DEFAULT_Y
    width: float = BLOCK_SIZE[0]
    height: float = BLOCK_SIZE[1]
    rotation: float = 0
    subtype: Optional[str] = None

    @classmethod
    def create(cls, block_type: str, subtype: Optional[str] = None) -> "Block":
        if block_type not in BLOCK_TYPES:
            raise ValueError(f"Unknown block type: {block_type}")

        if block_type == "text":
            subtype = subtype or "body"
            if subtype not in TEXT_SUBTYPES:
                raise ValueError(f"Unknown text subtype: {subtype}")
        else:
            subtype = None

        width, height = default_size(block_type)
        return cls(
            type=block_type,
            settings=default_settings(block_type),
            width=width,
            height=height,
            subtype=subtype,
        )

    @property
    def center(self):
        return self.x + self.width / 2, self.y + self.height / 2

    @property
    def image_url(self) -> str:
        if self.type != "image":
            return ""
        return self.settings.get("url") or ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "content": self.content,
            "settings": deepcopy(self.settings),
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "rotation": self.rotation,
            "subtype": self.subtype,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Block":
        block_type = data["type"]
        width, height = default_size(block_type)
        settings = data.get("settings")
        if settings is None:
            settings = default_settings(block_type)

        return cls(
            type=block_type,
            id=str(data.get("id") or new_block_id()),
            content=data.get("content") or "",
            settings=deepcopy(settings),
            x=data.get("x", DEFAULT_X),
            y=data.get("y", DEFAULT_Y),
            width=data.get("width", width),
            height=data.get("height", height),
            rotation=data.get("rotation", 0),
            subtype=data.get("subtype"),
        )
