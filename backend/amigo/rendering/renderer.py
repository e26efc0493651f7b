"""
Post renderer.

Maps a stored post to an ordered list of display nodes. Every node is a
plain dict with a ``node`` kind and a ``style`` computed from the theme
passed in; nothing is read from ambient state.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from amigo.domain.blocks import Block
from amigo.domain.posts import BlogPost, PlainPost, post_from_record, split_hashtags
from .theme import LIGHT, Theme


logger = logging.getLogger(__name__)

Node = Dict[str, Any]
UrlOptimizer = Callable[[str], str]

TRIP_TYPE_STYLES = {
    "Luxury": {"icon": "✨", "background": "#fff5e6", "border_color": "#ffa726", "color": "#e65100"},
    "Adventure": {"icon": "🏔️", "background": "#e8f5e9", "border_color": "#66bb6a", "color": "#2e7d32"},
    "Casual": {"icon": "🌴", "background": "#e3f2fd", "border_color": "#42a5f5", "color": "#1565c0"},
    "Wellness": {"icon": "🧘", "background": "#f3e5f5", "border_color": "#ab47bc", "color": "#6a1b9a"},
    "Eco": {"icon": "🌿", "background": "#e0f2f1", "border_color": "#26a69a", "color": "#00695c"},
}
DEFAULT_TRIP_ICON = "🌍"

ASPECT_RATIOS = {"square": "1/1", "4:3": "4/3"}


def image_style(settings: Dict[str, Any]) -> Dict[str, str]:
    shape = settings.get("shape", "square")
    polaroid = shape == "polaroid"

    if settings.get("rounded"):
        radius = "16px"
    elif polaroid:
        radius = "8px"
    else:
        radius = "0"

    style = {
        "aspect_ratio": ASPECT_RATIOS.get(shape, "16/9"),
        "border_radius": radius,
        "padding": "12px 12px 40px 12px" if polaroid else "0",
        "background_color": "white" if polaroid else "transparent",
        "box_shadow": "0 4px 12px rgba(0,0,0,0.15)" if polaroid else "none",
        "object_fit": "cover",
    }
    if settings.get("darken"):
        style["filter"] = "brightness(0.7)"
    return style


def _non_blank(items) -> List[str]:
    return [item for item in items or [] if isinstance(item, str) and item.strip()]


def _chip_style(theme: Theme) -> Dict[str, str]:
    return {
        "background": theme.colors["background"],
        "border": f"1.5px solid {theme.colors['border']}",
        "color": theme.colors["text"],
    }


def metadata_chips(post: BlogPost, theme: Theme) -> List[Node]:
    chips = []
    if post.country:
        chips.append({"node": "chip", "text": f"📍 {post.country}", "style": _chip_style(theme)})
    if post.duration:
        chips.append({"node": "chip", "text": f"⏱️ {post.duration}", "style": _chip_style(theme)})
    if post.trip_type:
        trip = TRIP_TYPE_STYLES.get(post.trip_type)
        style = _chip_style(theme)
        if trip:
            style.update(
                background=trip["background"],
                border=f"1.5px solid {trip['border_color']}",
                color=trip["color"],
            )
        icon = trip["icon"] if trip else DEFAULT_TRIP_ICON
        chips.append({"node": "chip", "text": f"{icon} {post.trip_type}", "style": style})
    return chips


def render_block(block: Block, theme: Theme, optimize_url: Optional[UrlOptimizer] = None) -> Optional[Node]:
    colors = theme.colors

    if block.type == "text":
        return {
            "node": "paragraph",
            "id": block.id,
            "text": block.content,
            "subtype": block.subtype or "body",
            "style": {"color": colors["text"], "white_space": "pre-wrap"},
        }

    if block.type == "image":
        url = block.image_url
        if url and optimize_url is not None:
            url = optimize_url(url)
        return {
            "node": "image",
            "id": block.id,
            "src": url,
            "original_src": block.image_url,
            "alt": block.settings.get("alt") or "Post content",
            "style": image_style(block.settings),
        }

    if block.type == "divider":
        return {"node": "rule", "id": block.id, "style": {"border_top": f"2px solid {colors['border']}"}}

    if block.type == "list":
        return {
            "node": "bullet_list",
            "id": block.id,
            "items": _non_blank(block.settings.get("items")),
            "style": {"color": colors["text"], "bullet_color": colors["pink"]},
        }

    if block.type == "checklist":
        return {
            "node": "checklist",
            "id": block.id,
            "items": [
                {"label": item, "checked": False, "disabled": True}
                for item in _non_blank(block.settings.get("items"))
            ],
            "style": {"color": colors["text"]},
        }

    if block.type == "map":
        return {
            "node": "map",
            "id": block.id,
            "icon": "📍",
            "label": block.content,
            "style": {
                "background": colors["pink_light"],
                "border": f"1.5px solid {colors['pink']}",
                "color": colors["navy"],
            },
        }

    return None


def render_post(post, theme: Theme = LIGHT, optimize_url: Optional[UrlOptimizer] = None) -> List[Node]:
    """
    Render a post (variant or stored record) to display nodes.

    Unknown block types produce no node. ``optimize_url`` maps a stored image
    URL to a bandwidth-friendly variant and must fall back to its input.
    """
    if isinstance(post, dict):
        post = post_from_record(post)

    colors = theme.colors

    if isinstance(post, PlainPost):
        return [{"node": "text", "text": post.content, "style": {"color": colors["text"]}}]

    nodes: List[Node] = [
        {"node": "heading", "text": post.title, "style": {"color": colors["text"]}}
    ]

    chips = metadata_chips(post, theme)
    if chips:
        nodes.append({"node": "chip_row", "children": chips})

    for block in post.blocks:
        node = render_block(block, theme, optimize_url)
        if node is not None:
            nodes.append(node)

    tags = split_hashtags(post.hashtags)
    if tags:
        nodes.append({
            "node": "tag_row",
            "children": [
                {"node": "tag", "text": tag, "style": {"color": colors["pink"]}}
                for tag in tags
            ],
        })

    return nodes


def safe_url_optimizer(storage, transform: Dict[str, Any]) -> UrlOptimizer:
    """Build an optimizer that asks storage for a transformed URL."""

    def optimize(url: str) -> str:
        try:
            path = storage.path_from_url(url)
            if path is None:
                return url
            return storage.get_public_url(path, transform=transform)
        except Exception:
            logger.exception("Image transform failed for %s, using original", url)
            return url

    return optimize


def collect_text(nodes: List[Node]) -> List[str]:
    """Flatten visible text from rendered nodes (chips, tags, paragraphs)."""
    texts: List[str] = []
    for node in nodes:
        if "text" in node:
            texts.append(node["text"])
        for child in node.get("children", []):
            texts.append(child["text"])
    return texts
