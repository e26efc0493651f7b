"""
Blog post composer.

Orchestrates block-store mutations for one editing session and turns the
session into the payload handed to post persistence on publish.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from .block_store import BlockStore
from .blocks import Block
from .canvas import CanvasController, Interaction
from .invariants.post import assert_blog_post
from .posts import DEFAULT_TRIP_TYPE, BlogPost, blog_payload


METADATA_FIELDS = ("title", "country", "duration", "trip_type", "hashtags")


class PostComposer:
    def __init__(
        self,
        *,
        title: str = "",
        country: str = "",
        duration: str = "",
        trip_type: str = DEFAULT_TRIP_TYPE,
        hashtags: str = "",
        store: Optional[BlockStore] = None,
        interaction: Optional[Interaction] = None,
        pending_image: Optional[str] = None,
    ):
        self.title = title
        self.country = country
        self.duration = duration
        self.trip_type = trip_type
        self.hashtags = hashtags
        self.store = store or BlockStore()
        self.canvas = CanvasController(self.store, interaction)
        self.pending_image = pending_image

    # ------------------------
    # Metadata
    # ------------------------

    def set_metadata(self, **fields) -> list:
        changed = []
        for name in METADATA_FIELDS:
            if name in fields and fields[name] is not None and getattr(self, name) != fields[name]:
                setattr(self, name, fields[name])
                changed.append(name)
        return changed

    # ------------------------
    # Blocks
    # ------------------------

    def add_block(self, block_type: str, subtype: Optional[str] = None) -> Block:
        return self.store.add_block(block_type, subtype=subtype)

    def delete_block(self, block_id) -> Optional[Block]:
        return self.canvas.delete_block(block_id)

    def attach_image(self, block_id, url: str) -> Optional[Block]:
        return self.store.update_setting(block_id, "url", url)

    def stage_image(self, url: str) -> None:
        """Hold an uploaded image for preview before it becomes a block."""
        self.pending_image = url

    def commit_pending_image(self) -> Optional[Block]:
        if not self.pending_image:
            return None

        block = self.store.add_block("image")
        self.store.update_setting(block.id, "url", self.pending_image)
        self.pending_image = None
        return block

    def discard_pending_image(self) -> None:
        self.pending_image = None

    # ------------------------
    # Publish
    # ------------------------

    def to_post(self) -> BlogPost:
        return BlogPost(
            title=self.title,
            blocks=list(self.store.blocks),
            country=self.country,
            duration=self.duration,
            trip_type=self.trip_type,
            hashtags=self.hashtags,
        )

    def build_payload(self) -> Dict[str, Any]:
        post = self.to_post()
        assert_blog_post(post)
        return blog_payload(post)

    def publish(self, persist: Callable[[Dict[str, Any]], Any]):
        """Validate, build the payload and hand it to ``persist``.

        Nothing reaches ``persist`` unless validation passes.
        """
        payload = self.build_payload()
        return persist(payload)

    # ------------------------
    # Snapshots
    # ------------------------

    def to_snapshot(self) -> Dict[str, Any]:
        interaction = self.canvas.interaction
        return {
            "title": self.title,
            "country": self.country,
            "duration": self.duration,
            "trip_type": self.trip_type,
            "hashtags": self.hashtags,
            "blocks": self.store.to_list(),
            "selected_id": self.store.selected_id,
            "interaction": interaction.to_dict() if interaction else None,
            "pending_image": self.pending_image,
        }

    @classmethod
    def from_snapshot(cls, snapshot: Optional[Dict[str, Any]]) -> "PostComposer":
        snapshot = snapshot or {}
        store = BlockStore.from_list(
            snapshot.get("blocks"),
            selected_id=snapshot.get("selected_id"),
        )
        return cls(
            title=snapshot.get("title", ""),
            country=snapshot.get("country", ""),
            duration=snapshot.get("duration", ""),
            trip_type=snapshot.get("trip_type", DEFAULT_TRIP_TYPE),
            hashtags=snapshot.get("hashtags", ""),
            store=store,
            interaction=Interaction.from_dict(snapshot.get("interaction")),
            pending_image=snapshot.get("pending_image"),
        )
