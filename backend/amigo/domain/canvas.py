"""
Pointer interactions on the free-form canvas.

At most one interaction (drag, resize or rotate) is in progress. The control
the pointer went down on picks the mode; pointer-up always ends it.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .block_store import BlockStore


CONTROL_MODES = {
    "body": "drag",
    "resize-handle": "resize",
    "rotate-handle": "rotate",
}


@dataclass
class Interaction:
    mode: str
    block_id: str
    last_x: float
    last_y: float
    start_x: float
    start_y: float
    start_width: float
    start_height: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Interaction"]:
        if not data:
            return None
        return cls(**data)


class CanvasController:
    def __init__(self, store: BlockStore, interaction: Optional[Interaction] = None):
        self.store = store
        self.interaction = interaction

    @property
    def active(self) -> bool:
        return self.interaction is not None

    def pointer_down(self, block_id, control: str, x: float, y: float) -> Optional[Interaction]:
        mode = CONTROL_MODES.get(control)
        block = self.store.select(block_id)
        if mode is None or block is None:
            self.interaction = None
            return None

        # A fresh pointer-down replaces any interaction that never saw its pointer-up.
        self.interaction = Interaction(
            mode=mode,
            block_id=block.id,
            last_x=x,
            last_y=y,
            start_x=x,
            start_y=y,
            start_width=block.width,
            start_height=block.height,
        )
        return self.interaction

    def pointer_move(self, x: float, y: float):
        interaction = self.interaction
        if interaction is None:
            return None

        block = self.store.get(interaction.block_id)
        if block is None:
            # target deleted mid-gesture
            self.interaction = None
            return None

        if interaction.mode == "drag":
            self.store.move(block.id, x - interaction.last_x, y - interaction.last_y)
        elif interaction.mode == "resize":
            self.store.resize(
                block.id,
                interaction.start_width + (x - interaction.start_x),
                interaction.start_height + (y - interaction.start_y),
            )
        elif interaction.mode == "rotate":
            self.store.rotate_towards(block.id, x, y)

        interaction.last_x = x
        interaction.last_y = y
        return block

    def pointer_up(self) -> None:
        self.interaction = None

    def delete_block(self, block_id):
        block = self.store.delete_block(block_id)
        if block is not None and self.interaction and self.interaction.block_id == block_id:
            self.interaction = None
        return block
