"""
Ordered, positioned collection of blocks for one in-progress post.

List order is the persisted display order. Canvas geometry (x, y, size,
rotation) is kept on every block; ``reading_order`` recovers a linear order
from it. Mutations addressed to an unknown id are no-ops and return None.
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from .blocks import MIN_HEIGHT, MIN_WIDTH, Block


# The rotate handle sits above the block, so pointer angle 0 must map to 90.
ROTATION_OFFSET = 90


def rotation_towards(block: Block, pointer_x: float, pointer_y: float) -> float:
    cx, cy = block.center
    angle = math.degrees(math.atan2(pointer_y - cy, pointer_x - cx))
    return (angle + ROTATION_OFFSET) % 360


class BlockStore:
    def __init__(self, blocks: Optional[List[Block]] = None, selected_id: Optional[str] = None):
        self.blocks: List[Block] = list(blocks or [])
        self.selected_id = selected_id if self.get(selected_id) else None

    def __len__(self):
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)

    @property
    def ids(self) -> List[str]:
        return [block.id for block in self.blocks]

    def get(self, block_id) -> Optional[Block]:
        if block_id is None:
            return None
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    def index_of(self, block_id) -> Optional[int]:
        for index, block in enumerate(self.blocks):
            if block.id == block_id:
                return index
        return None

    # ------------------------
    # Structure
    # ------------------------

    def add_block(self, block_type: str, subtype: Optional[str] = None) -> Block:
        block = Block.create(block_type, subtype=subtype)
        self.blocks.append(block)
        self.selected_id = block.id
        return block

    def delete_block(self, block_id) -> Optional[Block]:
        index = self.index_of(block_id)
        if index is None:
            return None

        block = self.blocks.pop(index)
        if self.selected_id == block_id:
            self.selected_id = None
        return block

    def reorder(self, from_index: int, to_index: int) -> bool:
        """Move the block at ``from_index`` to ``to_index``, shifting the rest."""
        size = len(self.blocks)
        if not (0 <= from_index < size and 0 <= to_index < size):
            return False
        if from_index == to_index:
            return True

        block = self.blocks.pop(from_index)
        self.blocks.insert(to_index, block)
        return True

    def select(self, block_id) -> Optional[Block]:
        block = self.get(block_id)
        self.selected_id = block.id if block else None
        return block

    # ------------------------
    # Fields
    # ------------------------

    def update_content(self, block_id, text: str) -> Optional[Block]:
        block = self.get(block_id)
        if block is None:
            return None
        block.content = text
        return block

    def update_setting(self, block_id, key: str, value: Any) -> Optional[Block]:
        block = self.get(block_id)
        if block is None:
            return None
        block.settings = {**block.settings, key: value}
        return block

    # ------------------------
    # Canvas geometry
    # ------------------------

    def move(self, block_id, dx: float, dy: float) -> Optional[Block]:
        block = self.get(block_id)
        if block is None:
            return None
        block.x += dx
        block.y += dy
        return block

    def resize(self, block_id, width: float, height: float) -> Optional[Block]:
        block = self.get(block_id)
        if block is None:
            return None
        block.width = max(MIN_WIDTH, width)
        block.height = max(MIN_HEIGHT, height)
        return block

    def rotate(self, block_id, angle: float) -> Optional[Block]:
        block = self.get(block_id)
        if block is None:
            return None
        block.rotation = angle
        return block

    def rotate_towards(self, block_id, pointer_x: float, pointer_y: float) -> Optional[Block]:
        block = self.get(block_id)
        if block is None:
            return None
        block.rotation = rotation_towards(block, pointer_x, pointer_y)
        return block

    def reading_order(self) -> List[Block]:
        return sorted(self.blocks, key=lambda b: (b.y, b.x))

    # ------------------------
    # Snapshots
    # ------------------------

    def to_list(self) -> List[Dict[str, Any]]:
        return [block.to_dict() for block in self.blocks]

    @classmethod
    def from_list(cls, data, selected_id=None) -> "BlockStore":
        return cls([Block.from_dict(item) for item in data or []], selected_id=selected_id)
