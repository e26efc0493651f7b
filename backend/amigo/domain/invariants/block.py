from amigo.domain.blocks import BLOCK_TYPES, IMAGE_SHAPES, TEXT_SUBTYPES
from .exceptions import InvariantViolation, ValidationError


def _reject(block, message, field):
    raise ValidationError(f"Block {block.id}: {message}", field=field)


def assert_block_ids_unique(blocks):
    ids = [block.id for block in blocks]
    if len(ids) != len(set(ids)):
        raise InvariantViolation(f"Block ids are not unique: {ids}")


def assert_block(block):
    if block.type not in BLOCK_TYPES:
        _reject(block, f"unknown block type {block.type!r}", "type")

    if not isinstance(block.content, str):
        _reject(block, "content must be text", "content")

    if block.type == "image":
        shape = block.settings.get("shape", "square")
        if shape not in IMAGE_SHAPES:
            _reject(block, f"unknown image shape {shape!r}", "settings.shape")

    if block.type in ("list", "checklist"):
        items = block.settings.get("items")
        if not isinstance(items, list) or not items:
            _reject(block, f"{block.type} block must have at least one item", "settings.items")
        if not all(isinstance(item, str) for item in items):
            _reject(block, f"{block.type} items must be strings", "settings.items")

    if block.type == "text" and block.subtype not in TEXT_SUBTYPES:
        _reject(block, f"unknown text subtype {block.subtype!r}", "subtype")


def assert_blocks(blocks):
    assert_block_ids_unique(blocks)

    for block in blocks:
        assert_block(block)
