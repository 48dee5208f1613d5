"""Hierarchy schemas for source listings (publication -> article -> excerpt).

SourceNode is the flat input row; any extra display fields supplied by the
data layer (slug, tier, claim_count, depth, ...) are preserved and carried
into the TreeNode built from it.
"""

from typing import Optional

from pydantic import BaseModel, Field


class SourceNode(BaseModel):
    """Flat source row with an optional parent reference."""

    id: str = Field(..., description="Unique source identifier")
    name: str = Field(..., description="Display name, used for ordering")
    parent_id: Optional[str] = Field(
        None,
        alias="parentId",
        description="Identifier of the parent source, if any",
    )

    model_config = {"populate_by_name": True, "extra": "allow"}


class TreeNode(SourceNode):
    """Source node with its children resolved and sorted."""

    children: list["TreeNode"] = Field(
        default_factory=list, description="Child nodes ordered by name"
    )

    @classmethod
    def from_source(cls, node: SourceNode) -> "TreeNode":
        """Wrap a flat node, keeping its extra fields, with no children yet."""
        data = node.model_dump()
        data.pop("children", None)
        return cls(**data)
