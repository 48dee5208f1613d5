"""Schema package for the content trust scoring subsystem.

Pydantic models for every boundary type:
- ClaimData / SourceScore: scoring engine input and output
- SourceNode / TreeNode: flat hierarchy rows and the built forest
- RateLimitConfig / RateLimitResult: limiter budget and decision

Usage:
    from content_trust.schemas import ClaimData
    claim = ClaimData(impact=5, confidence=5, helpful_votes=0)
"""

from content_trust.schemas.claim_schema import ClaimData, SourceScore
from content_trust.schemas.tree_schema import SourceNode, TreeNode
from content_trust.schemas.rate_limit_schema import RateLimitConfig, RateLimitResult

__all__ = [
    "ClaimData",
    "SourceScore",
    "SourceNode",
    "TreeNode",
    "RateLimitConfig",
    "RateLimitResult",
]
