from taskboard.domains.shares.entities import Share, SHARE_MODE_VIEW, SHARE_MODE_EDIT, normalize_share_mode
from taskboard.domains.shares.schemas import ShareCreate, ShareResponse, SharedCanvasResponse

__all__ = [
    "Share", "SHARE_MODE_VIEW", "SHARE_MODE_EDIT", "normalize_share_mode",
    "ShareCreate", "ShareResponse", "SharedCanvasResponse",
]
