from .payload import ShareableScoreData, SharedPlayer, build_share_payload
from .qr import qr_svg

__all__ = ["ShareableScoreData", "SharedPlayer", "build_share_payload", "qr_svg"]
