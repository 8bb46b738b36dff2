from .rsc import RscDigestFeed, build_source_url

# base exported for alternative sources
from .base import BaseFeed

__all__ = ["RscDigestFeed", "build_source_url", "BaseFeed"]
