"""
Media models package.

Exports:
    MediaObject: Metadata for one uploaded image (original + thumbnail)
"""

from media.models.media_object import MediaObject

__all__ = [
    "MediaObject",
]
