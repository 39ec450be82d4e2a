"""Core — factory, normalizer, opérations d'édition, BlockStore."""
from .exceptions import StoryError, StoryValidationError, StoryNotFound
from .factory import create_block, clone_block
from .normalizer import NormalizePolicy, normalize, is_canonical, default_policy
from .store import BlockStore

__all__ = [
    "StoryError", "StoryValidationError", "StoryNotFound",
    "create_block", "clone_block",
    "NormalizePolicy", "normalize", "is_canonical", "default_policy",
    "BlockStore",
]
