"""postmeta public API."""

from .loader import LoadError, Post, PostLoader, dump_post, load_post

__all__ = ["LoadError", "Post", "PostLoader", "dump_post", "load_post"]
