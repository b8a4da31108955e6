from .entities import Blog, Entity, Post
from .specifications import BlogWithItemsSpecification

__all__ = ["Blog", "BlogWithItemsSpecification", "Entity", "Post"]
