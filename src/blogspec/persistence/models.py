"""SQLAlchemy persistence models for blogs and posts."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Declarative base for all blogspec tables."""


class BlogModel(Base):
    __tablename__ = "blogs"

    blog_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(String(2048), index=True)

    # Relations are never lazy-loaded: a caller that wants posts includes them.
    posts: Mapped[list[PostModel]] = relationship(
        cascade="all, delete-orphan",
        lazy="raise",
        order_by="PostModel.post_id",
    )

    def __repr__(self) -> str:
        return f"BlogModel(blog_id={self.blog_id!r}, url={self.url!r})"


class PostModel(Base):
    __tablename__ = "posts"

    post_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(512))
    content: Mapped[str] = mapped_column(Text)
    blog_id: Mapped[int] = mapped_column(
        ForeignKey("blogs.blog_id", ondelete="CASCADE"), index=True
    )

    def __repr__(self) -> str:
        return f"PostModel(post_id={self.post_id!r}, title={self.title!r})"
