"""SQLAlchemy database models."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class BibleVerse(Base):
    """One verse row; every row carries the character count of its whole chapter."""

    __tablename__ = "bible2"

    idx: Mapped[int] = mapped_column(Integer, primary_key=True)
    book: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    chapter: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    long_label: Mapped[str] = mapped_column(String(100), nullable=False)
    count_of_chapter: Mapped[int] = mapped_column("countOfChapter", Integer, nullable=False)
