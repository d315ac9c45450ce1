from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from movier.db import Base

class Movie(Base):
    __tablename__ = "movies"
    # NULLs never collide, so only rows carrying both provenance columns are deduplicated
    __table_args__ = (
        UniqueConstraint("external_source", "external_id", name="uq_movies_external"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    year = Column(Integer, nullable=True)
    genre = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    poster_url = Column(String, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    external_source = Column(String, nullable=True)
    external_id = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    reviews = relationship("Review", back_populates="movie", cascade="all, delete-orphan", passive_deletes=True)
    watchlist_entries = relationship("WatchlistEntry", back_populates="movie", cascade="all, delete-orphan", passive_deletes=True)
