"""
Diary model. Scalar metadata is stored in protected (encrypted) form and the
content body as separate ciphertext and nonce columns.
"""
from sqlalchemy import Column, String, Date, Text, ForeignKey, Integer, Boolean, LargeBinary, JSON, Table
from sqlalchemy.orm import relationship
from journal.db.base import Base, BaseModel, SoftDeleteMixin


diary_tags = Table(
    "diary_tags",
    Base.metadata,
    Column("diary_id", Integer, ForeignKey("diaries.id"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id"), primary_key=True),
)


class DiaryEntry(SoftDeleteMixin, BaseModel):
    """Diary entry owned by one user."""
    __tablename__ = "diaries"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)

    # Protected fields (base64 envelope when a key is configured)
    title = Column(Text, nullable=False, default="")
    weather = Column(Text, nullable=False, default="")
    mood = Column(Text, nullable=False, default="")
    location = Column(Text, nullable=False, default="")
    music = Column(Text, nullable=False, default="")

    content_enc = Column(LargeBinary, nullable=True)
    iv = Column(LargeBinary(16), nullable=True)
    summary = Column(String(512), nullable=False, default="")  # never filled from plaintext

    properties = Column(JSON, nullable=True)
    is_public = Column(Boolean, default=False, nullable=False)
    is_pinned = Column(Boolean, default=False, nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="diaries")
    tags = relationship("Tag", secondary=diary_tags, back_populates="diaries")
    images = relationship("Image", back_populates="diary")