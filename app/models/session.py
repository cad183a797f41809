from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.core.database import Base

CATEGORIES = ("meditation", "sleep", "breathwork", "music")


class Session(Base):
    """One playable audio unit in the catalog (not a DB session)."""
    __tablename__ = "sessions"

    id:          Mapped[int]        = mapped_column(Integer, primary_key=True, autoincrement=True, index=True)
    title:       Mapped[str]        = mapped_column(String(255), nullable=False)
    description: Mapped[str]        = mapped_column(Text, nullable=False)
    category:    Mapped[str]        = mapped_column(String(30), nullable=False, index=True)
    duration:    Mapped[int]        = mapped_column(Integer, nullable=False)
    audio_url:   Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url:   Mapped[str | None] = mapped_column(Text, nullable=True)
    teacher_id:  Mapped[int | None] = mapped_column(
        Integer, ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True, index=True
    )
    is_premium:  Mapped[bool]       = mapped_column(Boolean, default=False, nullable=False, server_default="false")
    play_count:  Mapped[int]        = mapped_column(Integer, default=0, nullable=False, server_default="0")
    is_featured: Mapped[bool]       = mapped_column(Boolean, default=False, nullable=False, server_default="false")

    teacher = relationship("Teacher", back_populates="sessions")

    __table_args__ = (
        CheckConstraint(
            "category in (" + ",".join(f"'{c}'" for c in CATEGORIES) + ")",
            name="ck_sessions_category",
        ),
        CheckConstraint("play_count >= 0", name="ck_sessions_play_count"),
    )

    def __repr__(self) -> str:
        return f"<Session id={self.id} title={self.title!r} plays={self.play_count}>"
