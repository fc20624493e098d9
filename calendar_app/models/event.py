from sqlalchemy import Column, DateTime, Index, Integer, String, Text, func

from calendar_app.database import Base

DEFAULT_COLOR = "#1976d2"


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text)
    # Naive local timestamps stored as "YYYY-MM-DDTHH:MM:SS" text so that
    # lexicographic order matches chronological order.
    start_date = Column(String(19), nullable=False)
    end_date = Column(String(19), nullable=False)
    color = Column(String(7), nullable=False, default=DEFAULT_COLOR)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        Index("idx_events_start_date", "start_date"),
        Index("idx_events_end_date", "end_date"),
    )

    def __repr__(self) -> str:
        return f"<Event id={self.id} title={self.title!r} start={self.start_date}>"
