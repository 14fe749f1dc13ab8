from shortener.db.sql.connection import Base
from sqlalchemy import Column, String, Text

ID_LENGTH = 6


class UrlMapping(Base):
    __tablename__ = "urls"
    id = Column(String(ID_LENGTH), primary_key=True)
    # unique=True backs the ON CONFLICT (url) clause of the upsert
    url = Column(Text, nullable=False, unique=True)

    def __repr__(self):
        return f"<UrlMapping(id={self.id}, url={self.url})>"
