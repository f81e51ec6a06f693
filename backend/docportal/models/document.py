from sqlalchemy import Column, Integer, Text

from docportal.database import Base


class Document(Base):
    __tablename__ = "documents"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(Text, nullable=False)
    filepath = Column(Text, nullable=False, unique=True)
    filesize = Column(Integer, nullable=False)
    content_type = Column(Text)
    created_at = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Document id={self.id} filename={self.filename!r} filesize={self.filesize}>"
