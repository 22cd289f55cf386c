from sqlalchemy import Column, Text
from dashboard.database import Base


class Image(Base):
    __tablename__ = "images"

    id = Column(Text, primary_key=True)
    document_id = Column(Text, nullable=False)
    document_type = Column(Text, nullable=False)
    url = Column(Text, nullable=False)
