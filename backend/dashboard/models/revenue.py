from sqlalchemy import Column, Integer, Text
from dashboard.database import Base


class Revenue(Base):
    __tablename__ = "revenue"

    month = Column(Text, primary_key=True)
    revenue = Column(Integer, nullable=False)
