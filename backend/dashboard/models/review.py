from sqlalchemy import Column, ForeignKey, Text
from sqlalchemy.orm import relationship
from dashboard.database import Base


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Text, primary_key=True)
    customer_id = Column(Text, ForeignKey("customers.id"), nullable=False)
    title = Column(Text, nullable=False)
    status = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)
    next_part_id = Column(Text, ForeignKey("reviews.id", ondelete="SET NULL"), nullable=True)
    text = Column(Text)

    customer = relationship("Customer", back_populates="reviews")
