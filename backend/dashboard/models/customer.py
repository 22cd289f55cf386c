from sqlalchemy import Column, Text
from sqlalchemy.orm import relationship
from dashboard.database import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    image_url = Column(Text, nullable=False)

    invoices = relationship("Invoice", back_populates="customer")
    reviews = relationship("Review", back_populates="customer")
