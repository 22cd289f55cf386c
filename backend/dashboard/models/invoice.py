from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from dashboard.database import Base


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Text, primary_key=True)
    customer_id = Column(Text, ForeignKey("customers.id"), nullable=False)
    amount = Column(Integer, nullable=False)  # cents
    status = Column(Text, nullable=False)
    date = Column(Text, nullable=False)

    customer = relationship("Customer", back_populates="invoices")
