from dashboard.models.user import User
from dashboard.models.customer import Customer
from dashboard.models.invoice import Invoice
from dashboard.models.review import Review
from dashboard.models.image import Image
from dashboard.models.revenue import Revenue

__all__ = ["User", "Customer", "Invoice", "Review", "Image", "Revenue"]
