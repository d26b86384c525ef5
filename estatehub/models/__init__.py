from estatehub.models.agency import Agency
from estatehub.models.user import User
from estatehub.models.property import Property
from estatehub.models.property_image import PropertyImage
from estatehub.models.enquiry import Enquiry

__all__ = ["Agency", "User", "Property", "PropertyImage", "Enquiry"]
