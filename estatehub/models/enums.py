import enum


class AgencyStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    PENDING_SETUP = "PENDING_SETUP"


class UserRole(str, enum.Enum):
    PLATFORM_ADMIN = "PLATFORM_ADMIN"
    AGENCY_ADMIN = "AGENCY_ADMIN"
    AGENT = "AGENT"


class PropertyStatus(str, enum.Enum):
    FOR_SALE = "FOR_SALE"
    TO_RENT = "TO_RENT"


class AvailabilityStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    UNDER_OFFER = "UNDER_OFFER"
    SOLD = "SOLD"
    LET_AGREED = "LET_AGREED"
    WITHDRAWN = "WITHDRAWN"


class PropertyType(str, enum.Enum):
    HOUSE = "HOUSE"
    FLAT = "FLAT"
    APARTMENT = "APARTMENT"
    BUNGALOW = "BUNGALOW"
    COTTAGE = "COTTAGE"
    MAISONETTE = "MAISONETTE"
    STUDIO = "STUDIO"
    TERRACED = "TERRACED"
    SEMI_DETACHED = "SEMI_DETACHED"
    DETACHED = "DETACHED"
    END_TERRACE = "END_TERRACE"
    TOWNHOUSE = "TOWNHOUSE"
    LAND = "LAND"
    COMMERCIAL = "COMMERCIAL"
    OTHER = "OTHER"


class PriceType(str, enum.Enum):
    FIXED = "FIXED"
    OFFERS_OVER = "OFFERS_OVER"
    OFFERS_REGION = "OFFERS_REGION"
    POA = "POA"
    PCM = "PCM"
    PW = "PW"
    PA = "PA"


class EnquiryStatus(str, enum.Enum):
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    RESPONDED = "RESPONDED"
    CLOSED = "CLOSED"
