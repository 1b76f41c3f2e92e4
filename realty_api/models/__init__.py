"""Database models for the listings API.

Importing this package registers every table on ``Base.metadata``.
"""

from realty_api.models.account import Admin, User
from realty_api.models.agent import Agent
from realty_api.models.article import Article
from realty_api.models.base import Base
from realty_api.models.catalog import Amenity, Category, PropertyType, View
from realty_api.models.favorite import FavoriteRent, FavoriteSale
from realty_api.models.installment import Installment
from realty_api.models.listing import Project, Property, RentUnit, SaleUnit
from realty_api.models.media import Image, ListingAmenity, ListingView
from realty_api.models.message import Message

__all__ = [
    "Admin",
    "Agent",
    "Amenity",
    "Article",
    "Base",
    "Category",
    "FavoriteRent",
    "FavoriteSale",
    "Image",
    "Installment",
    "ListingAmenity",
    "ListingView",
    "Message",
    "Project",
    "Property",
    "PropertyType",
    "RentUnit",
    "SaleUnit",
    "User",
    "View",
]
