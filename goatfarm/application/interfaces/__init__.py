from .session_storage import SessionStorage
from .farm_gateway import AuthGateway, FeedingLogGateway, GoatGateway

__all__ = [
    "SessionStorage",
    "AuthGateway",
    "GoatGateway",
    "FeedingLogGateway",
]
