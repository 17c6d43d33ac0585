from .activity_api import ActivityApi
from .admin_api import AdminApi

__all__ = ["ActivityApi", "AdminApi"]
