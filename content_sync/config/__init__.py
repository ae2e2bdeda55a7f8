from .loader import load_config
from .models import ContentSyncSettings, SyncConfig

__all__ = [
    "ContentSyncSettings",
    "SyncConfig",
    "load_config",
]
