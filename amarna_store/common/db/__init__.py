from .kv_storage import KeyValueStorage
from .session import create_session_factory

__all__ = ["KeyValueStorage", "create_session_factory"]
