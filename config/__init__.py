import importlib
import os
from types import ModuleType

_ENV_MODULES = {
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
}


def get_settings_module() -> str:
    """Tên module cấu hình theo APP_ENV (mặc định development).

    SETTINGS_MODULE, nếu có, được dùng nguyên văn.
    """

    explicit = os.getenv("SETTINGS_MODULE")
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return f"config.{_ENV_MODULES.get(env, 'development')}"


def load_settings() -> ModuleType:
    return importlib.import_module(get_settings_module())
