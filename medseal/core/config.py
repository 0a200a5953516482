"""Configuration management"""
import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


class Config:
    """Application configuration"""
    
    # Paths
    BASE_DIR: Path = Path(__file__).parent.parent.parent
    APP_CONFIG_PATH: Path = Path(os.getenv("MEDSEAL_APP_CONFIG", BASE_DIR / "config" / "app_config.yaml"))
    
    # Load app config
    _app_config: Optional[Dict[str, Any]] = None
    
    # History storage
    DATA_DIR: Path = Path(os.getenv("MEDSEAL_DATA_DIR", "./data"))
    
    # Parallel medicine lookups
    MAX_WORKERS: int = _env_int("MAX_WORKERS", 5)
    
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    
    @classmethod
    def load_app_config(cls) -> Dict[str, Any]:
        """Load application configuration from YAML file"""
        if cls._app_config is not None:
            return cls._app_config
        
        try:
            if cls.APP_CONFIG_PATH.exists():
                with open(cls.APP_CONFIG_PATH, "r", encoding="utf-8") as f:
                    cls._app_config = yaml.safe_load(f) or {}
                    return cls._app_config
            else:
                # Return empty dict if config file doesn't exist
                return {}
        except (yaml.YAMLError, IOError) as e:
            raise ValueError(f"Failed to load app config from {cls.APP_CONFIG_PATH}: {e}")
    
    @classmethod
    def get(cls, *keys, default=None):
        """Get nested config value
        
        Args:
            *keys: Variable number of keys to traverse nested config
            default: Default value if key not found
            
        Example:
            Config.get("history", "slot") -> config["history"]["slot"]
        """
        config = cls.load_app_config()
        value = config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default
        return value if value is not None else default
    
    @classmethod
    def history_capacity(cls) -> int:
        """Maximum number of history entries kept"""
        raw = cls.get("history", "capacity", default=10)
        try:
            capacity = int(raw)
        except (TypeError, ValueError):
            raise ValueError(f"history.capacity must be an integer, got {raw!r}")
        if capacity < 1:
            raise ValueError(f"history.capacity must be at least 1, got {capacity}")
        return capacity
    
    @classmethod
    def history_path(cls, data_dir: Optional[Path] = None) -> Path:
        """Path of the file backing the history slot"""
        data_dir = Path(data_dir) if data_dir else cls.DATA_DIR
        slot = cls.get("history", "slot", default="prescriptionHistory")
        return data_dir / f"{slot}.json"
    
    @classmethod
    def ensure_directories(cls, data_dir: Optional[Path] = None) -> None:
        """Ensure the data directory exists"""
        (Path(data_dir) if data_dir else cls.DATA_DIR).mkdir(parents=True, exist_ok=True)
