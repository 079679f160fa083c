from .core_config import MatterHubConfig, default_data_dir

__all__ = ["MatterHubConfig", "default_data_dir"]
