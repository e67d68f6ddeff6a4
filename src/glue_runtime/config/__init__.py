from .loader import ConfigError, load_glue_config, load_yaml_config
from .models import GlueConfig, LoaderConfig
from .options import LoaderOptions

__all__ = ["ConfigError", "GlueConfig", "LoaderConfig", "LoaderOptions", "load_glue_config", "load_yaml_config"]
