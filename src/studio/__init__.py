"""Studio export core.

In-memory console core: the media resource registry, archive packaging for
manual publishing and the synchronized multi-track preview.
"""

from .config import AppConfig, load_config

__all__ = ["AppConfig", "load_config"]
