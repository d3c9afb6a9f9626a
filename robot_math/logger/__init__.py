from .logger import DedupFilter, Logger, configure_logging

__all__ = ["DedupFilter", "Logger", "configure_logging"]
