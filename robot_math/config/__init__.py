from .settings import LoggingSettings, MathSettings, RankSettings, RiccatiSettings

__all__ = ["LoggingSettings", "MathSettings", "RankSettings", "RiccatiSettings"]
