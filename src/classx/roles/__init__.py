from .logger import LoggerRole, ToLogLevel

__all__ = ["LoggerRole", "ToLogLevel"]
