from .logging_config import OpeningGeneratorLogger, TRACE_LEVEL

__all__ = ["OpeningGeneratorLogger", "TRACE_LEVEL"]
