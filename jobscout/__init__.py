"""JobScout: job search, application tracking and AI writing tools."""

__version__ = "0.1.0"
