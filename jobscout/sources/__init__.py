from .base import JobSource, TimeFilter
from .demo import DemoSource
from .synthetic import GlassdoorBoard, IndeedBoard, LinkedInBoard, SyntheticBoard, default_boards
from .ai_search import AISearchSource

__all__ = [
    "JobSource", "TimeFilter", "DemoSource", "SyntheticBoard",
    "IndeedBoard", "LinkedInBoard", "GlassdoorBoard", "AISearchSource",
    "default_boards",
]
