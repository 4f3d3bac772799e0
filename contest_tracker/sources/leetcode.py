from .base import BaseSource
from . import register_source


@register_source
class LeetCodeSource(BaseSource):
    PLATFORM_NAME = "leetcode"
    PLATFORM_DISPLAY = "LeetCode"
    ENDPOINT = "/api/leetcode"
    NO_CACHE = True
