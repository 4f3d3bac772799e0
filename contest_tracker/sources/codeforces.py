from .base import BaseSource
from . import register_source


@register_source
class CodeforcesSource(BaseSource):
    PLATFORM_NAME = "codeforces"
    PLATFORM_DISPLAY = "Codeforces"
    ENDPOINT = "/api/codeforces"
