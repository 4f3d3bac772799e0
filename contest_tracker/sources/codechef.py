from .base import BaseSource
from . import register_source


@register_source
class CodeChefSource(BaseSource):
    PLATFORM_NAME = "codechef"
    PLATFORM_DISPLAY = "CodeChef"
    ENDPOINT = "/api/codechef"
