import re
from typing import Any, Callable, Dict, Type


class HandlerResolver:
    """Resolves message handlers from a DI container by naming convention.

    GetLiveMapQuery -> get_live_map_query_handler
    SubmitReportCommand -> submit_report_command_handler
    """

    def __init__(self, container: Any) -> None:
        """Args:
            container: Container instance exposing handler providers.
        """
        self.container = container
        self._providers_cache: Dict[Type, Callable[[], Any]] = {}

    def _execute(self, message: Any) -> Any:
        message_type = type(message)

        provider = self._providers_cache.get(message_type)
        if provider is None:
            provider_name = self._camel_to_snake(f"{message_type.__name__}Handler")
            provider = getattr(self.container, provider_name)
            self._providers_cache[message_type] = provider

        return provider().handle(message)

    @staticmethod
    def _camel_to_snake(name: str) -> str:
        """Convert CamelCase to snake_case."""
        s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
        return re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1).lower()
