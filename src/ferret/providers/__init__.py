from ferret.config import Settings
from ferret.search.registry import ProviderRegistry

from .answerhub import AnswerHubProvider
from .github import GitHubProvider
from .slack import SlackProvider

__all__ = ["AnswerHubProvider", "GitHubProvider", "SlackProvider", "register_providers"]


def register_providers(registry: ProviderRegistry, settings: Settings) -> None:
    """Construct every built-in provider from settings and register it."""
    timeout = settings.http_timeout
    for provider in (
        AnswerHubProvider.from_config(settings.answerhub, timeout=timeout),
        GitHubProvider.from_config(settings.github, timeout=timeout),
        SlackProvider.from_config(settings.slack, timeout=timeout),
    ):
        registry.register(provider.info.name, provider)
