"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from banter.util.di import PROVIDERS, Component, get_provider


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build test container with selective unmocking.

    Settings are loaded from environment variables.

    Args:
        unmock: Components to use production implementations for.
                All others use mocks if available.

    Returns:
        Configured test container

    Raises:
        ValueError: If unknown components are requested

    Examples:
        # Unit tests - all mocks
        container = build_test_container()

        # Integration tests - real persistence
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    provider_instances = []
    for base in PROVIDERS:
        is_mockable = bool(base.__subclasses__())

        if not is_mockable:
            # Concrete provider - always use as-is
            provider_class = get_provider(base, use_mock=False)
        else:
            component_name = getattr(base, "__mock_component__", None)
            use_mock = component_name not in unmock if component_name else False
            provider_class = get_provider(base, use_mock=use_mock)

        provider_instances.append(provider_class())

    # FastapiProvider lets the same container back the API in e2e tests
    return make_async_container(*provider_instances, FastapiProvider())


def _validate_unmock(unmock: set[Component]) -> None:
    """Validate unmock configuration.

    Raises:
        ValueError: If unknown components are requested
    """
    mockable_providers = [p for p in PROVIDERS if p.__subclasses__()]
    all_components = {
        getattr(p, "__mock_component__")
        for p in mockable_providers
        if hasattr(p, "__mock_component__")
    }

    unknown = unmock - all_components
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")
