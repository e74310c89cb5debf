"""Production DI container for the forum API."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
import logfire

from forum.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container with the PostgreSQL persistence provider.

    Returns:
        Container wired with every production provider
    """
    providers = [get_provider(base, use_mock=False) for base in PROVIDERS]
    logfire.info(
        "Building DI container",
        providers=[provider.__name__ for provider in providers],
    )
    return make_async_container(
        *(provider() for provider in providers), FastapiProvider()
    )


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app so routes can resolve FromDishka."""
    setup_dishka(container, app)
