"""Provider base class shared by the forum's DI modules."""

from typing import ClassVar, Literal

from dishka import Provider

# Components that ship both a production and an in-memory provider
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base for every provider in ``PROVIDERS``.

    Attributes:
        __mock_component__: Component name when the provider has a mock
            counterpart, None otherwise
        __is_mock__: True for the in-memory variant used by tests
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
