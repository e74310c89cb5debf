"""Shared base for forum domain services."""


class Service:
    """Marker base for domain services.

    A service owns the rules that span several repositories, such as
    keeping a post's cached vote total equal to its ledger. Services
    never commit; the request-scoped session decides that.
    """
