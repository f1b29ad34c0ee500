"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold thread-processing logic that does not belong to a
    single entity. They keep no per-thread state between calls.
    """

    pass
