"""Error types for neighborhood table construction."""


class NeighborhoodError(ValueError):
    """Base class for invalid neighborhood inputs."""
    pass


class ConfigurationError(NeighborhoodError):
    """Dimension count, neighborhood kind, or vector length is invalid."""
    pass


class PreconditionError(NeighborhoodError):
    """A coordinate lies outside the array it is classified against."""
    pass
