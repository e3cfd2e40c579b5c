"""Exception hierarchy shared across asapdf."""


class AsapdfError(Exception):
    """Base class for every error raised by asapdf."""


class ConfigError(AsapdfError, ValueError):
    """Invalid layout or style settings."""


class AllocationError(AsapdfError):
    """The object offset table could not grow. Fatal for the run."""


class ObjectTableError(AsapdfError):
    """Object ids used out of protocol (unallocated, recorded twice, missing)."""


class PageRegistryError(AsapdfError):
    pass


class PageStateError(AsapdfError):
    pass
