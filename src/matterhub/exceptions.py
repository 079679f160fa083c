import typing

if typing.TYPE_CHECKING:
    from matterhub.clusters.base import ClusterState


class MatterHubError(Exception):
    """Base exception for all matterhub errors."""


class InvalidAttributeValueError(ValueError, MatterHubError):
    """Raised when a patch or write violates an attribute's type or range.

    The cluster state is left untouched when this is raised.
    """

    def __init__(self, cluster: "ClusterState", errors: str):
        msg = f"Invalid attribute values for cluster '{cluster.name}': {errors}"
        super().__init__(msg)


class UnknownAttributeError(KeyError, MatterHubError):
    """Raised when a patch or write names an attribute the cluster does not have."""

    def __init__(self, cluster_name: str, attributes: "typing.Iterable[str]"):
        self.attributes = sorted(attributes)
        super().__init__(f"Cluster '{cluster_name}' has no attribute(s) {', '.join(self.attributes)}")


class UnknownCommandError(ValueError, MatterHubError):
    """Raised when a command is invoked that no behavior handles."""


class FeatureResolutionError(TypeError, MatterHubError):
    """Raised when the feature resolver is given a raw, untyped feature bitmap."""


class MigrationError(MatterHubError):
    """Raised when the stored schema version cannot be advanced."""


class StorageNotInitializedError(RuntimeError, MatterHubError):
    """Raised when storage is used before it was initialized."""


class UnknownClusterError(KeyError, MatterHubError):
    """Raised when a device has no behavior for the named cluster."""
