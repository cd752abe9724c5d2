"""Content-addressed deployment to the static hosting provider."""

from .deployer import Deployer, DeployResult, DeploymentJob, DeployState
from .hosting import HostingClient
from .manifest import DeploymentManifest, build_manifest, render_headers

__all__ = [
    "Deployer",
    "DeployResult",
    "DeploymentJob",
    "DeployState",
    "HostingClient",
    "DeploymentManifest",
    "build_manifest",
    "render_headers",
]
