from .step_10_preflight import PreflightStep
from .step_15_welcome import WelcomeStep
from .step_20_provision_packages import ProvisionPackagesStep
from .step_30_install_docker import InstallDockerStep
from .step_40_fetch_project import FetchProjectStep
from .step_50_configure_environment import ConfigureEnvironmentStep

__all__ = [
    "PreflightStep",
    "WelcomeStep",
    "ProvisionPackagesStep",
    "InstallDockerStep",
    "FetchProjectStep",
    "ConfigureEnvironmentStep",
]
