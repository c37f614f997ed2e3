from .step_10_check_distro import CheckDistroStep
from .step_20_detect_installed import DetectInstalledStep
from .step_30_check_latest import CheckLatestStep
from .step_40_decide import DecideStep
from .step_50_download import DownloadStep
from .step_60_install import InstallStep
from .step_70_cleanup import CleanupStep

__all__ = [
    "CheckDistroStep",
    "DetectInstalledStep",
    "CheckLatestStep",
    "DecideStep",
    "DownloadStep",
    "InstallStep",
    "CleanupStep",
]
