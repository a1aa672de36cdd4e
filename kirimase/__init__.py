"""kirimase -- scaffold Next.js projects from the command line.

Records the chosen stack in ``kirimase.config.json``, installs the matching
npm packages through the project's package manager, and generates small
React elements.
"""

__version__ = "0.1.0"

from kirimase.config import Config, ConfigStore, ConfigUpdate, FileLocations, get_file_locations
from kirimase.installer import install_packages, install_shadcn_ui_components
from kirimase.utils import CommandError, KirimaseError, run_command

__all__ = [
    "CommandError",
    "Config",
    "ConfigStore",
    "ConfigUpdate",
    "FileLocations",
    "KirimaseError",
    "get_file_locations",
    "install_packages",
    "install_shadcn_ui_components",
    "run_command",
]
