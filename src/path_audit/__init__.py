"""path_audit — find filesystem entries whose full path is too long."""

__all__ = [
    "__version__",
    "scan_path",
    "ScanConfig",
    "ScanResult",
    "ScanSetupError",
    "Violation",
]
__version__ = "0.1.0"

# Programmatic engine entrypoints.
from path_audit.api import scan_path  # noqa: E402, F401
from path_audit.core.config import ScanConfig  # noqa: E402, F401
from path_audit.core.errors import ScanSetupError  # noqa: E402, F401
from path_audit.model.scan_result import ScanResult  # noqa: E402, F401
from path_audit.model.violation import Violation  # noqa: E402, F401
