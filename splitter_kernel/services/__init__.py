"""Services for the splitter kernel (write side)."""

from splitter_kernel.services.splitter_service import SplitterService
from splitter_kernel.services.state_repository import LedgerStateRepository

__all__ = [
    "LedgerStateRepository",
    "SplitterService",
]
