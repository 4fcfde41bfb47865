"""
Scan orchestration settings.

Listing page size and dispatcher shutdown behaviour.

Dependencies: pydantic, pydantic_settings
System role: Scan lifecycle configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScanSettings(BaseSettings):
    """Settings for scan creation, listing and dispatch."""

    model_config = SettingsConfigDict(
        env_prefix="SCAN_",
        case_sensitive=False,
        extra="ignore",
    )

    page_size: int = Field(
        default=20,
        description="Maximum number of scans returned by the list endpoint",
    )
    shutdown_grace_seconds: float = Field(
        default=30.0,
        description="Seconds to wait for in-flight dispatched analyses on shutdown",
    )
