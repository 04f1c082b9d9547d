"""
Stockroute - Configuration and settings.

All options can be set through STOCKROUTE_* environment variables or a
.env file. CLI flags override them per invocation.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RouterSettings(BaseSettings):
    """
    Settings for the sorting loop.

    Destinations are enumerated either from `destinations` (explicit,
    ordered) or by formatting `destination_pattern` for every index in
    `first_index..last_index` inclusive. Order matters: routing picks the
    first destination that already holds an item type.
    """

    model_config = SettingsConfigDict(
        env_prefix="STOCKROUTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Inventories
    source_name: str = "minecraft:chest_3"
    destination_pattern: str = "minecraft:chest_{index}"
    first_index: int = 4
    last_index: int = 140
    destinations: list[str] | None = None
    fallback_name: str | None = "charm:variant_chest_2"

    # Loop
    batch_size: int = Field(default=200, gt=0)  # stay under the environment's event ceiling
    loop_delay: float = Field(default=0.0, ge=0.0)  # seconds, 0 = no pause

    # Output
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    event_log_dir: Path | None = None
    bell: bool = False

    @model_validator(mode="after")
    def _check_range(self) -> "RouterSettings":
        if self.destinations is None and self.last_index < self.first_index:
            raise ValueError(
                f"last_index ({self.last_index}) is below first_index ({self.first_index})"
            )
        if "{index" not in self.destination_pattern:
            raise ValueError("destination_pattern must contain an {index} placeholder")
        try:
            self.destination_pattern.format(index=self.first_index)
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"destination_pattern {self.destination_pattern!r} is not formattable: {e!r}") from e
        return self

    def destination_names(self) -> list[str]:
        """Candidate destination names in routing order."""
        if self.destinations is not None:
            return list(self.destinations)
        return [
            self.destination_pattern.format(index=i)
            for i in range(self.first_index, self.last_index + 1)
        ]

