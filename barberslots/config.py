"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.availability import (
    DEFAULT_CLOSE_TIME,
    DEFAULT_OPEN_TIME,
    DEFAULT_SLOT_GRANULARITY,
    AvailabilityRules,
)
from .domain.models import Weekday


class BusinessHoursConfig(BaseModel):
    """Operating hours as stored by the tenant configuration."""
    open_time: str = DEFAULT_OPEN_TIME
    close_time: str = DEFAULT_CLOSE_TIME
    lunch_start: Optional[str] = None
    lunch_end: Optional[str] = None
    open_weekdays: List[str | int] = Field(
        default_factory=lambda: ["seg", "ter", "qua", "qui", "sex", "sab"]
    )
    slot_granularity: int = DEFAULT_SLOT_GRANULARITY

    @field_validator("slot_granularity")
    @classmethod
    def validate_granularity(cls, value: int) -> int:
        """Ensure the slot step is positive."""
        if value <= 0:
            raise ValueError(f"slot_granularity must be greater than zero, got {value}")
        return value

    @field_validator("open_weekdays")
    @classmethod
    def validate_weekdays(cls, value: List[str | int]) -> List[str | int]:
        """Ensure every entry names a weekday."""
        for day in value:
            Weekday.parse(day)
        return value

    def to_rules(self) -> AvailabilityRules:
        """
        Convert into immutable domain rules.

        Raises:
            InvalidConfiguration: if the hours are malformed or inconsistent
        """
        return AvailabilityRules.from_config(
            open_time=self.open_time,
            close_time=self.close_time,
            lunch_start=self.lunch_start,
            lunch_end=self.lunch_end,
            weekdays=self.open_weekdays,
            slot_granularity=self.slot_granularity,
        )


class Professional(BaseModel):
    """Professional (barber) who takes bookings."""
    id: str
    name: str

    def display_name(self) -> str:
        return self.name


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "America/Sao_Paulo"
    horizon_days: int = 15
    locale: str = "pt_br"
    date_format: str = "dddd, DD [de] MMMM"
    bookings_file: Path = Path("bookings.json")
    business_hours: BusinessHoursConfig = Field(default_factory=BusinessHoursConfig)
    professionals: List[Professional] = Field(default_factory=list)

    @field_validator("horizon_days")
    @classmethod
    def validate_horizon(cls, value: int) -> int:
        """Ensure the booking horizon is not negative."""
        if value < 0:
            raise ValueError(f"horizon_days must not be negative, got {value}")
        return value

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("professionals")
    @classmethod
    def validate_professionals(cls, value: List[Professional]) -> List[Professional]:
        """Ensure professional ids are unique."""
        seen_ids: set[str] = set()
        for professional in value:
            key = professional.id.lower()
            if key in seen_ids:
                raise ValueError(f"Duplicate professional id detected: {professional.id}")
            seen_ids.add(key)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        A relative ``bookings_file`` is resolved against the config file's
        directory.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        if not config.bookings_file.is_absolute():
            config.bookings_file = config_path.parent / config.bookings_file
        return config

    def find_professional(self, identifier: str) -> Professional | None:
        """Find a professional by id or name (case-insensitive)."""
        key = identifier.lower()
        for professional in self.professionals:
            if professional.id.lower() == key or professional.name.lower() == key:
                return professional
        return None

    def resolve_professional(self, identifier: str) -> str:
        """
        Resolve a professional id or name to its id.

        Raises:
            ValueError: If identifier cannot be resolved
        """
        professional = self.find_professional(identifier)
        if professional:
            return professional.id

        raise ValueError(
            f"Unknown professional: '{identifier}'. "
            f"Use an id or name from the configuration."
        )


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
