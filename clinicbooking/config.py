"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import WorkingHoursPolicy

logger = logging.getLogger(__name__)


class WorkingHoursConfig(BaseModel):
    """Opening hours and slot length of a doctor."""
    open_hour: int = 10
    close_hour: int = 21
    slot_duration_minutes: int = 30

    @field_validator("slot_duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure slot duration is positive."""
        if value <= 0:
            raise ValueError("slot_duration_minutes must be greater than zero")
        return value

    @field_validator("open_hour", "close_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @model_validator(mode="after")
    def validate_hours_order(self) -> "WorkingHoursConfig":
        """Ensure the clinic opens before it closes."""
        if self.close_hour <= self.open_hour:
            raise ValueError("close_hour must be later than open_hour")
        return self

    def to_policy(self) -> WorkingHoursPolicy:
        """Build the domain policy."""
        return WorkingHoursPolicy(
            open_hour=self.open_hour,
            close_hour=self.close_hour,
            slot_duration_minutes=self.slot_duration_minutes
        )


class DoctorConfig(BaseModel):
    """Doctor record as shown on the booking page."""
    id: str
    name: str
    degree: str = ""
    speciality: str = ""
    experience: str = ""  # Display label, e.g. "4 Years"
    about: str = ""
    fees: float = 0
    image: str = ""
    working_hours: Optional[WorkingHoursConfig] = None  # Falls back to the clinic default

    def working_hours_or(self, default: WorkingHoursConfig) -> WorkingHoursConfig:
        """Get the doctor's own working hours, or default when none are set."""
        return self.working_hours or default


class ClinicConfig(BaseModel):
    """Application configuration."""
    name: str = "Clinic"
    timezone: str = "UTC"
    currency_symbol: str = "$"
    label_format: str = "hh:mm A"
    window_days: int = 7
    working_hours: WorkingHoursConfig = Field(default_factory=WorkingHoursConfig)
    doctors: List[DoctorConfig] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("window_days")
    @classmethod
    def validate_window_days(cls, value: int) -> int:
        if value < 1:
            raise ValueError("window_days must be at least 1")
        return value

    @field_validator("doctors")
    @classmethod
    def validate_doctors(cls, value: List[DoctorConfig]) -> List[DoctorConfig]:
        """Ensure doctor ids are unique."""
        seen_ids: set[str] = set()
        for doctor in value:
            if doctor.id in seen_ids:
                raise ValueError(f"Duplicate doctor id detected: {doctor.id}")
            seen_ids.add(doctor.id)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "ClinicConfig":
        """
        Load the clinic configuration from a YAML file.

        An empty file yields the defaults.

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If the file is not valid YAML or fails validation
        """
        if not config_path.is_file():
            raise FileNotFoundError(
                f"Config file not found: {config_path} "
                f"(copy config.example.yaml to config.yaml to get started)"
            )

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if data is None:
            data = {}
        elif not isinstance(data, dict):
            raise ValueError(f"{config_path} must contain a mapping at the root level.")

        config = cls.model_validate(data)
        logger.debug("Loaded %d doctor(s) from %s", len(config.doctors), config_path)
        return config

    def working_hours_for(self, doctor: DoctorConfig) -> WorkingHoursConfig:
        """Get a doctor's own working hours or the clinic default."""
        return doctor.working_hours_or(self.working_hours)


CONFIG_ENV_VAR = "CLINICBOOKING_CONFIG"
CONFIG_FILE_NAME = "config.yaml"


def get_default_config_path() -> Path:
    """
    Resolve the config file: $CLINICBOOKING_CONFIG, then ./config.yaml,
    then config.yaml next to the package.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()

    candidates = [Path.cwd() / CONFIG_FILE_NAME, Path(__file__).parent.parent / CONFIG_FILE_NAME]
    for candidate in candidates:
        if candidate.is_file():
            return candidate

    # Reported as missing by load_from_yaml
    return candidates[0]
