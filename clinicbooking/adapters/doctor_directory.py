"""
Doctor directories: read-only lookup tables of doctor records.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List

from pydantic import ValidationError

from ..config import ClinicConfig, DoctorConfig, WorkingHoursConfig
from ..domain.exceptions import DoctorNotFound

logger = logging.getLogger(__name__)


SAMPLE_DATA_FILE = Path(__file__).parent / "sample_doctors.json"


class StaticDoctorDirectory:
    """
    In-memory doctor lookup keyed by id.

    Doctors without their own working hours get the default working hours.
    """

    def __init__(
        self,
        doctors: Iterable[DoctorConfig],
        default_working_hours: WorkingHoursConfig | None = None
    ):
        default_working_hours = default_working_hours or WorkingHoursConfig()
        self._doctors: Dict[str, DoctorConfig] = {}

        for doctor in doctors:
            self._doctors[doctor.id] = doctor.model_copy(
                update={"working_hours": doctor.working_hours_or(default_working_hours)}
            )

    async def get_doctor(self, doctor_id: str) -> DoctorConfig:
        """
        Look up a doctor by id.

        Raises:
            DoctorNotFound: If the directory has no such doctor
        """
        try:
            doctor = self._doctors[doctor_id]
        except KeyError:
            raise DoctorNotFound(f"Unknown doctor id: '{doctor_id}'") from None

        logger.debug("Resolved doctor %s (%s)", doctor_id, doctor.name)
        return doctor

    def list_doctors(self) -> List[DoctorConfig]:
        """Get all doctors in directory order."""
        return list(self._doctors.values())


class ConfigDoctorDirectory(StaticDoctorDirectory):
    """
    Directory backed by the doctors listed in the clinic configuration.
    """

    def __init__(self, config: ClinicConfig):
        doctors = [
            doctor.model_copy(update={"working_hours": config.working_hours_for(doctor)})
            for doctor in config.doctors
        ]
        super().__init__(doctors, default_working_hours=config.working_hours)


class SampleDoctorDirectory(StaticDoctorDirectory):
    """
    Directory backed by bundled sample doctor records.

    This directory loads realistic doctor data from sample_doctors.json
    so the booking view can be tried without writing a configuration.
    """

    def __init__(
        self,
        data_file: Path | None = None,
        default_working_hours: WorkingHoursConfig | None = None
    ):
        """
        Initialize the sample directory.

        Args:
            data_file: Optional path to a JSON list of doctor records
            default_working_hours: Hours for records without their own
        """
        self.data_file = data_file or SAMPLE_DATA_FILE
        super().__init__(self._load_doctors(), default_working_hours=default_working_hours)

    def _load_doctors(self) -> List[DoctorConfig]:
        """Load doctor records from the JSON file."""
        if not self.data_file.exists():
            raise FileNotFoundError(f"Sample doctor data not found: {self.data_file}")

        with open(self.data_file, "r", encoding="utf-8") as f:
            records = json.load(f)

        doctors: List[DoctorConfig] = []
        for record in records:
            try:
                doctors.append(DoctorConfig(**record))
            except (TypeError, ValidationError) as exc:
                # Skip invalid records
                logger.warning("Skipping invalid doctor record in %s: %s", self.data_file, exc)

        return doctors
