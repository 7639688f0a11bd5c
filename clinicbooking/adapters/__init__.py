"""
Adapters layer - Sources of doctor records.
"""

from .doctor_directory import ConfigDoctorDirectory, SampleDoctorDirectory, StaticDoctorDirectory

__all__ = ["ConfigDoctorDirectory", "SampleDoctorDirectory", "StaticDoctorDirectory"]
