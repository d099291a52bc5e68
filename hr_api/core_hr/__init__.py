"""Core HR module: Company, Department, Employee models, schemas and services."""

from hr_api.core_hr.models import Company, Department, Employee

__all__ = ["Company", "Department", "Employee"]
