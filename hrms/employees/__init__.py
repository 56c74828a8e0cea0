"""Employees module — Employee model, directory lookups and onboarding."""

from hrms.employees.models import Employee

__all__ = ["Employee"]
