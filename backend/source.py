# Clinic data source - fetch, search and register clinics in the in-memory store
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from errors import ClinicValidationError, DataSourceError
from matcher import matches
from models import Clinic, clinics, normalize_clinic, service_label, split_services
from projector import search_text_matches

logger = logging.getLogger(__name__)

# Add-clinic form field -> (accepted payload names, message when blank)
REQUIRED_FIELDS = [
    ("clinicId", ("clinic_code", "clinicCode", "clinicId", "clinic_id"), "Clinic ID is required"),
    ("name", ("name",), "Clinic name is required"),
    ("doctorName", ("doctor_name", "doctorName"), "Doctor name is required"),
    ("address", ("address",), "Clinic address is required"),
    ("phone", ("phone",), "Phone number is required"),
]


def validate_clinic_payload(payload: Mapping[str, Any]) -> Dict[str, str]:
    """Per-field error messages for an add-clinic payload (empty when valid)"""
    errors: Dict[str, str] = {}
    for form_field, names, message in REQUIRED_FIELDS:
        value = next((payload[n] for n in names if payload.get(n) is not None), "")
        if not str(value).strip():
            errors[form_field] = message
    services = [s for s in split_services(payload.get("services")) if service_label(s).strip()]
    if not services:
        errors["services"] = "At least one service is required"
    return errors


class ClinicSource:
    """In-memory stand-in for the clinic API"""

    def __init__(self, store: Optional[List[Clinic]] = None):
        self.store = clinics if store is None else store
        self._pending_failure: Optional[str] = None

    def fail_next(self, message: str = "Failed to fetch clinics") -> None:
        """Make the next fetch or search raise DataSourceError"""
        self._pending_failure = message

    def _check_failure(self) -> None:
        if self._pending_failure is not None:
            message, self._pending_failure = self._pending_failure, None
            raise DataSourceError(message)

    def fetch_clinics(self, filters: Optional[Mapping[str, Any]] = None) -> List[Clinic]:
        """
        All clinics, or those matching server-side filters:
        name and phone by substring, services as a list of labels that must
        each appear in some service of the clinic.
        """
        self._check_failure()
        filters = filters or {}
        name = (filters.get("name") or "").strip()
        phone = (filters.get("phone") or "").strip()
        wanted = [s.strip() for s in split_services(filters.get("services")) if str(s).strip()]

        results = []
        for clinic in self.store:
            if not matches(clinic.name, name) or not matches(clinic.phone, phone):
                continue
            labels = clinic.service_labels()
            if not all(any(matches(label, w) for label in labels) for w in wanted):
                continue
            results.append(clinic)
        return results

    def search_clinics(self, term: str) -> List[Clinic]:
        self._check_failure()
        return [c for c in self.store if search_text_matches(c, term)]

    def add_clinic(self, payload: Mapping[str, Any]) -> Clinic:
        errors = validate_clinic_payload(payload)
        if errors:
            raise ClinicValidationError(errors)
        clinic = normalize_clinic(payload)
        clinic.clinicCode = clinic.clinicCode.strip()
        clinic.name = clinic.name.strip()
        clinic.doctorName = clinic.doctorName.strip()
        clinic.address = clinic.address.strip()
        clinic.phone = clinic.phone.strip()
        self.store.append(clinic)
        logger.info("Added clinic %s (%s)", clinic.clinicCode, clinic.name)
        return clinic
