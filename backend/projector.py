# Result projection - which clinics are visible for the current filters
from typing import Iterable, List

from filters import FilterSet, check_key
from matcher import matches
from models import Clinic

# Filter key -> canonical clinic attribute
FIELD_FOR_KEY = {
    "clinicId": "clinicCode",
    "clinicName": "name",
    "doctorName": "doctorName",
    "address": "address",
    "phone": "phone",
}

# Columns searched by the free-text box
SEARCH_FIELDS = ("name", "phone", "clinicCode", "doctorName", "address")


def clinic_field_text(clinic: Clinic, key: str) -> str:
    """Lower-cased text of the clinic field behind a filter key"""
    if check_key(key) == "services":
        return " ".join(clinic.service_labels()).lower()
    return (getattr(clinic, FIELD_FOR_KEY[key], "") or "").lower()


def project(clinics: Iterable[Clinic], filters: FilterSet) -> List[Clinic]:
    """Clinics for which every active filter is a substring of its field (AND)"""
    active = filters.active()
    return [
        clinic for clinic in clinics
        if all(matches(clinic_field_text(clinic, key), value) for key, value in active)
    ]


def search_text_matches(clinic: Clinic, term: str) -> bool:
    """Free-text search: term found in any searchable column or service label"""
    term = (term or "").strip()
    if not term:
        return True
    if any(matches(getattr(clinic, f, ""), term) for f in SEARCH_FIELDS):
        return True
    return any(matches(label, term) for label in clinic.service_labels())
