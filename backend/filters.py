# Filter store primitives - fixed filter keys, committed values, summary text
from typing import Dict, List, Optional, Tuple

from errors import UnknownFilterKey

# Declaration order drives the summary and highlight term order
FILTER_KEYS: Tuple[str, ...] = (
    "clinicId",
    "clinicName",
    "doctorName",
    "address",
    "phone",
    "services",
)

FILTER_LABELS: Dict[str, str] = {
    "clinicId": "Clinic ID",
    "clinicName": "Clinic Name",
    "doctorName": "Doctor",
    "address": "Address",
    "phone": "Phone",
    "services": "Services",
}


def check_key(key: str) -> str:
    if key not in FILTER_LABELS:
        raise UnknownFilterKey(key)
    return key


class FilterSet:
    """Committed value of every filterable field; "" means inactive."""

    def __init__(self, **values: str):
        self._values: Dict[str, str] = {key: "" for key in FILTER_KEYS}
        for key, value in values.items():
            self.set(key, value)

    def get(self, key: str) -> str:
        return self._values[check_key(key)]

    def set(self, key: str, value: Optional[str]) -> str:
        """Store the trimmed value, returns what was stored"""
        self._values[check_key(key)] = (value or "").strip()
        return self._values[key]

    def clear(self, key: str) -> None:
        self._values[check_key(key)] = ""

    def clear_all(self) -> None:
        for key in FILTER_KEYS:
            self._values[key] = ""

    def values(self) -> Dict[str, str]:
        return {key: self._values[key] for key in FILTER_KEYS}

    def active(self) -> List[Tuple[str, str]]:
        return [(key, self._values[key]) for key in FILTER_KEYS if self._values[key]]

    def is_empty(self) -> bool:
        return not self.active()

    def __getitem__(self, key: str) -> str:
        return self.get(key)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FilterSet):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"FilterSet({self.active()!r})"


def search_summary(filters: FilterSet) -> str:
    """Human-readable description of the active filters, e.g. 'Phone: 555; Services: dent'"""
    return "; ".join(f"{FILTER_LABELS[key]}: {value}" for key, value in filters.active())


def active_terms(filters: FilterSet, free_text: Optional[str] = "") -> List[str]:
    """
    Terms eligible for highlighting: the active filter values in key order,
    or the trimmed free-text search when no filter is active.
    """
    terms = [value for _key, value in filters.active()]
    if terms:
        return terms
    free_text = (free_text or "").strip()
    return [free_text] if free_text else []
