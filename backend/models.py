# In-memory data models - canonical clinic record
from typing import Any, Dict, List, Mapping, Optional, Union
from dataclasses import dataclass, field
import uuid

# A service arrives either as a plain label or as {"name": label}
Service = Union[str, Dict[str, Any]]

# In-memory storage
clinics: List['Clinic'] = []

@dataclass
class Clinic:
    """Clinic record in its canonical (client) naming"""
    id: str
    clinicCode: str = ""
    name: str = ""
    doctorName: str = ""
    address: str = ""
    phone: str = ""
    services: List[Service] = field(default_factory=list)

    def service_labels(self) -> List[str]:
        return [service_label(s) for s in self.services]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "clinicCode": self.clinicCode,
            "name": self.name,
            "doctorName": self.doctorName,
            "address": self.address,
            "phone": self.phone,
            "services": self.service_labels(),
        }

def service_label(service: Any) -> str:
    """Display label of a service, whichever shape it arrives in"""
    if service is None:
        return ""
    if isinstance(service, str):
        return service
    if isinstance(service, Mapping):
        return str(service.get("name") or "")
    return str(service)

def _first(raw: Mapping, *names: str) -> str:
    """Read the first present, non-null field; server naming is listed first"""
    for name in names:
        value = raw.get(name)
        if value is not None:
            return str(value)
    return ""

def split_services(value: Any) -> List[Service]:
    """Services as a list; a comma separated string is split into labels"""
    if value is None:
        return []
    if isinstance(value, str):
        return [s.strip() for s in value.split(",") if s.strip()]
    return list(value)

def normalize_clinic(raw: Mapping, clinic_id: Optional[str] = None) -> Clinic:
    """
    Build a canonical Clinic from a record in either naming convention.
    Prefers clinic_code/doctor_name, falls back to clinicCode/doctorName.
    """
    return Clinic(
        id=clinic_id or _first(raw, "id") or uuid.uuid4().hex,
        clinicCode=_first(raw, "clinic_code", "clinicCode", "clinicId", "clinic_id"),
        name=_first(raw, "name"),
        doctorName=_first(raw, "doctor_name", "doctorName"),
        address=_first(raw, "address"),
        phone=_first(raw, "phone"),
        services=split_services(raw.get("services")),
    )
