# Seed data - a small directory mixing both record namings and service shapes
import logging

from models import clinics, normalize_clinic

logger = logging.getLogger(__name__)

# Raw records as the clinic API returns them; some use server naming
# (clinic_code / doctor_name), some client naming, some service objects.
SEED_RECORDS = [
    {
        "id": "1",
        "clinic_code": "CLIN-001",
        "name": "Downtown Health Clinic",
        "doctor_name": "Dr. John Smith",
        "address": "123 Main St, Springfield, IL 62701",
        "phone": "(555) 123-4567",
        "services": ["General Checkup", "Dental", "Lab Tests"],
    },
    {
        "id": "2",
        "clinicCode": "CLIN-002",
        "name": "Uptown Family Practice",
        "doctorName": "Dr. Maria Chen",
        "address": "48 Oak Ave, Springfield, IL 62702",
        "phone": "(555) 987-6543",
        "services": [{"name": "Pediatrics"}, {"name": "Vaccinations"}],
    },
    {
        "id": "3",
        "clinic_code": "CLIN-003",
        "name": "Riverside Cardiology",
        "doctor_name": "Dr. Alex Rivera",
        "address": "9 River Rd, Shelbyville, IL 62565",
        "phone": "(555) 246-8100",
        "services": ["Cardiology", {"name": "ECG"}],
    },
    {
        "id": "4",
        "clinicCode": "CLIN-004",
        "name": "Lakeside Dental Care",
        "doctorName": "Dr. Priya Patel",
        "address": "77 Lake Shore Dr, Springfield, IL 62704",
        "phone": "(555) 135-7924",
        "services": "Dental, Orthodontics",
    },
]

def seed_data():
    """Reset the in-memory store to the seed clinics"""
    clinics.clear()
    clinics.extend(normalize_clinic(record) for record in SEED_RECORDS)
    logger.info("Seed data initialized: %d clinics (%s)",
                len(clinics), ", ".join(c.clinicCode for c in clinics))

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_data()
