"""Tests for the departments, prescriptions, feedback and inventory stores."""

from datetime import date

import pytest

from medrecords.core.exceptions import OperationFailed
from medrecords.schemas import MedicalInventoryItem, PatientFeedback, PrescriptionItem


def test_departments_ordered_and_searchable(services, seeded):
    """Test department ordering and search over name and location."""
    store = services.departments

    names = [d.name for d in store.get_all()]
    assert names == ["Cardiology", "Neurology", "Orthopedics", "Pediatrics"]
    assert [d.name for d in store.search("building a")] == ["Cardiology", "Neurology"]
    assert store.count() == 4


def test_search_escapes_wildcards(services, seeded):
    """Test that LIKE wildcards in a query are matched literally."""
    assert services.departments.search("%") == []
    assert services.departments.search("_") == []


def test_prescription_lookups(services, seeded):
    """Test prescriptions by patient and doctor."""
    alice, bob = seeded["patients"][:2]
    smith = seeded["doctors"][0]

    by_patient = services.prescriptions.get_by_patient(alice)
    assert [p.prescription_date for p in by_patient] == [date(2023, 11, 1)]
    assert services.prescriptions.get_by_doctor(smith) == by_patient
    assert services.prescriptions.get_by_patient(bob) == []


def test_prescription_items(services, seeded):
    """Test item lookups and bulk delete by prescription."""
    store = services.prescription_items
    prescription = seeded["prescriptions"][0]
    aspirin, amoxicillin = seeded["inventory"][:2]

    added = store.add(
        PrescriptionItem(prescription_id=prescription, med_id=amoxicillin, dosage="2 tablets daily")
    )
    assert added is not None
    assert [i.dosage for i in store.get_by_medication(aspirin)] == ["1 tablet daily"]
    assert len(store.get_by_prescription(prescription)) == 2

    assert store.delete_by_prescription(prescription) is True
    assert store.get_by_prescription(prescription) == []


def test_feedback_queries(services, seeded):
    """Test feedback lookups and the average rating."""
    store = services.feedback
    alice, bob = seeded["patients"][:2]
    smith, davis = seeded["doctors"][:2]

    store.add(PatientFeedback(patient_id=bob, doctor_id=smith, rating=3, comments="Long wait."))

    assert [f.rating for f in store.get_all()] == [3, 5]
    assert [f.patient_id for f in store.get_by_rating(5)] == [alice]
    assert len(store.get_by_doctor(smith)) == 2
    assert store.average_rating_for_doctor(smith) == pytest.approx(4.0)
    assert store.average_rating_for_doctor(davis) == 0.0
    assert [f.comments for f in store.search("wait")] == ["Long wait."]


def test_inventory_quantity_and_alerts(services, seeded):
    """Test stock updates, low-stock and expiry reports."""
    store = services.inventory
    aspirin, amoxicillin, ibuprofen = seeded["inventory"]

    assert store.update_quantity(amoxicillin, 20) is True
    assert store.update_quantity(amoxicillin, -1) is False
    assert store.update_quantity(999, 5) is False

    assert [i.name for i in store.get_low_stock(100)] == ["Amoxicillin 500mg"]
    assert [i.name for i in store.get_expired(today=date(2025, 11, 1))] == [
        "Amoxicillin 500mg",
        "Ibuprofen 200mg",
    ]
    assert store.get_by_id(aspirin).quantity == 500
    assert store.get_by_id(ibuprofen).expiry_date == date(2025, 10, 15)


def test_inventory_defaults(services):
    """Test that a new item defaults to zero stock."""
    created = services.inventory.add(MedicalInventoryItem(name="Paracetamol 500mg"))

    stored = services.inventory.get_by_id(created.id)
    assert stored.quantity == 0
    assert stored.expiry_date is None


def test_read_failure_raises_operation_failed(services, engine):
    """Test that read-path storage errors are surfaced, not hidden as empty results."""
    with engine.begin() as conn:
        conn.exec_driver_sql("DROP TABLE medical_inventory")

    with pytest.raises(OperationFailed) as exc_info:
        services.inventory.get_all()

    assert "medical_inventory" not in exc_info.value.message
    assert services.pool.stats()["in_use"] == 0
