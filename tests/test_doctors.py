"""Tests for doctors and their department view."""

from medrecords.schemas import Department, Doctor


def test_doctors_sorted_by_name(services, seeded):
    """Test that cached doctors come back in name order."""
    names = [d.name for d in services.doctors.get_all()]

    assert names == ["Emily Davis", "John Smith", "Michael Brown", "Sarah Wilson"]


def test_search_by_specialization(services, seeded):
    """Test in-memory search over name and specialization."""
    assert [d.name for d in services.doctors.search("pediatric")] == ["Sarah Wilson"]
    assert [d.name for d in services.doctors.search("SMITH")] == ["John Smith"]


def test_get_by_department_from_cache(services, seeded):
    """Test department lookup served from the snapshot."""
    neurology = seeded["departments"][1]

    assert [d.name for d in services.doctors.get_by_department(neurology)] == ["Emily Davis"]
    from_store = services.doctors.store.get_by_department(neurology)
    assert services.doctors.get_by_department(neurology) == from_store


def test_details_include_department_name(services, seeded):
    """Test the department outer join."""
    floating = services.doctors.add(Doctor(name="Zara Khan", specialization="Locum"))

    details = {d.name: d.department_name for d in services.doctors.store.get_all_with_department()}

    assert details["John Smith"] == "Cardiology"
    assert details["Michael Brown"] == "Orthopedics"
    assert floating is not None
    assert details["Zara Khan"] is None


def test_search_with_department(services, seeded):
    """Test store-side search that also matches department names."""
    results = services.doctors.store.search_with_department("neuro")

    assert [(d.name, d.department_name) for d in results] == [("Emily Davis", "Neurology")]


def test_doctor_update_reflected_after_reload(services, seeded):
    """Test that a successful update invalidates the cached snapshot."""
    smith = services.doctors.search("John Smith")[0]

    assert services.doctors.update(smith.model_copy(update={"specialization": "Cardiac Surgeon"}))

    assert services.doctors.is_dirty
    assert services.doctors.get_by_id(smith.id).specialization == "Cardiac Surgeon"


def test_delete_doctor_without_references(services):
    """Test deleting a doctor nobody refers to."""
    department = services.departments.add(Department(name="Radiology"))
    doctor = services.doctors.add(Doctor(name="Nina Patel", department_id=department.id))
    services.doctors.get_all()

    assert services.doctors.delete(doctor.id) is True

    assert services.doctors.get_all() == []
    assert services.doctors.delete(doctor.id) is False
