"""
Shared fixtures: sample extracts and records.
"""

import pytest

from nibrs.core.logging import configure_logging
from nibrs.ir.schema import (
    Administrative,
    NibrsSegments,
    Offender,
    Offense,
    Property,
    Victim,
)
from nibrs.policy import loader as policy_loader
from nibrs.templates import registry as template_registry


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep test output readable."""
    configure_logging(level="silent", force=True)


@pytest.fixture
def fresh_caches():
    """Drop cached rulesets and templates before and after a test."""
    policy_loader.clear_cache()
    template_registry.clear_cache()
    yield
    policy_loader.clear_cache()
    template_registry.clear_cache()


# ============================================================================
# Extracts
# ============================================================================

@pytest.fixture
def drug_extract():
    """Marijuana found during a traffic stop; no arrest."""
    return {
        "incidentNumber": "24-000101",
        "incidentDate": "2024-03-14",
        "offenses": [{"description": "Possession of marijuana"}],
        "locationDescription": "parking lot",
        "offenders": [{"age": 24, "sex": "male"}],
        "narrative": (
            "During a traffic stop officers found 28 grams of marijuana "
            "in the center console."
        ),
    }


@pytest.fixture
def assault_arrest_extract():
    """Assault at a residence ending in a custodial arrest."""
    return {
        "incidentNumber": "24-000102",
        "incidentDate": "2024-04-02",
        "offenses": [{"description": "Simple assault"}],
        "locationDescription": "single family home",
        "victims": [{"type": "individual", "age": 31, "sex": "female", "injury": "bruising"}],
        "offenders": [{"age": 35, "sex": "male", "relationshipDescription": "boyfriend"}],
        "narrative": (
            "The victim reported that her boyfriend punched her during an argument. "
            "The suspect was taken into custody."
        ),
    }


@pytest.fixture
def traffic_extract():
    """A bare rear-end collision; nothing reportable."""
    return {
        "incidentNumber": "24-000103",
        "incidentDate": "2024-05-20",
        "offenses": [{"description": "Vehicle was rear-ended at a stop light"}],
        "narrative": "The reporting party's vehicle was rear-ended at a stop light. Bumper damage only.",
    }


# ============================================================================
# Records
# ============================================================================

@pytest.fixture
def theft_segments():
    """A complete, valid larceny record."""
    return NibrsSegments(
        administrative=Administrative(incident_number="24-000200", incident_date="2024-06-01"),
        offenses=[Offense(code="23H", description="theft of a bicycle", confidence=0.9)],
        victims=[Victim(victim_type="I", age=40, sex="M", race="W", ethnicity="N")],
        offenders=[Offender(age=19, sex="M", race="U", ethnicity="U", relationship_to_victim="ST")],
        properties=[
            Property(description_code="04", description="bicycle", loss_type="7", value=350.0)
        ],
        location_code="20",
        narrative="A bicycle valued at $350 was stolen from the victim's front yard.",
    )


@pytest.fixture
def drug_segments():
    """A drug possession record with a Society victim."""
    return NibrsSegments(
        administrative=Administrative(incident_number="24-000201", incident_date="2024-06-02"),
        offenses=[Offense(code="35A", description="possession of marijuana", confidence=0.9)],
        victims=[Victim(victim_type="S")],
        offenders=[Offender(age=22, sex="F")],
        properties=[
            Property(
                description_code="10",
                description="marijuana",
                loss_type="6",
                seized=True,
                value=50.0,
                suspected_drug_type="E",
                drug_quantity=14.0,
                drug_measurement="GM",
            )
        ],
        location_code="13",
        narrative="Officers seized 14 grams of marijuana during a traffic stop.",
    )
