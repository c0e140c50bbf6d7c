"""
Courtfile - Shared Test Fixtures
Provides reusable document types, engine components and an API client.
"""

import os
import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport

# Configure test environment BEFORE importing app
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENFORCE_ATTACHMENT_SIZE"] = "false"

from courtfile.main import app
from courtfile.services.filing import (
    AttachmentSpec,
    DocumentTypeDefinition,
    FieldSpec,
    FilingAssistant,
    ValidationRule,
)


# =============================================================================
# Core Fixtures
# =============================================================================

@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def assistant() -> FilingAssistant:
    """Assistant with default tuning."""
    return FilingAssistant()


# =============================================================================
# Document Type Fixtures
# =============================================================================

@pytest.fixture
def motion_type() -> DocumentTypeDefinition:
    """Family law motion with a case number, relief sought and optional attorney info."""
    return DocumentTypeDefinition(
        id="test-family-motion",
        name="Family Law Motion",
        jurisdiction="CA",
        code="FL-MOT",
        category="Family Law",
        subcategory="Motion",
        required_fields=[
            FieldSpec(
                name="caseNumber",
                label="Case Number",
                required=True,
                max_length=20,
                help_text="Enter the existing case number",
                validation=[
                    ValidationRule(type="required", message="Case number is required"),
                    ValidationRule(
                        type="pattern",
                        message="Must be in format: XX-XXXXXX",
                        condition=r"^[A-Z]{2}-\d{6}$",
                    ),
                ],
            ),
            FieldSpec(
                name="reliefSought",
                label="Relief Sought",
                type="textarea",
                required=True,
                max_length=1000,
                validation=[ValidationRule(type="required", message="Relief sought is required")],
            ),
        ],
        optional_fields=[
            FieldSpec(
                name="attorneyBarNumber",
                label="Attorney Bar Number",
                validation=[
                    ValidationRule(type="custom", message="Bar number must be 6-8 digits", condition="bar_number"),
                ],
            ),
        ],
        attachments=[
            AttachmentSpec(
                type="Supporting Documents",
                required=False,
                max_size="10MB",
                formats=["PDF", "DOC", "DOCX"],
            ),
        ],
        fees=435,
    )


@pytest.fixture
def divorce_type() -> DocumentTypeDefinition:
    return DocumentTypeDefinition(
        id="test-divorce-petition",
        name="Divorce Petition",
        jurisdiction="CA",
        category="Family Law",
        subcategory="Divorce",
        required_fields=[FieldSpec(name="petitionerName", label="Petitioner Name", required=True)],
        optional_fields=[],
        fees=435,
    )


@pytest.fixture
def restraining_order_type() -> DocumentTypeDefinition:
    """Free to file, requires a declaration, carries urgency/justification fields."""
    return DocumentTypeDefinition(
        id="test-dv-restraining-order",
        name="Domestic Violence Restraining Order Request",
        jurisdiction="CA",
        category="Family Law",
        subcategory="Restraining Order",
        required_fields=[
            FieldSpec(name="incidentDetails", label="Incident Details", type="textarea", required=True),
        ],
        optional_fields=[
            FieldSpec(
                name="urgency",
                label="Urgency",
                type="select",
                options=["standard", "emergency"],
                validation=[ValidationRule(type="format", message="Choose standard or emergency")],
            ),
            FieldSpec(name="exParteJustification", label="Emergency Justification", type="textarea"),
        ],
        attachments=[
            AttachmentSpec(type="Declaration", required=True, max_size="10MB", formats=["PDF"]),
        ],
        fees=0,
    )


@pytest.fixture
def long_incident_details() -> str:
    return (
        "On March 3, 2025 at about 9:30 PM the respondent came to my apartment at "
        "12 Elm Street, broke the front window and threatened me in front of my children."
    )
