"""
State E-Filing Portal Catalog
=============================

Reference data for state e-filing portals and the document types each one
accepts. Records are kept in the same camelCase shape the portals publish
and validated into pydantic models at import time.

The filing engine never reads this module; it is the default reference
data provider for the API layer.
"""

import logging
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import Field, ValidationError

from .exceptions import ReferenceDataError, UnknownDocumentTypeError, UnknownPortalError
from .models import DocumentTypeDefinition, ReferenceModel

logger = logging.getLogger(__name__)


# =============================================================================
# Models
# =============================================================================

class PortalStatus(str, Enum):
    ACTIVE = "active"
    LIMITED = "limited"
    PLANNED = "planned"
    UNAVAILABLE = "unavailable"


class PortalFeature(ReferenceModel):
    name: str
    available: bool = True
    description: str = ""
    limitations: List[str] = Field(default_factory=list)


class RegistrationRequirement(ReferenceModel):
    """Something a filer must have or do before registering on a portal."""
    type: str  # document, verification, payment, training
    name: str
    description: str = ""
    required: bool = True
    cost: float = 0.0
    processing_time: str = ""


class AdditionalFee(ReferenceModel):
    name: str
    amount: float
    description: str = ""
    when_required: str = ""


class FeeStructure(ReferenceModel):
    base_filing_fee: float = 0.0
    additional_fees: List[AdditionalFee] = Field(default_factory=list)
    payment_methods: List[str] = Field(default_factory=list)
    fee_waiver_available: bool = False
    fee_waiver_requirements: List[str] = Field(default_factory=list)


class EFilePortal(ReferenceModel):
    """A state's e-filing portal."""
    id: str
    state: str
    state_name: str
    portal_name: str
    url: str
    registration_url: str = ""
    support_phone: str = ""
    support_email: str = ""
    support_hours: str = ""
    status: PortalStatus = PortalStatus.ACTIVE
    last_updated: str = ""
    features: List[PortalFeature] = Field(default_factory=list)
    requirements: List[RegistrationRequirement] = Field(default_factory=list)
    document_types: List[DocumentTypeDefinition] = Field(default_factory=list)
    fees: FeeStructure = Field(default_factory=FeeStructure)
    restrictions: List[str] = Field(default_factory=list)
    notes: str = ""

    def has_feature(self, name: str) -> bool:
        """Case-insensitive substring match on feature names."""
        needle = name.lower()
        return any(needle in feature.name.lower() for feature in self.features)


# =============================================================================
# Reference Data
# =============================================================================

def _case_number_field(help_text: str, pattern: bool = False) -> Dict[str, Any]:
    validation = [{"type": "required", "message": "Case number is required"}]
    if pattern:
        validation.append({
            "type": "pattern",
            "message": "Must be in format: XX-XXXXXX",
            "condition": r"^[A-Z]{2}-\d{6}$",
        })
    return {
        "name": "caseNumber",
        "label": "Case Number",
        "type": "text",
        "required": True,
        "maxLength": 20,
        "helpText": help_text,
        "validation": validation,
    }


def _name_field(name: str, label: str, help_text: str) -> Dict[str, Any]:
    return {
        "name": name,
        "label": label,
        "type": "text",
        "required": True,
        "maxLength": 100,
        "helpText": help_text,
        "validation": [{"type": "required", "message": f"{label[0]}{label[1:].lower()} is required"}],
    }


RELIEF_SOUGHT_FIELD = {
    "name": "reliefSought",
    "label": "Relief Sought",
    "type": "textarea",
    "required": True,
    "maxLength": 1000,
    "helpText": "Describe what you are asking the court to do",
    "validation": [{"type": "required", "message": "Relief sought is required"}],
}

GOVERNMENT_ID = {
    "type": "document",
    "name": "Government ID",
    "required": True,
    "cost": 0,
    "processingTime": "Immediate",
}

EMAIL_VERIFICATION = {
    "type": "verification",
    "name": "Email Verification",
    "description": "Valid email address for account activation",
    "required": True,
    "cost": 0,
    "processingTime": "Immediate",
}

NO_FEES = {
    "baseFilingFee": 0,
    "additionalFees": [],
    "paymentMethods": ["No payment required"],
    "feeWaiverAvailable": False,
}

CARD_PAYMENTS = ["Credit Card", "Debit Card", "E-Check"]

ATTORNEY_ONLY = "Some document types require attorney filing"
COMPLEX_CASES = "Complex cases may require paper filing"


PORTAL_RECORDS: List[Dict[str, Any]] = [
    {
        "id": "ca-efile",
        "state": "CA",
        "stateName": "California",
        "portalName": "File & Serve",
        "url": "https://www.fileandserve.com/",
        "registrationUrl": "https://www.fileandserve.com/register",
        "supportPhone": "(800) 818-5664",
        "supportEmail": "support@fileandserve.com",
        "supportHours": "Monday-Friday 6:00 AM - 6:00 PM PST",
        "status": "active",
        "lastUpdated": "2025-01-01",
        "features": [
            {
                "name": "Family Law E-Filing",
                "description": "Full e-filing support for family law cases",
                "limitations": ["Some rural counties may require paper filing"],
            },
            {"name": "Document Templates", "description": "Pre-filled forms for common filings"},
            {"name": "Real-Time Status", "description": "Track document processing in real-time"},
            {
                "name": "Payment Processing",
                "description": "Credit card and e-check payments",
                "limitations": ["Some fees may require separate payment"],
            },
        ],
        "requirements": [
            {**GOVERNMENT_ID, "description": "Valid driver's license or passport"},
            EMAIL_VERIFICATION,
            {
                "type": "payment",
                "name": "Registration Fee",
                "description": "One-time account setup fee",
                "required": True,
                "cost": 25,
                "processingTime": "Immediate",
            },
        ],
        "documentTypes": [
            {
                "id": "ca-family-motion",
                "name": "Family Law Motion",
                "jurisdiction": "CA",
                "code": "FL-MOT",
                "category": "Family Law",
                "subcategory": "Motion",
                "requiredFields": [
                    _case_number_field(
                        "Enter the existing case number if this is a related filing",
                        pattern=True,
                    ),
                    {
                        "name": "partyNames",
                        "label": "Party Names",
                        "type": "textarea",
                        "required": True,
                        "maxLength": 500,
                        "helpText": "List all parties involved in the case",
                        "validation": [{"type": "required", "message": "Party names are required"}],
                    },
                    RELIEF_SOUGHT_FIELD,
                ],
                "optionalFields": [
                    {
                        "name": "attorneyInfo",
                        "label": "Attorney Information",
                        "type": "textarea",
                        "maxLength": 500,
                        "helpText": "If you have an attorney, include their contact information",
                    },
                ],
                "attachments": [
                    {
                        "type": "Supporting Documents",
                        "required": False,
                        "maxSize": "10MB",
                        "formats": ["PDF", "DOC", "DOCX"],
                        "description": "Any documents that support your motion",
                    },
                ],
                "fees": 435,
                "processingTime": "2-3 business days",
                "restrictions": ["Must be filed in appropriate county"],
                "examples": [
                    {
                        "name": "Sample Motion to Modify Custody",
                        "description": "Example of a completed motion form",
                        "url": "https://www.courts.ca.gov/forms/fam-200.pdf",
                    },
                ],
            },
            {
                "id": "ca-divorce-petition",
                "name": "Divorce Petition",
                "jurisdiction": "CA",
                "code": "FL-100",
                "category": "Family Law",
                "subcategory": "Divorce",
                "requiredFields": [
                    _name_field("petitionerName", "Petitioner Name", "Enter your full legal name"),
                    _name_field("respondentName", "Respondent Name", "Enter your spouse's full legal name"),
                    {
                        "name": "marriageDate",
                        "label": "Date of Marriage",
                        "type": "date",
                        "required": True,
                        "helpText": "Use MM/DD/YYYY",
                        "validation": [
                            {"type": "required", "message": "Date of marriage is required"},
                            {"type": "format", "message": "Enter a valid date"},
                            {"type": "custom", "message": "Date of marriage must be in the past",
                             "condition": "past_date"},
                        ],
                    },
                ],
                "optionalFields": [
                    {
                        "name": "childrenNames",
                        "label": "Children of the Marriage",
                        "type": "textarea",
                        "maxLength": 500,
                        "helpText": "Full names and birth dates of minor children",
                    },
                ],
                "attachments": [
                    {
                        "type": "Supporting Documents",
                        "required": False,
                        "maxSize": "10MB",
                        "formats": ["PDF"],
                        "description": "Marital settlement agreement or other supporting documents",
                    },
                ],
                "fees": 435,
                "processingTime": "2-3 business days",
                "restrictions": ["Must be filed in the county where either spouse resides"],
            },
            {
                "id": "ca-dv-restraining-order",
                "name": "Domestic Violence Restraining Order Request",
                "jurisdiction": "CA",
                "code": "DV-100",
                "category": "Family Law",
                "subcategory": "Restraining Order",
                "requiredFields": [
                    _name_field("petitionerName", "Petitioner Name", "Enter your full legal name"),
                    _name_field("respondentName", "Respondent Name",
                                "Enter the full legal name of the person you need protection from"),
                    {
                        "name": "incidentDate",
                        "label": "Incident Date",
                        "type": "date",
                        "required": True,
                        "helpText": "Date of the most recent incident",
                        "validation": [
                            {"type": "format", "message": "Enter a valid date"},
                            {"type": "custom", "message": "Incident date cannot be in the future",
                             "condition": "past_date"},
                        ],
                    },
                    {
                        "name": "incidentDetails",
                        "label": "Incident Details",
                        "type": "textarea",
                        "required": True,
                        "maxLength": 5000,
                        "helpText": "Describe what happened, when and where",
                        "validation": [{"type": "required", "message": "Incident details are required"}],
                    },
                ],
                "optionalFields": [
                    {
                        "name": "urgency",
                        "label": "Urgency",
                        "type": "select",
                        "options": ["standard", "emergency"],
                        "validation": [{"type": "format", "message": "Choose standard or emergency"}],
                    },
                    {
                        "name": "exParteJustification",
                        "label": "Emergency Justification",
                        "type": "textarea",
                        "maxLength": 2000,
                        "helpText": "Explain why you need orders before the other party is notified",
                    },
                ],
                "attachments": [
                    {
                        "type": "Declaration",
                        "required": True,
                        "maxSize": "10MB",
                        "formats": ["PDF"],
                        "description": "Signed declaration describing the abuse",
                    },
                ],
                "fees": 0,
                "processingTime": "Same day for emergency orders",
                "restrictions": ["Emergency orders are reviewed by a judge the same court day"],
            },
        ],
        "fees": {
            "baseFilingFee": 435,
            "additionalFees": [
                {
                    "name": "Motion Fee",
                    "amount": 60,
                    "description": "Additional fee for filing motions",
                    "whenRequired": "When filing any motion",
                },
                {
                    "name": "Ex Parte Fee",
                    "amount": 100,
                    "description": "Fee for emergency ex parte filings",
                    "whenRequired": "When filing ex parte applications",
                },
            ],
            "paymentMethods": CARD_PAYMENTS,
            "feeWaiverAvailable": True,
            "feeWaiverRequirements": ["Income below 125% of federal poverty level"],
        },
        "restrictions": [ATTORNEY_ONLY, COMPLEX_CASES, "Rural counties may have limited e-filing"],
        "notes": "Most family law cases can be filed electronically.",
    },
    {
        "id": "ny-efile",
        "state": "NY",
        "stateName": "New York",
        "portalName": "NYSCEF",
        "url": "https://iapps.courts.state.ny.us/nyscef/",
        "registrationUrl": "https://iapps.courts.state.ny.us/nyscef/registration",
        "supportPhone": "(855) 268-7861",
        "supportEmail": "nyscef@nycourts.gov",
        "supportHours": "Monday-Friday 8:30 AM - 4:30 PM EST",
        "status": "active",
        "lastUpdated": "2025-01-01",
        "features": [
            {
                "name": "Statewide E-Filing",
                "description": "E-filing available in all NY counties",
                "limitations": ["Some specialized courts may require paper filing"],
            },
            {"name": "Document Management", "description": "Store and organize case documents"},
            {"name": "Service Tracking", "description": "Track document service to other parties"},
        ],
        "requirements": [
            {
                "type": "document",
                "name": "Attorney Registration",
                "description": "Must be registered with NY State Bar",
                "processingTime": "2-3 business days",
            },
            {
                "type": "training",
                "name": "NYSCEF Training",
                "description": "Complete mandatory e-filing training",
                "processingTime": "1-2 hours",
            },
        ],
        "documentTypes": [
            {
                "id": "ny-family-petition",
                "name": "Family Court Petition",
                "jurisdiction": "NY",
                "code": "FC-PET",
                "category": "Family Court",
                "subcategory": "Petition",
                "requiredFields": [
                    _name_field("petitionerName", "Petitioner Name", "Enter your full legal name"),
                ],
                "optionalFields": [],
                "attachments": [
                    {
                        "type": "Supporting Affidavits",
                        "required": True,
                        "maxSize": "25MB",
                        "formats": ["PDF"],
                        "description": "Required supporting documentation",
                    },
                ],
                "fees": 0,
                "processingTime": "1-2 business days",
                "restrictions": ["Family court filings are free"],
            },
        ],
        "fees": NO_FEES,
        "restrictions": ["Pro se litigants must complete training", ATTORNEY_ONLY, COMPLEX_CASES],
        "notes": "Pro se litigants can use the system after completing training.",
    },
    {
        "id": "tx-efile",
        "state": "TX",
        "stateName": "Texas",
        "portalName": "eFileTexas",
        "url": "https://efile.txcourts.gov/",
        "registrationUrl": "https://efile.txcourts.gov/register",
        "supportPhone": "(855) 839-3453",
        "supportEmail": "support@efile.txcourts.gov",
        "supportHours": "Monday-Friday 7:00 AM - 6:00 PM CST",
        "status": "active",
        "lastUpdated": "2025-01-01",
        "features": [
            {
                "name": "Statewide E-Filing",
                "description": "E-filing available in all Texas counties",
                "limitations": ["Some rural counties may have limited features"],
            },
            {"name": "Document Templates", "description": "Pre-filled forms for common filings"},
            {"name": "Payment Processing", "description": "Credit card and e-check payments"},
        ],
        "requirements": [
            {**GOVERNMENT_ID, "description": "Valid Texas driver's license or ID"},
            EMAIL_VERIFICATION,
        ],
        "documentTypes": [
            {
                "id": "tx-family-motion",
                "name": "Family Law Motion",
                "jurisdiction": "TX",
                "code": "FL-MOT",
                "category": "Family Law",
                "subcategory": "Motion",
                "requiredFields": [_case_number_field("Enter the existing case number")],
                "optionalFields": [],
                "attachments": [
                    {
                        "type": "Supporting Documents",
                        "required": False,
                        "maxSize": "50MB",
                        "formats": ["PDF"],
                        "description": "Any documents that support your motion",
                    },
                ],
                "fees": 0,
                "processingTime": "1-2 business days",
                "restrictions": ["Family law filings are generally free"],
            },
        ],
        "fees": NO_FEES,
        "restrictions": ["Most family law filings are free", ATTORNEY_ONLY, COMPLEX_CASES],
        "notes": "No fees for most family law filings.",
    },
    {
        "id": "fl-efile",
        "state": "FL",
        "stateName": "Florida",
        "portalName": "Florida Courts E-Filing Portal",
        "url": "https://www.myflcourtaccess.com/",
        "registrationUrl": "https://www.myflcourtaccess.com/registration",
        "supportPhone": "(850) 414-7722",
        "supportEmail": "support@myflcourtaccess.com",
        "supportHours": "Monday-Friday 8:00 AM - 5:00 PM EST",
        "status": "active",
        "lastUpdated": "2025-01-01",
        "features": [
            {
                "name": "Statewide E-Filing",
                "description": "E-filing available in all FL counties",
                "limitations": ["Some rural counties may have limited support"],
            },
            {"name": "Document Templates", "description": "Pre-filled forms for common filings"},
            {"name": "Real-Time Status", "description": "Track document processing in real-time"},
            {"name": "Payment Processing", "description": "Credit card and e-check payments"},
        ],
        "requirements": [
            {**GOVERNMENT_ID, "description": "Valid Florida driver's license or ID"},
            EMAIL_VERIFICATION,
        ],
        "documentTypes": [
            {
                "id": "fl-family-petition",
                "name": "Family Law Petition",
                "jurisdiction": "FL",
                "code": "FL-PET",
                "category": "Family Law",
                "subcategory": "Petition",
                "requiredFields": [
                    _name_field("petitionerName", "Petitioner Name", "Enter your full legal name"),
                    _name_field("respondentName", "Respondent Name", "Enter the other party's full legal name"),
                ],
                "optionalFields": [],
                "attachments": [
                    {
                        "type": "Supporting Documents",
                        "required": False,
                        "maxSize": "25MB",
                        "formats": ["PDF"],
                        "description": "Any documents that support your petition",
                    },
                ],
                "fees": 409,
                "processingTime": "1-2 business days",
                "restrictions": ["Must be filed in appropriate county"],
            },
        ],
        "fees": {
            "baseFilingFee": 409,
            "additionalFees": [
                {
                    "name": "Motion Fee",
                    "amount": 100,
                    "description": "Additional fee for filing motions",
                    "whenRequired": "When filing any motion",
                },
            ],
            "paymentMethods": CARD_PAYMENTS,
            "feeWaiverAvailable": True,
            "feeWaiverRequirements": ["Income below 200% of federal poverty level"],
        },
        "restrictions": [ATTORNEY_ONLY, COMPLEX_CASES, "Rural counties may have limited e-filing"],
        "notes": "Most filings can be completed electronically.",
    },
    {
        "id": "il-efile",
        "state": "IL",
        "stateName": "Illinois",
        "portalName": "eFileIL",
        "url": "https://www.efile.illinoiscourts.gov/",
        "registrationUrl": "https://www.efile.illinoiscourts.gov/register",
        "supportPhone": "(217) 782-5180",
        "supportEmail": "support@efile.illinoiscourts.gov",
        "supportHours": "Monday-Friday 8:30 AM - 4:30 PM CST",
        "status": "active",
        "lastUpdated": "2025-01-01",
        "features": [
            {
                "name": "Statewide E-Filing",
                "description": "E-filing available in all IL counties",
                "limitations": ["Some specialized courts may require paper filing"],
            },
            {"name": "Document Templates", "description": "Pre-filled forms for common filings"},
            {"name": "Real-Time Status", "description": "Track document processing in real-time"},
            {"name": "Payment Processing", "description": "Credit card and e-check payments"},
        ],
        "requirements": [
            {**GOVERNMENT_ID, "description": "Valid Illinois driver's license or ID"},
            EMAIL_VERIFICATION,
        ],
        "documentTypes": [
            {
                "id": "il-family-motion",
                "name": "Family Law Motion",
                "jurisdiction": "IL",
                "code": "FL-MOT",
                "category": "Family Law",
                "subcategory": "Motion",
                "requiredFields": [
                    _case_number_field("Enter the existing case number"),
                    RELIEF_SOUGHT_FIELD,
                ],
                "optionalFields": [],
                "attachments": [
                    {
                        "type": "Supporting Documents",
                        "required": False,
                        "maxSize": "25MB",
                        "formats": ["PDF"],
                        "description": "Any documents that support your motion",
                    },
                ],
                "fees": 0,
                "processingTime": "1-2 business days",
                "restrictions": ["Family law motions are generally free"],
            },
        ],
        "fees": NO_FEES,
        "restrictions": ["Most family law filings are free", ATTORNEY_ONLY, COMPLEX_CASES],
        "notes": "Designed with pro se litigants in mind.",
    },
]


# =============================================================================
# Loading
# =============================================================================

def load_portals(records: Iterable[Mapping[str, Any]]) -> List[EFilePortal]:
    """
    Validate raw portal records.

    Raises:
        ReferenceDataError: A record is malformed, or a state or document
            type id appears twice
    """
    portals: List[EFilePortal] = []
    seen_states: set = set()
    seen_doc_types: set = set()

    for index, record in enumerate(records):
        try:
            portal = EFilePortal.model_validate(record)
        except ValidationError as e:
            label = record.get("id", f"#{index}") if isinstance(record, Mapping) else f"#{index}"
            raise ReferenceDataError(f"Invalid portal record {label}: {e}") from e

        state = portal.state.upper()
        if state in seen_states:
            raise ReferenceDataError(f"Duplicate portal for state: {state}")
        seen_states.add(state)

        for doc_type in portal.document_types:
            if doc_type.id in seen_doc_types:
                raise ReferenceDataError(f"Duplicate document type id: {doc_type.id}")
            seen_doc_types.add(doc_type.id)

        portals.append(portal)

    logger.debug("Loaded %d portals, %d document types", len(portals), len(seen_doc_types))
    return portals


# =============================================================================
# Catalog
# =============================================================================

class PortalCatalog:
    """Lookup over a fixed set of portals."""

    def __init__(self, portals: List[EFilePortal]):
        self.portals = list(portals)
        self._by_state = {p.state.upper(): p for p in self.portals}
        self._doc_types: Dict[str, DocumentTypeDefinition] = {}
        self._portal_by_doc_type: Dict[str, EFilePortal] = {}
        for portal in self.portals:
            for doc_type in portal.document_types:
                self._doc_types[doc_type.id] = doc_type
                self._portal_by_doc_type[doc_type.id] = portal

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "PortalCatalog":
        return cls(load_portals(records))

    def get_portal_by_state(self, state_code: str) -> Optional[EFilePortal]:
        return self._by_state.get(state_code.strip().upper())

    def require_portal(self, state_code: str) -> EFilePortal:
        portal = self.get_portal_by_state(state_code)
        if portal is None:
            raise UnknownPortalError(state_code)
        return portal

    def get_active_portals(self) -> List[EFilePortal]:
        return self.get_portals_by_status(PortalStatus.ACTIVE)

    def get_portals_by_status(self, status: PortalStatus) -> List[EFilePortal]:
        return [p for p in self.portals if p.status == status]

    def get_portals_by_feature(self, feature_name: str) -> List[EFilePortal]:
        return [p for p in self.portals if p.has_feature(feature_name)]

    def all_document_types(self) -> List[DocumentTypeDefinition]:
        return list(self._doc_types.values())

    def get_document_type(self, doc_type_id: str) -> DocumentTypeDefinition:
        try:
            return self._doc_types[doc_type_id]
        except KeyError:
            raise UnknownDocumentTypeError(doc_type_id) from None

    def get_portal_for_document_type(self, doc_type_id: str) -> EFilePortal:
        try:
            return self._portal_by_doc_type[doc_type_id]
        except KeyError:
            raise UnknownDocumentTypeError(doc_type_id) from None


@lru_cache
def get_portal_catalog() -> PortalCatalog:
    """
    Get the built-in portal catalog.
    Use dependency injection: Depends(get_portal_catalog)
    """
    return PortalCatalog.from_records(PORTAL_RECORDS)
