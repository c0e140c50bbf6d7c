"""
Portal Registration Guides
==========================

Step-by-step instructions for signing up with a state e-filing portal,
with the usual problems filers hit and who to call about them.

Guides are keyed by state and point at their portal by id. When a portal
catalog is given at load time every guide must reference one of its portals.

Usage:
    guides = get_registration_guides()
    guide = guides.require_guide("ny")
    for step in guide.steps:
        print(step.order, step.title)
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import Field, ValidationError

from .exceptions import ReferenceDataError, UnknownRegistrationGuideError
from .models import ReferenceModel
from .portals import (
    EMAIL_VERIFICATION,
    GOVERNMENT_ID,
    PortalCatalog,
    RegistrationRequirement,
    get_portal_catalog,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Models
# =============================================================================

class SupportContact(ReferenceModel):
    name: str
    role: str = ""
    phone: str = ""
    email: str = ""
    hours: str = ""
    notes: str = ""


class CommonIssue(ReferenceModel):
    """A registration problem, how to fix it and how to avoid it."""
    problem: str
    solution: str
    prevention: str = ""
    support_contact: Optional[SupportContact] = None


class RegistrationStep(ReferenceModel):
    order: int
    title: str
    description: str = ""
    instructions: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class RegistrationGuide(ReferenceModel):
    """How to register with one state's e-filing portal."""
    state: str
    portal_id: str
    steps: List[RegistrationStep]
    requirements: List[RegistrationRequirement] = Field(default_factory=list)
    common_issues: List[CommonIssue] = Field(default_factory=list)
    support_contacts: List[SupportContact] = Field(default_factory=list)
    estimated_time: str = ""
    cost: float = 0.0


# =============================================================================
# Reference Data
# =============================================================================

def _portal_site_step(title: str, portal_name: str, url: str, browser_tips: bool = True) -> Dict[str, Any]:
    tips = (
        [
            "Use a modern browser (Chrome, Firefox, Safari, Edge)",
            "Ensure pop-up blockers are disabled",
            "Bookmark the site for future use",
        ]
        if browser_tips
        else ["Use a modern, secure browser", f"Bookmark the {portal_name} website"]
    )
    return {
        "order": 2,
        "title": title,
        "description": "Navigate to the official registration page",
        "instructions": [
            "Open your web browser",
            f"Go to: {url}",
            'Click "Register" or "Create Account"',
            'Select "Individual" or "Pro Se Litigant"',
        ],
        "tips": tips,
        "warnings": [
            f"Only use the official {portal_name} website",
            "Avoid third-party registration services",
        ],
    }


def _registration_form_step(order: int, password_rule: str) -> Dict[str, Any]:
    return {
        "order": order,
        "title": "Complete Registration Form",
        "description": "Fill out all required information accurately",
        "instructions": [
            "Enter your full legal name exactly as it appears on your ID",
            "Provide your current residential address",
            "Enter your phone number and email address",
            f"Create a strong password ({password_rule})",
            "Select security questions and answers",
        ],
        "tips": [
            "Use your legal name, not nicknames",
            "Choose a password you can remember but others can't guess",
            "Write down your security questions and answers",
        ],
        "warnings": [
            "All information must be accurate and current",
            "Keep your password secure and don't share it",
        ],
    }


VERIFY_IDENTITY_STEP = {
    "order": 4,
    "title": "Verify Your Identity",
    "description": "Complete identity verification process",
    "instructions": [
        "Upload a clear photo of your government ID",
        "Verify your email address by clicking the confirmation link",
        "Complete any additional verification steps if prompted",
    ],
    "tips": [
        "Ensure your ID photo is clear and readable",
        "Check your email spam folder for confirmation",
        "Complete verification within 24 hours",
    ],
    "warnings": [
        "Only upload official government identification",
        "Do not share your verification codes with anyone",
    ],
}

ACCOUNT_SETUP_STEP = {
    "order": 5,
    "title": "Complete Account Setup",
    "description": "Finalize your account configuration",
    "instructions": [
        "Set up your profile information",
        "Configure notification preferences",
        "Review and accept terms of service",
        "Complete any additional setup steps",
    ],
    "tips": [
        "Enable email notifications for important updates",
        "Review all terms and conditions carefully",
        "Save your login information securely",
    ],
    "warnings": [
        "Read all terms before accepting",
        "Keep your account information secure",
    ],
}

ID_AND_EMAIL_ISSUES = [
    {
        "problem": "ID verification fails",
        "solution": "Ensure ID is current and photo is clear",
        "prevention": "Use high-quality scan or photo of current ID",
    },
    {
        "problem": "Email verification not received",
        "solution": "Check spam folder and request resend",
        "prevention": "Use a reliable email provider",
    },
]

FILE_AND_SERVE_SUPPORT = {
    "name": "File & Serve Support",
    "role": "Technical Support",
    "phone": "(800) 818-5664",
    "email": "support@fileandserve.com",
    "hours": "Monday-Friday 6:00 AM - 6:00 PM PST",
}

NYSCEF_SUPPORT = {
    "name": "NYSCEF Support",
    "role": "Technical Support",
    "phone": "(855) 268-7861",
    "email": "nyscef@nycourts.gov",
    "hours": "Monday-Friday 8:30 AM - 4:30 PM EST",
}


REGISTRATION_GUIDE_RECORDS: List[Dict[str, Any]] = [
    {
        "state": "CA",
        "portalId": "ca-efile",
        "steps": [
            {
                "order": 1,
                "title": "Prepare Required Documents",
                "description": "Gather necessary identification and information",
                "instructions": [
                    "Valid California driver's license or passport",
                    "Current email address",
                    "Credit card or debit card for registration fee",
                    "Basic information about your legal case (if applicable)",
                ],
                "tips": [
                    "Ensure your ID is current and not expired",
                    "Use an email address you check regularly",
                    "Have payment method ready before starting",
                ],
                "warnings": ["Do not use a shared email address", "Keep your login credentials secure"],
            },
            _portal_site_step(
                "Visit File & Serve Website", "File & Serve", "https://www.fileandserve.com/register",
            ),
            _registration_form_step(3, "8+ characters, mix of letters/numbers"),
            VERIFY_IDENTITY_STEP,
            {
                "order": 5,
                "title": "Pay Registration Fee",
                "description": "Complete payment for account activation",
                "instructions": [
                    "Enter your credit card or debit card information",
                    "Verify the $25 registration fee amount",
                    "Complete the payment transaction",
                    "Wait for payment confirmation",
                ],
                "tips": [
                    "Use a card with sufficient available credit",
                    "Save your payment confirmation email",
                    "The fee is a one-time charge",
                ],
                "warnings": [
                    "Ensure you're on a secure payment page",
                    "Never share your card information in emails",
                ],
            },
            {
                "order": 6,
                "title": "Complete Account Setup",
                "description": "Finalize your account and start using e-filing",
                "instructions": [
                    "Review your account information for accuracy",
                    "Set up any additional security features",
                    "Explore the e-filing interface",
                    "Review available document types and fees",
                ],
                "tips": [
                    "Take time to familiarize yourself with the system",
                    "Review the help documentation and tutorials",
                    "Practice with sample documents if available",
                ],
                "warnings": [
                    "Don't attempt to file real documents until you're comfortable",
                    "Contact support if you have questions",
                ],
            },
        ],
        "requirements": [
            {**GOVERNMENT_ID, "description": "Valid California driver's license or passport"},
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
        "commonIssues": [
            {
                "problem": "ID verification fails",
                "solution": "Ensure your ID is current, clear, and matches your registration information exactly",
                "prevention": "Use a high-quality photo and verify all information matches",
                "supportContact": FILE_AND_SERVE_SUPPORT,
            },
            {
                "problem": "Email verification not received",
                "solution": "Check spam folder, request new verification email, or contact support",
                "prevention": "Use a reliable email provider and check spam settings",
                "supportContact": FILE_AND_SERVE_SUPPORT,
            },
            {
                "problem": "Payment processing error",
                "solution": "Verify card information, ensure sufficient funds, or try a different payment method",
                "prevention": "Use a card with sufficient available credit and correct billing information",
                "supportContact": {
                    **FILE_AND_SERVE_SUPPORT,
                    "name": "File & Serve Billing",
                    "role": "Billing Support",
                    "email": "billing@fileandserve.com",
                },
            },
        ],
        "supportContacts": [
            {
                **FILE_AND_SERVE_SUPPORT,
                "role": "General Technical Support",
                "notes": "Primary support for all technical issues",
            },
            {
                **FILE_AND_SERVE_SUPPORT,
                "name": "File & Serve Billing",
                "role": "Payment and Billing Support",
                "email": "billing@fileandserve.com",
                "notes": "Help with payment issues and fee questions",
            },
            {
                "name": "California Courts Self-Help",
                "role": "General Court Information",
                "phone": "(800) 900-5985",
                "email": "selfhelp@courts.ca.gov",
                "hours": "Monday-Friday 8:00 AM - 5:00 PM PST",
                "notes": "General information about court procedures and forms",
            },
        ],
        "estimatedTime": "30-45 minutes",
        "cost": 25,
    },
    {
        "state": "NY",
        "portalId": "ny-efile",
        "steps": [
            {
                "order": 1,
                "title": "Complete NYSCEF Training",
                "description": "Mandatory training for all e-filing users",
                "instructions": [
                    "Visit the NYSCEF training website",
                    "Complete the mandatory e-filing training course",
                    "Pass the training assessment",
                    "Receive training completion certificate",
                ],
                "tips": [
                    "Training takes approximately 1-2 hours",
                    "Take notes during training for future reference",
                    "Keep your completion certificate",
                ],
                "warnings": [
                    "Training is mandatory before registration",
                    "Cannot proceed without completion certificate",
                ],
            },
            {
                "order": 2,
                "title": "Prepare Required Information",
                "description": "Gather necessary documents and information",
                "instructions": [
                    "Training completion certificate",
                    "Valid government identification",
                    "Current email address",
                    "Basic case information (if applicable)",
                ],
                "tips": [
                    "Have all documents ready before starting",
                    "Ensure email address is current and accessible",
                ],
                "warnings": ["Incomplete information will delay registration"],
            },
            {
                **_portal_site_step(
                    "Visit NYSCEF Registration",
                    "NYSCEF",
                    "https://iapps.courts.state.ny.us/nyscef/registration",
                    browser_tips=False,
                ),
                "order": 3,
            },
            {
                "order": 4,
                "title": "Complete Registration Form",
                "description": "Fill out all required information accurately",
                "instructions": [
                    "Enter your full legal name",
                    "Provide current contact information",
                    "Upload training completion certificate",
                    "Create secure login credentials",
                    "Set up security questions",
                ],
                "tips": [
                    "Use your legal name exactly as it appears on official documents",
                    "Choose a strong, memorable password",
                ],
                "warnings": [
                    "All information must be accurate and verifiable",
                    "Keep your login credentials secure",
                ],
            },
            {
                "order": 5,
                "title": "Verify Account",
                "description": "Complete account verification process",
                "instructions": [
                    "Verify your email address",
                    "Complete any additional verification steps",
                    "Wait for account approval",
                    "Receive confirmation email",
                ],
                "tips": [
                    "Check email spam folder for verification messages",
                    "Complete verification within 24 hours",
                ],
                "warnings": [
                    "Account approval may take 2-3 business days",
                    "Contact support if verification is delayed",
                ],
            },
        ],
        "requirements": [
            {
                "type": "training",
                "name": "NYSCEF Training",
                "description": "Complete mandatory e-filing training course",
                "required": True,
                "cost": 0,
                "processingTime": "1-2 hours",
            },
            {
                "type": "document",
                "name": "Training Certificate",
                "description": "Proof of training completion",
                "required": True,
                "cost": 0,
                "processingTime": "Immediate",
            },
            EMAIL_VERIFICATION,
        ],
        "commonIssues": [
            {
                "problem": "Training completion not recognized",
                "solution": "Ensure training certificate is properly uploaded and training was completed recently",
                "prevention": "Complete training within 30 days of registration",
                "supportContact": NYSCEF_SUPPORT,
            },
            {
                "problem": "Account approval delayed",
                "solution": "Contact NYSCEF support to check status and expedite if possible",
                "prevention": "Ensure all required information is complete and accurate",
                "supportContact": NYSCEF_SUPPORT,
            },
        ],
        "supportContacts": [
            {
                **NYSCEF_SUPPORT,
                "role": "General Technical Support",
                "notes": "Primary support for all NYSCEF issues",
            },
            {
                "name": "New York Courts Self-Help",
                "role": "General Court Information",
                "phone": "(800) 268-7869",
                "email": "selfhelp@nycourts.gov",
                "hours": "Monday-Friday 8:30 AM - 4:30 PM EST",
                "notes": "General information about court procedures",
            },
        ],
        "estimatedTime": "2-3 hours (including training)",
        "cost": 0,
    },
    {
        "state": "FL",
        "portalId": "fl-efile",
        "steps": [
            {
                "order": 1,
                "title": "Prepare Required Documents",
                "description": "Gather necessary identification and information",
                "instructions": [
                    "Valid Florida driver's license or ID",
                    "Current email address",
                    "Credit card or debit card for filing fees",
                    "Basic information about your legal case",
                ],
                "tips": [
                    "Ensure your ID is current and not expired",
                    "Use an email address you check regularly",
                    "Have payment method ready before starting",
                ],
                "warnings": ["Do not use a shared email address", "Keep your login credentials secure"],
            },
            _portal_site_step(
                "Visit Florida Courts E-Filing Portal",
                "Florida Courts E-Filing Portal",
                "https://www.myflcourtaccess.com/register",
            ),
            _registration_form_step(3, "8+ characters"),
            VERIFY_IDENTITY_STEP,
            ACCOUNT_SETUP_STEP,
        ],
        "requirements": [
            {**GOVERNMENT_ID, "description": "Valid Florida driver's license or ID"},
            EMAIL_VERIFICATION,
            {
                "type": "payment",
                "name": "Payment Method",
                "description": "Credit card or debit card for filing fees",
                "required": True,
                "cost": 0,
                "processingTime": "Immediate",
            },
        ],
        "commonIssues": ID_AND_EMAIL_ISSUES + [
            {
                "problem": "Payment processing errors",
                "solution": "Try different payment method or contact support",
                "prevention": "Ensure sufficient funds and valid payment method",
            },
        ],
        "supportContacts": [
            {
                "name": "Florida Courts E-Filing Support",
                "role": "Technical Support",
                "phone": "(850) 414-7722",
                "email": "support@myflcourtaccess.com",
                "hours": "Monday-Friday 8:00 AM - 5:00 PM EST",
            },
        ],
        "estimatedTime": "20-30 minutes",
        "cost": 0,
    },
    {
        "state": "IL",
        "portalId": "il-efile",
        "steps": [
            {
                "order": 1,
                "title": "Prepare Required Documents",
                "description": "Gather necessary identification and information",
                "instructions": [
                    "Valid Illinois driver's license or ID",
                    "Current email address",
                    "Basic information about your legal case",
                ],
                "tips": [
                    "Ensure your ID is current and not expired",
                    "Use an email address you check regularly",
                ],
                "warnings": ["Do not use a shared email address", "Keep your login credentials secure"],
            },
            _portal_site_step(
                "Visit eFileIL Portal", "eFileIL", "https://www.efile.illinoiscourts.gov/register",
            ),
            _registration_form_step(3, "8+ characters"),
            VERIFY_IDENTITY_STEP,
            ACCOUNT_SETUP_STEP,
        ],
        "requirements": [
            {**GOVERNMENT_ID, "description": "Valid Illinois driver's license or ID"},
            EMAIL_VERIFICATION,
        ],
        "commonIssues": ID_AND_EMAIL_ISSUES + [
            {
                "problem": "Account activation delays",
                "solution": "Contact support if activation takes more than 24 hours",
                "prevention": "Complete all verification steps promptly",
            },
        ],
        "supportContacts": [
            {
                "name": "eFileIL Support",
                "role": "Technical Support",
                "phone": "(217) 782-5180",
                "email": "support@efile.illinoiscourts.gov",
                "hours": "Monday-Friday 8:30 AM - 4:30 PM CST",
            },
        ],
        "estimatedTime": "15-25 minutes",
        "cost": 0,
    },
]


# =============================================================================
# Loading
# =============================================================================

def load_registration_guides(
    records: Iterable[Mapping[str, Any]],
    catalog: Optional[PortalCatalog] = None,
) -> List[RegistrationGuide]:
    """
    Validate raw guide records.

    Raises:
        ReferenceDataError: A record is malformed, its steps are not numbered
            1..n in order, a state has two guides, or (with a catalog) the
            guide names a portal the catalog does not have
    """
    guides: List[RegistrationGuide] = []
    seen_states: set = set()
    portal_ids = {p.id for p in catalog.portals} if catalog is not None else None

    for index, record in enumerate(records):
        try:
            guide = RegistrationGuide.model_validate(record)
        except ValidationError as e:
            label = record.get("state", f"#{index}") if isinstance(record, Mapping) else f"#{index}"
            raise ReferenceDataError(f"Invalid registration guide {label}: {e}") from e

        state = guide.state.upper()
        if state in seen_states:
            raise ReferenceDataError(f"Duplicate registration guide for state: {state}")
        seen_states.add(state)

        orders = [step.order for step in guide.steps]
        if orders != list(range(1, len(orders) + 1)):
            raise ReferenceDataError(f"Registration guide {state} has steps out of order: {orders}")

        if portal_ids is not None and guide.portal_id not in portal_ids:
            raise ReferenceDataError(f"Registration guide {state} references unknown portal: {guide.portal_id}")

        guides.append(guide)

    logger.debug("Loaded %d registration guides", len(guides))
    return guides


# =============================================================================
# Catalog
# =============================================================================

class RegistrationGuideCatalog:
    """Lookup over registration guides by state or portal id."""

    def __init__(self, guides: List[RegistrationGuide]):
        self.guides = list(guides)
        self._by_state = {g.state.upper(): g for g in self.guides}
        self._by_portal = {g.portal_id: g for g in self.guides}

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        catalog: Optional[PortalCatalog] = None,
    ) -> "RegistrationGuideCatalog":
        return cls(load_registration_guides(records, catalog))

    def get_guide_by_state(self, state_code: str) -> Optional[RegistrationGuide]:
        return self._by_state.get(state_code.strip().upper())

    def require_guide(self, state_code: str) -> RegistrationGuide:
        guide = self.get_guide_by_state(state_code)
        if guide is None:
            raise UnknownRegistrationGuideError(state_code)
        return guide

    def get_all_guides(self) -> List[RegistrationGuide]:
        return list(self.guides)

    def get_guide_by_portal_id(self, portal_id: str) -> Optional[RegistrationGuide]:
        return self._by_portal.get(portal_id)


@lru_cache
def get_registration_guides() -> RegistrationGuideCatalog:
    """
    Get the built-in registration guides, checked against the portal catalog.
    Use dependency injection: Depends(get_registration_guides)
    """
    return RegistrationGuideCatalog.from_records(REGISTRATION_GUIDE_RECORDS, get_portal_catalog())
