"""
E-Filing Router
===============
API endpoints for preparing a court filing before it goes to a state
e-filing portal:
- Portal lookup by state, status or feature
- Document type finder from a free-text description
- Document validation and full filing readiness reports
- Pre-fill checklists
- Portal registration guides
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from courtfile.core.config import Settings, get_settings
from courtfile.services.filing import (
    DocumentTypeDefinition,
    EFilePortal,
    FilingAssistant,
    PortalCatalog,
    PortalStatus,
    RegistrationGuideCatalog,
    RuleDiagnostic,
    Severity,
    UnknownDocumentTypeError,
    UnknownPortalError,
    UnknownRegistrationGuideError,
    get_portal_catalog,
    get_registration_guides,
)

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/efiling", tags=["E-Filing"])


def get_filing_assistant(settings: Settings = Depends(get_settings)) -> FilingAssistant:
    """Assistant configured from settings."""
    return FilingAssistant.from_settings(settings)


# =============================================================================
# Request/Response Models
# =============================================================================

class PortalSummary(BaseModel):
    """Short portal listing entry."""
    id: str
    state: str
    state_name: str
    portal_name: str
    url: str
    status: str
    document_type_count: int


class SuggestRequest(BaseModel):
    """Describe the situation, optionally limited to one state's portal."""
    description: str = Field(..., min_length=1)
    state: Optional[str] = None


class DocumentTypeMatch(BaseModel):
    """A ranked document type suggestion."""
    id: str
    name: str
    jurisdiction: str
    category: str
    subcategory: str
    fees: float
    score: float


class FilingDataRequest(BaseModel):
    """User data for one document type. Attachments go under attachment_<type>."""
    doc_type_id: str
    data: Dict[str, Any] = Field(default_factory=dict)


class ChecklistResponse(BaseModel):
    document_type_id: str
    name: str
    checklist: List[str]


# =============================================================================
# Helpers
# =============================================================================

def _summarize(portal: EFilePortal) -> PortalSummary:
    return PortalSummary(
        id=portal.id,
        state=portal.state,
        state_name=portal.state_name,
        portal_name=portal.portal_name,
        url=portal.url,
        status=portal.status.value,
        document_type_count=len(portal.document_types),
    )


def _find_document_type(catalog: PortalCatalog, doc_type_id: str) -> DocumentTypeDefinition:
    try:
        return catalog.get_document_type(doc_type_id)
    except UnknownDocumentTypeError as e:
        raise HTTPException(status_code=404, detail=str(e))


# =============================================================================
# Portal Endpoints
# =============================================================================

@router.get("/portals")
async def list_portals(
    status: Optional[PortalStatus] = Query(None, description="Filter by portal status"),
    feature: Optional[str] = Query(None, description="Filter by feature name (substring)"),
    catalog: PortalCatalog = Depends(get_portal_catalog),
) -> List[PortalSummary]:
    """List e-filing portals, optionally filtered by status and feature."""
    portals = catalog.get_portals_by_status(status) if status else catalog.portals
    if feature:
        portals = [p for p in portals if p.has_feature(feature)]
    return [_summarize(p) for p in portals]


@router.get("/portals/{state}")
async def get_portal(
    state: str,
    catalog: PortalCatalog = Depends(get_portal_catalog),
) -> dict:
    """Full portal details for a state, including its document types."""
    try:
        portal = catalog.require_portal(state)
    except UnknownPortalError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return portal.model_dump(mode="json")


@router.get("/portals/{state}/registration-guide")
async def get_registration_guide(
    state: str,
    catalog: PortalCatalog = Depends(get_portal_catalog),
    guides: RegistrationGuideCatalog = Depends(get_registration_guides),
) -> dict:
    """Step-by-step sign-up instructions for a state's portal."""
    try:
        portal = catalog.require_portal(state)
        guide = guides.require_guide(portal.state)
    except (UnknownPortalError, UnknownRegistrationGuideError) as e:
        raise HTTPException(status_code=404, detail=str(e))

    result = guide.model_dump(mode="json")
    result["portal"] = {
        "id": portal.id,
        "portal_name": portal.portal_name,
        "registration_url": portal.registration_url,
    }
    return result


@router.get("/registration-guides")
async def list_registration_guides(
    guides: RegistrationGuideCatalog = Depends(get_registration_guides),
) -> List[dict]:
    """Summary of every published registration guide."""
    return [
        {
            "state": guide.state,
            "portal_id": guide.portal_id,
            "step_count": len(guide.steps),
            "estimated_time": guide.estimated_time,
            "cost": guide.cost,
        }
        for guide in guides.get_all_guides()
    ]


@router.get("/document-types/{doc_type_id}/checklist")
async def get_checklist(
    doc_type_id: str,
    catalog: PortalCatalog = Depends(get_portal_catalog),
    assistant: FilingAssistant = Depends(get_filing_assistant),
) -> ChecklistResponse:
    """Checklist to work through before filling in a document."""
    doc_type = _find_document_type(catalog, doc_type_id)
    return ChecklistResponse(
        document_type_id=doc_type.id,
        name=doc_type.name,
        checklist=assistant.build_checklist(doc_type),
    )


# =============================================================================
# Filing Endpoints
# =============================================================================

@router.post("/suggest")
async def suggest_document_types(
    request: SuggestRequest,
    catalog: PortalCatalog = Depends(get_portal_catalog),
    assistant: FilingAssistant = Depends(get_filing_assistant),
) -> List[DocumentTypeMatch]:
    """
    Suggest document types for a plain-language description.

    Only matches above the relevance threshold are returned, best first.
    """
    if request.state:
        try:
            candidates = catalog.require_portal(request.state).document_types
        except UnknownPortalError as e:
            raise HTTPException(status_code=404, detail=str(e))
    else:
        candidates = catalog.all_document_types()

    matches = assistant.scorer.scored(request.description, candidates)
    logger.info("Suggest: %d of %d document types matched", len(matches), len(candidates))

    return [
        DocumentTypeMatch(
            id=doc_type.id,
            name=doc_type.name,
            jurisdiction=doc_type.jurisdiction,
            category=doc_type.category,
            subcategory=doc_type.subcategory,
            fees=doc_type.fees,
            score=score,
        )
        for doc_type, score in matches
    ]


@router.post("/validate")
async def validate_document(
    request: FilingDataRequest,
    catalog: PortalCatalog = Depends(get_portal_catalog),
    assistant: FilingAssistant = Depends(get_filing_assistant),
) -> dict:
    """Validate user data against a document type."""
    doc_type = _find_document_type(catalog, request.doc_type_id)

    diagnostics: List[RuleDiagnostic] = []
    results = assistant.validate_document(doc_type, request.data, diagnostics)
    error_count = sum(1 for r in results if r.severity == Severity.ERROR)

    return {
        "document_type_id": doc_type.id,
        "results": [r.to_dict() for r in results],
        "diagnostics": [d.to_dict() for d in diagnostics],
        "error_count": error_count,
        "is_valid": error_count == 0,
    }


@router.post("/assemble")
async def assemble_report(
    request: FilingDataRequest,
    catalog: PortalCatalog = Depends(get_portal_catalog),
    assistant: FilingAssistant = Depends(get_filing_assistant),
) -> dict:
    """
    Full filing readiness report: validation, suggestions, warnings and
    next steps. Restrictions come from the document type's portal.
    """
    doc_type = _find_document_type(catalog, request.doc_type_id)
    portal = catalog.get_portal_for_document_type(doc_type.id)

    report = assistant.assemble(doc_type, request.data, portal.restrictions)

    result = report.to_dict()
    result["portal"] = {
        "id": portal.id,
        "portal_name": portal.portal_name,
        "url": portal.url,
        "support_phone": portal.support_phone,
    }
    return result


@router.get("/health")
async def health(catalog: PortalCatalog = Depends(get_portal_catalog)) -> dict:
    """Service health and reference data counts."""
    return {
        "status": "ok",
        "portals": len(catalog.portals),
        "document_types": len(catalog.all_document_types()),
    }
