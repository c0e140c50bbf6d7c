"""
Tests for portal registration guides.
"""

import copy

import pytest

from courtfile.services.filing import (
    PortalCatalog,
    ReferenceDataError,
    RegistrationGuideCatalog,
    UnknownRegistrationGuideError,
    get_portal_catalog,
    get_registration_guides,
    load_registration_guides,
)
from courtfile.services.filing.registration import REGISTRATION_GUIDE_RECORDS


@pytest.fixture
def guides() -> RegistrationGuideCatalog:
    return get_registration_guides()


# ============================================================================
# LOOKUPS
# ============================================================================

class TestGuideLookups:
    """Guide helpers by state and portal id."""

    def test_all_guides(self, guides):
        assert [g.state for g in guides.get_all_guides()] == ["CA", "NY", "FL", "IL"]

    def test_lookup_by_state_is_case_insensitive(self, guides):
        guide = guides.get_guide_by_state("ny")
        assert guide is not None
        assert guide.portal_id == "ny-efile"
        assert guide.estimated_time == "2-3 hours (including training)"

    def test_state_without_guide(self, guides):
        assert get_portal_catalog().get_portal_by_state("TX") is not None
        assert guides.get_guide_by_state("TX") is None
        with pytest.raises(UnknownRegistrationGuideError) as exc_info:
            guides.require_guide("TX")
        assert exc_info.value.key == "TX"

    def test_lookup_by_portal_id(self, guides):
        assert guides.get_guide_by_portal_id("fl-efile").state == "FL"
        assert guides.get_guide_by_portal_id("tx-efile") is None

    def test_every_guide_matches_its_portal(self, guides):
        catalog = get_portal_catalog()
        for guide in guides.get_all_guides():
            assert catalog.require_portal(guide.state).id == guide.portal_id


# ============================================================================
# CONTENT
# ============================================================================

class TestGuideContent:
    """Steps, requirements, issues and contacts."""

    def test_steps_are_ordered(self, guides):
        for guide in guides.get_all_guides():
            assert [s.order for s in guide.steps] == list(range(1, len(guide.steps) + 1))

    def test_california_steps(self, guides):
        guide = guides.require_guide("CA")
        assert len(guide.steps) == 6
        assert guide.steps[1].title == "Visit File & Serve Website"
        assert "Go to: https://www.fileandserve.com/register" in guide.steps[1].instructions
        assert guide.steps[4].title == "Pay Registration Fee"
        assert guide.cost == 25

    def test_new_york_requires_training_first(self, guides):
        guide = guides.require_guide("NY")
        assert guide.steps[0].title == "Complete NYSCEF Training"
        assert guide.steps[0].warnings[0] == "Training is mandatory before registration"
        assert [r.type for r in guide.requirements] == ["training", "document", "verification"]

    def test_common_issue_contacts(self, guides):
        ca = guides.require_guide("CA")
        billing = next(i for i in ca.common_issues if i.problem == "Payment processing error")
        assert billing.support_contact.email == "billing@fileandserve.com"
        assert billing.support_contact.phone == "(800) 818-5664"
        il = guides.require_guide("IL")
        assert all(issue.support_contact is None for issue in il.common_issues)
        assert il.common_issues[-1].problem == "Account activation delays"

    def test_support_contacts(self, guides):
        ca = guides.require_guide("CA")
        assert [c.name for c in ca.support_contacts] == [
            "File & Serve Support",
            "File & Serve Billing",
            "California Courts Self-Help",
        ]
        assert ca.support_contacts[0].notes == "Primary support for all technical issues"


# ============================================================================
# LOADING
# ============================================================================

class TestLoadGuides:
    """Reference data loading."""

    def test_builtin_records_load(self):
        assert len(load_registration_guides(REGISTRATION_GUIDE_RECORDS, get_portal_catalog())) == 4

    def test_malformed_record(self):
        records = copy.deepcopy(REGISTRATION_GUIDE_RECORDS)
        del records[1]["steps"]
        with pytest.raises(ReferenceDataError) as exc_info:
            load_registration_guides(records)
        assert "NY" in str(exc_info.value)

    def test_duplicate_state(self):
        records = [copy.deepcopy(REGISTRATION_GUIDE_RECORDS[0]), copy.deepcopy(REGISTRATION_GUIDE_RECORDS[0])]
        with pytest.raises(ReferenceDataError, match="Duplicate registration guide"):
            load_registration_guides(records)

    def test_steps_out_of_order(self):
        records = copy.deepcopy(REGISTRATION_GUIDE_RECORDS[:1])
        records[0]["steps"][2]["order"] = 7
        with pytest.raises(ReferenceDataError, match="out of order"):
            load_registration_guides(records)

    def test_unknown_portal(self):
        catalog = PortalCatalog.from_records([{
            "id": "mn-efile",
            "state": "MN",
            "state_name": "Minnesota",
            "portal_name": "eFS",
            "url": "https://minnesota.tylerhost.net/",
        }])
        with pytest.raises(ReferenceDataError, match="unknown portal: ca-efile"):
            load_registration_guides(REGISTRATION_GUIDE_RECORDS[:1], catalog)

    def test_catalog_from_snake_case_records(self):
        guides = RegistrationGuideCatalog.from_records([{
            "state": "mn",
            "portal_id": "mn-efile",
            "steps": [{"order": 1, "title": "Create an account"}],
            "estimated_time": "10 minutes",
        }])
        guide = guides.require_guide("MN")
        assert guide.steps[0].instructions == []
        assert guides.get_guide_by_portal_id("mn-efile") is guide
