"""
Tenant Identity Unit Tests
"""

import pytest

from hermes_proxy.common.errors import AuthenticationError
from hermes_proxy.common.tenant import extract_tenant_id, is_valid_tenant_id, strip_bearer

TENANT_ID = "123e4567-e89b-12d3-a456-426614174000"


class TestStripBearer:
    """Bearer prefix removal"""

    def test_strips_prefix_case_insensitive(self):
        assert strip_bearer(f"Bearer {TENANT_ID}") == TENANT_ID
        assert strip_bearer(f"bearer {TENANT_ID}") == TENANT_ID
        assert strip_bearer(f"BEARER   {TENANT_ID}  ") == TENANT_ID

    def test_without_prefix(self):
        assert strip_bearer(f"  {TENANT_ID} ") == TENANT_ID

    def test_empty_values(self):
        assert strip_bearer(None) == ""
        assert strip_bearer("") == ""
        assert strip_bearer("Bearer   ") == ""


class TestExtractTenantId:
    """Tenant ID validation"""

    @pytest.mark.parametrize(
        "token",
        [
            TENANT_ID,
            TENANT_ID.upper(),
            "AbCdEf01-2345-6789-aBcD-ef0123456789",
        ],
    )
    def test_accepts_uuid_regardless_of_case(self, token):
        assert extract_tenant_id(f"Bearer {token}") == token

    @pytest.mark.parametrize("header", [None, "", "   ", "Bearer ", "bearer    "])
    def test_missing_token(self, header):
        with pytest.raises(AuthenticationError) as exc_info:
            extract_tenant_id(header)
        assert exc_info.value.status_code == 401
        assert exc_info.value.to_dict() == {
            "error": {"message": "Missing or invalid Authorization header"}
        }

    @pytest.mark.parametrize(
        "token",
        [
            "not-a-uuid",
            "candidate-123e4567-e89b-12d3-a456-426614174000",
            "123e4567e89b12d3a456426614174000",
            "123e4567-e89b-12d3-a456-42661417400g",
            "123e4567-e89b-12d3-a456-4266141740001",
            "sk-live-abcdef",
        ],
    )
    def test_rejects_malformed_token(self, token):
        with pytest.raises(AuthenticationError) as exc_info:
            extract_tenant_id(f"Bearer {token}")
        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Invalid candidate ID format"

    def test_bare_bearer_word_is_malformed(self):
        # No whitespace after "Bearer", so the prefix is not stripped
        with pytest.raises(AuthenticationError) as exc_info:
            extract_tenant_id("Bearer")
        assert exc_info.value.message == "Invalid candidate ID format"

    def test_is_valid_tenant_id(self):
        assert is_valid_tenant_id(TENANT_ID)
        assert not is_valid_tenant_id(f" {TENANT_ID}")
