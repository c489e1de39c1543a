"""
Unit tests for the shared list parameters and schema helpers.
"""
import asyncio
import datetime as dt

import pytest

from expohub.api.deps import bearer_token, search_params
from expohub.core.errors import ApiError
from expohub.schemas.auth import RegisterIn
from expohub.schemas.common import iso, to_utc
from expohub.schemas.exhibitor import BoothUpdateIn, ExhibitorUpdateIn


def _parse(sort_keys, **query):
    defaults = {"query": None, "limit": 10, "offset": 0, "sort_by": sort_keys[0], "sort_order": "desc"}
    defaults.update(query)
    return asyncio.run(search_params(sort_keys)(**defaults))


class TestSearchParams:
    """Tests for the search_params dependency factory."""

    def test_defaults_use_first_sort_key(self):
        params = _parse(("date", "title"))
        assert params.sort_by == "date"
        assert params.sort_order == "desc"
        assert (params.limit, params.offset) == (10, 0)

    def test_whitelisted_sort_key_accepted(self):
        assert _parse(("date", "title"), sort_by="title", sort_order="asc").sort_by == "title"

    def test_unknown_sort_key_is_validation_error(self):
        with pytest.raises(ApiError) as exc:
            _parse(("date", "title"), sort_by="password_hash")
        assert exc.value.status_code == 400
        assert exc.value.error_code == "VALIDATION_ERROR"


class TestBearerToken:
    def test_extracts_token(self):
        assert bearer_token("Bearer abc.def") == "abc.def"

    def test_scheme_is_case_insensitive(self):
        assert bearer_token("bearer abc") == "abc"

    @pytest.mark.parametrize("value", [None, "", "Basic abc", "Bearer "])
    def test_missing_or_foreign_scheme(self, value):
        assert bearer_token(value) is None


class TestSchemaHelpers:
    def test_iso_renders_utc_with_z(self):
        value = dt.datetime(2024, 5, 1, 12, 0, tzinfo=dt.timezone(dt.timedelta(hours=2)))
        assert iso(value) == "2024-05-01T10:00:00.000Z"

    def test_naive_datetime_taken_as_utc(self):
        assert to_utc(dt.datetime(2024, 5, 1)).tzinfo == dt.timezone.utc

    def test_register_normalizes_email(self):
        body = RegisterIn(email="  Ada@ExpoHub.IO ", name=" Ada ", password="longenough")
        assert body.email == "ada@expohub.io"
        assert body.name == "Ada"

    def test_exhibitor_update_allows_clearing_company_only(self):
        changes = ExhibitorUpdateIn.model_validate({"name": None, "company": None}).changes()
        assert changes == {"company": None}

    def test_booth_update_keeps_explicit_nulls(self):
        changes = BoothUpdateIn.model_validate({"description": None, "unknown": 1}).changes()
        assert changes == {"description": None}
