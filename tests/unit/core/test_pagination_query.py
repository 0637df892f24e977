import pytest
from django.test import override_settings
from pydantic import ValidationError

from modules.core.pagination import PaginationQuery

pytestmark = pytest.mark.unit


class TestPaginationQuery:
    @override_settings(DEFAULT_PAGE_SIZE=20)
    def test_defaults(self):
        query = PaginationQuery()
        assert query.page == 1
        assert query.limit == 20

    def test_coerces_query_strings(self):
        query = PaginationQuery.model_validate({"page": "3", "limit": "5"})
        assert (query.page, query.limit) == (3, 5)

    @pytest.mark.parametrize("params", [{"page": "0"}, {"limit": "0"}, {"page": "x"}])
    def test_rejects_out_of_range(self, params):
        with pytest.raises(ValidationError):
            PaginationQuery.model_validate(params)

    @override_settings(MAX_PAGE_SIZE=100)
    def test_limit_capped(self):
        PaginationQuery(limit=100)
        with pytest.raises(ValidationError, match="at most 100"):
            PaginationQuery(limit=101)
