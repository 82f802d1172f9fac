# backend/tests/unit/test_base_service.py
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from carwash.core.exceptions import ServiceException, ValidationException
from carwash.services.base import BaseService


class TestPagination:
    def test_first_page(self):
        assert BaseService.check_pagination(1, 10) == (0, 10)

    def test_offset_for_later_pages(self):
        assert BaseService.check_pagination(3, 20) == (40, 20)

    @pytest.mark.parametrize("page,limit", [(0, 10), (-1, 10), (1, 0), (1, 101)])
    def test_out_of_range(self, page, limit):
        with pytest.raises(ValidationException):
            BaseService.check_pagination(page, limit)

    def test_max_limit_allowed(self):
        assert BaseService.check_pagination(1, 100) == (0, 100)

    def test_page_result_rounds_pages_up(self):
        result = BaseService.page_result(["a", "b"], total=21, page=3, limit=10)
        assert result == {"items": ["a", "b"], "total": 21, "page": 3, "pages": 3}

    def test_page_result_empty(self):
        assert BaseService.page_result([], total=0, page=1, limit=10)["pages"] == 0


class TestTransaction:
    def test_commits_on_success(self):
        db = Mock(spec=Session)
        service = BaseService(db)
        with service.transaction():
            pass
        db.commit.assert_called_once()
        db.rollback.assert_not_called()

    def test_database_error_becomes_service_exception(self):
        db = Mock(spec=Session)
        db.commit.side_effect = SQLAlchemyError("boom")
        service = BaseService(db)
        with pytest.raises(ServiceException):
            with service.transaction():
                pass
        db.rollback.assert_called_once()

    def test_domain_errors_propagate_after_rollback(self):
        db = Mock(spec=Session)
        service = BaseService(db)
        with pytest.raises(ValidationException):
            with service.transaction():
                raise ValidationException("bad input")
        db.rollback.assert_called_once()
        db.commit.assert_not_called()


def test_measure_operation_records_metrics():
    class Sample(BaseService):
        @BaseService.measure_operation("sample_op")
        def run(self):
            return 42

    service = Sample(Mock(spec=Session))
    assert service.run() == 42
    assert service.get_metrics()["sample_op"]["count"] == 1
