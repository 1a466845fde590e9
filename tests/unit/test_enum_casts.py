"""Unit tests for enum casts."""

from __future__ import annotations

import pytest

from generic_model import InvalidCastException
from tests.fixtures.enums import Priority, Status
from tests.fixtures.models import Account, Measurement


class TestEnumCasts:
    """Test suite for enum casts."""

    @pytest.fixture
    def model(self) -> Measurement:
        return Measurement()

    def test_reads_the_member_for_the_backing_value(self, model: Measurement) -> None:
        model.put_raw('status', 'active')

        assert model.get_attribute('status') is Status.ACTIVE

    def test_reads_integer_members_from_numeric_strings(self, model: Measurement) -> None:
        model.put_raw('priority', '2')

        assert model.priority is Priority.HIGH

    def test_reading_an_unknown_value_raises(self, model: Measurement) -> None:
        model.put_raw('status', 'archived')

        with pytest.raises(InvalidCastException) as exc_info:
            model.status

        assert exc_info.value.cast_type == 'Status'

    def test_reading_none_gives_none(self, model: Measurement) -> None:
        model.put_raw('status', None)

        assert model.status is None

    def test_writing_a_member_stores_its_value(self, model: Measurement) -> None:
        model.status = Status.INACTIVE

        assert model.get_raw('status') == 'inactive'

    def test_writing_a_backing_value(self, model: Measurement) -> None:
        model.status = 'active'
        model.priority = '1'

        assert model.get_raw('status') == 'active'
        assert model.get_raw('priority') == 1

    def test_writing_an_unknown_value_stores_none(self, model: Measurement) -> None:
        model.status = 'archived'

        assert model.get_raw('status') is None
        assert model.status is None

    def test_writing_none(self, model: Measurement) -> None:
        model.status = Status.ACTIVE
        model.status = None

        assert model.get_raw('status') is None

    def test_views_use_the_backing_value(self) -> None:
        account = Account({'name': 'Ada', 'status': Status.ACTIVE})

        assert account.to_array()['status'] == 'active'
        assert account.json_serialize()['status'] == 'active'
