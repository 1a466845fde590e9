"""Unit tests for the raw attribute store and dynamic access."""

from __future__ import annotations

import pytest

from generic_model import Model
from tests.fixtures.models import Measurement, Order


class TestAttributeStore:
    """Test suite for raw attribute storage."""

    @pytest.fixture
    def model(self) -> Measurement:
        return Measurement()

    def test_put_raw_skips_casting(self, model: Measurement) -> None:
        model.put_raw('count', '17')

        assert model.get_raw('count') == '17'
        assert model.count == 17

    def test_get_raw_of_missing_key_is_none(self, model: Measurement) -> None:
        assert model.get_raw('missing') is None

    def test_set_raw_attributes_replaces_the_store(self) -> None:
        model = Measurement({'label': 'first'})
        model.set_raw_attributes({'count': '3'})

        assert model.get_attributes() == {'count': '3'}

    def test_set_raw_attributes_drops_cached_cast_values(self) -> None:
        order = Order()
        order.set_raw_attributes({'reference': 'INV-1'})
        assert order.reference == '1'

        order.set_raw_attributes({'reference': 'INV-2'})
        assert order.reference == '2'

    def test_set_raw_attributes_can_sync_original(self, model: Measurement) -> None:
        model.set_raw_attributes({'label': 'synced'}, sync=True)

        assert model.get_original() == {'label': 'synced'}

    def test_original_is_snapshotted_after_fill(self) -> None:
        model = Measurement({'label': 'before'})
        model.label = 'after'

        assert model.get_original() == {'label': 'before'}
        assert model.get_original('label') == 'before'
        assert model.get_original('missing', 'fallback') == 'fallback'

    def test_sync_original_takes_a_deep_copy(self, model: Measurement) -> None:
        model.put_raw('payload', {'points': [1]})
        model.sync_original()

        model.get_raw('payload')['points'].append(2)

        assert model.get_original('payload') == {'points': [1]}

    def test_add_attributes_merges_without_casting(self, model: Measurement) -> None:
        model.put_raw('label', 'kept')
        model.add_attributes({'options': {'a': 1}})

        assert model.get_attributes() == {'label': 'kept', 'options': {'a': 1}}


class TestDynamicAccess:
    """Test suite for attribute and item access on models."""

    def test_attribute_assignment_goes_through_set_attribute(self) -> None:
        model = Measurement()
        model.options = {'a': 1}

        assert model.get_raw('options') == '{"a":1}'
        assert model.options == {'a': 1}

    def test_item_access(self) -> None:
        model = Measurement()
        model['label'] = 5

        assert model.get_raw('label') == 5
        assert model['label'] == '5'

    def test_contains_ignores_null_values(self) -> None:
        model = Measurement()
        model.put_raw('label', None)
        model.put_raw('count', 0)

        assert 'label' not in model
        assert 'count' in model
        assert 'missing' not in model

    def test_delete_attribute_and_item(self) -> None:
        model = Measurement({'label': 'x', 'count': 1})

        del model['label']
        del model.count

        assert model.get_attributes() == {}

    def test_unknown_attribute_reads_none(self) -> None:
        assert Measurement().anything is None

    def test_underscore_names_are_plain_python_attributes(self) -> None:
        model = Measurement()
        model._scratch = 1

        assert model._scratch == 1
        assert model.get_attributes() == {}

        with pytest.raises(AttributeError):
            model._missing

    def test_models_are_not_iterable(self) -> None:
        with pytest.raises(TypeError):
            iter(Measurement())

    def test_repr_shows_raw_attributes(self) -> None:
        model = Measurement()
        model.put_raw('count', '1')

        assert repr(model) == "Measurement({'count': '1'})"

    def test_fields_named_like_methods_are_read_by_key(self) -> None:
        car = Model({'make': 'Volvo'})
        car.fill = 'full'

        assert car['make'] == 'Volvo'
        assert car.get_attribute('fill') == 'full'
        assert callable(car.make)
