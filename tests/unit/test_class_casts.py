"""Unit tests for class casts and caster resolution."""

from __future__ import annotations

import json

import pytest

from generic_model import Collection, HashCast, InvalidCasterException, JsonEncodingException, Model
from tests.fixtures.enums import Color
from tests.fixtures.models import BrokenCasts, Credential, LineItem, Money, Order, Temperature


class TestClassCasts:
    """Test suite for custom casters."""

    @pytest.fixture
    def order(self) -> Order:
        return Order()

    def test_caster_declared_with_arguments(self, order: Order) -> None:
        order.put_raw('reference', 'INV-42')
        assert order.reference == '42'

        order.reference = '43'
        assert order.get_raw('reference') == 'INV-43'

    def test_castable_type_supplies_its_caster(self, order: Order) -> None:
        order.put_raw('temperature', 21.5)

        temperature = order.temperature

        assert isinstance(temperature, Temperature)
        assert temperature.degrees == 21.5
        assert temperature.unit == 'F'

    def test_get_result_is_cached_until_the_next_set(self, order: Order) -> None:
        order.put_raw('temperature', 21.5)
        first = order.temperature

        assert order.temperature is first

        order.temperature = 30
        assert order.temperature is not first
        assert order.temperature.degrees == 30.0
        assert order.get_raw('temperature') == 30.0

    def test_changes_to_the_cached_value_are_written_back(self, order: Order) -> None:
        order.put_raw('temperature', 21.5)
        order.temperature.degrees = 25.0

        assert order.get_attributes()['temperature'] == 25.0

    def test_caster_may_write_several_raw_keys(self, order: Order) -> None:
        order.price = Money(500, 'EUR')

        assert order.get_attributes() == {'amount': 500, 'currency': 'EUR'}
        assert order.price == Money(500, 'EUR')

    def test_writing_none_nulls_every_key_the_caster_writes(self, order: Order) -> None:
        order.price = Money(500, 'EUR')
        order.price = None

        assert order.get_attributes() == {'amount': None, 'currency': None}
        assert order.price is None

    def test_lossless_caster_round_trips(self, order: Order) -> None:
        order.put_raw('tags', '["a","b"]')

        assert order.tags == ['a', 'b']
        assert order.get_attributes()['tags'] == '["a","b"]'

    def test_collection_of_models(self, order: Order) -> None:
        order.put_raw('items', '[{"sku": "A", "quantity": "2"}]')

        item = order.items.first()

        assert isinstance(order.items, Collection)
        assert isinstance(item, LineItem)
        assert item.quantity == 2
        assert json.loads(order.get_attributes()['items']) == [{'sku': 'A', 'quantity': 2}]

    def test_collection_written_from_a_list(self, order: Order) -> None:
        order.tags = ['a', 'b']

        assert order.get_raw('tags') == '["a","b"]'

    def test_enum_collection(self, order: Order) -> None:
        order.colors = ['red', Color.BLUE]

        assert order.get_raw('colors') == '["red","blue"]'
        assert order.colors == [Color.RED, Color.BLUE]

    def test_json_caster_round_trips(self, order: Order) -> None:
        order.metadata = {'gift': True}

        assert order.get_raw('metadata') == '{"gift":true}'
        assert order.metadata == {'gift': True}

    def test_json_caster_reads_empty_values_as_its_empty_structure(self, order: Order) -> None:
        assert order.metadata == {}

        order.put_raw('metadata', '{oops')
        assert order.metadata == {}

        order.put_raw('lines', '{oops')
        assert order.lines is None

    def test_json_caster_empty_structure_is_written_back(self, order: Order) -> None:
        order.metadata['gift'] = True

        assert order.get_attributes()['metadata'] == '{"gift":true}'

    def test_json_caster_keeps_encoded_text(self, order: Order) -> None:
        order.lines = '[1, 2]'
        assert order.get_raw('lines') == '[1, 2]'

        order.lines = 'plain'
        assert order.get_raw('lines') == '"plain"'

    def test_json_caster_names_the_field_it_cannot_encode(self, order: Order) -> None:
        with pytest.raises(JsonEncodingException, match='lines'):
            order.lines = object()

    def test_json_caster_rejects_unknown_empty_structures(self) -> None:
        model = Model()
        model.add_casts({'data': 'generic_model.Casts.JsonCast.JsonCast:nope'})

        with pytest.raises(InvalidCasterException):
            model.data

    def test_is_class_castable(self, order: Order) -> None:
        assert order.is_class_castable('price')
        assert order.is_class_castable('colors')
        assert not order.is_class_castable('number')


class TestInboundCasts:
    """Test suite for set-only casters."""

    def test_values_are_hashed_on_write(self) -> None:
        credential = Credential({'username': 'ada', 'password': 'secret'})
        hashed = credential.get_raw('password')

        assert hashed.startswith('$2b$')
        assert credential.password == hashed
        assert HashCast.verify('secret', credential.password)
        assert not HashCast.verify('wrong', credential.password)

    def test_existing_hashes_are_kept(self) -> None:
        credential = Credential({'password': 'secret'})
        hashed = credential.get_raw('password')

        credential.password = hashed

        assert credential.get_raw('password') == hashed

    def test_hidden_hash_stays_out_of_views(self) -> None:
        credential = Credential({'username': 'ada', 'password': 'secret'})

        assert credential.to_array() == {'username': 'ada'}


class TestCasterResolution:
    """Test suite for invalid caster declarations."""

    def test_class_that_is_not_a_caster(self) -> None:
        model = BrokenCasts()
        model.put_raw('plain', 'x')

        with pytest.raises(InvalidCasterException) as exc_info:
            model.plain

        assert exc_info.value.column == 'plain'

    def test_writes_fail_the_same_way(self) -> None:
        with pytest.raises(InvalidCasterException):
            BrokenCasts().plain = 'x'

    def test_caster_that_cannot_be_constructed(self) -> None:
        model = BrokenCasts()
        model.put_raw('needy', 'x')

        with pytest.raises(InvalidCasterException):
            model.needy

    def test_constructor_arguments_from_the_declaration(self) -> None:
        model = BrokenCasts()
        model.put_raw('needy_with_argument', 'x')

        assert model.needy_with_argument == 'x'
