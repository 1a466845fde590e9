from __future__ import annotations

from typing import Iterator

import pytest

from generic_model import Encrypter, Model, attribute_registry

TEST_ENCRYPTER = Encrypter('base64:dGVzdGluZy1rZXktZm9yLWdlbmVyaWMtbW9kZWwtISE=')


def _reset_model_state() -> None:
    attribute_registry.flush()
    Model.reguard()
    Model.prevent_silently_discarding_attributes(False)


@pytest.fixture(autouse=True)
def model_state() -> Iterator[None]:
    """Reset the process-wide model state around every test."""
    _reset_model_state()
    Model.encrypt_using(TEST_ENCRYPTER)
    yield
    _reset_model_state()
    Model.encrypt_using(None)


@pytest.fixture
def encrypter() -> Encrypter:
    return TEST_ENCRYPTER
