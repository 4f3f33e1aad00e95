import pytest

from teambalance.config import (
    DEFAULT_EXTENDED_WEIGHTS,
    DEFAULT_WEIGHTS,
    ScoringWeights,
    get_weights,
    get_weights_by_key,
    iter_presets,
)
from teambalance.models import BASE_ATTRIBUTES, SECONDARY_FEATURES


def test_default_weights_match_base_attribute_order():
    mapping = DEFAULT_WEIGHTS.as_mapping()
    assert tuple(mapping) == BASE_ATTRIBUTES
    assert list(mapping.values()) == [0.4, 0.3, 0.2, 0.1]
    assert DEFAULT_WEIGHTS.total == pytest.approx(1.0)


def test_extended_weights_cover_every_secondary_feature():
    assert set(DEFAULT_EXTENDED_WEIGHTS.features) == set(SECONDARY_FEATURES)
    assert DEFAULT_EXTENDED_WEIGHTS.total == pytest.approx(1.0)
    for group in DEFAULT_EXTENDED_WEIGHTS.groups:
        assert sum(group.sub_weights.values()) == pytest.approx(1.0)


def test_get_weights_is_case_insensitive():
    assert get_weights(" Standard ") is DEFAULT_WEIGHTS
    assert get_weights("EXTENDED") is DEFAULT_EXTENDED_WEIGHTS


def test_get_weights_missing_raises():
    with pytest.raises(KeyError):
        get_weights("curling")


def test_get_weights_by_key_passes_objects_through():
    custom = ScoringWeights(engagement=1.0, activity=0.0, points=0.0, streak=0.0)
    assert get_weights_by_key(custom) is custom
    assert get_weights_by_key(None) is DEFAULT_WEIGHTS
    assert get_weights_by_key("activity").activity == pytest.approx(0.45)


def test_iter_presets_lists_named_presets():
    names = {name for name, _ in iter_presets()}
    assert {"standard", "extended", "activity"} <= names
