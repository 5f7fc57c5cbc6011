import pytest

from subevents import InvalidEventTypeError, Keyed, NameEncoder, Path, Simple
from subevents.config_loader import DEFAULT_HIERARCHY_MARKER


@pytest.fixture
def encoder():
    return NameEncoder()


def test_normal_keys_follow_each_variant(encoder):
    assert encoder.normal_key(Simple("PITCH_THROWN")) == "PITCH_THROWN"
    assert encoder.normal_key(Path("A", "B", "C")) == "A$B$C"
    assert encoder.normal_key(Keyed({"b": 2, "a": 1})) == '{"a":1,"b":2}'


def test_equal_event_types_share_a_key(encoder):
    assert encoder.normal_key(Path(["A", "B"])) == encoder.normal_key(Path("A", "B"))
    assert encoder.normal_key(Keyed({"x": [1, 2], "y": None})) == encoder.normal_key(
        Keyed({"y": None, "x": [1, 2]})
    )


def test_distinct_event_types_within_a_variant_get_distinct_keys(encoder):
    paths = [Path("A"), Path("A", "B"), Path("AB"), Path("B", "A"), Path("A", "B", "C")]
    keys = {encoder.normal_key(path) for path in paths}
    assert len(keys) == len(paths)
    keyed = [Keyed({"a": 1}), Keyed({"a": "1"}), Keyed({"a": 1, "b": 1}), Keyed({})]
    assert len({encoder.normal_key(item) for item in keyed}) == len(keyed)


def test_simple_name_may_address_a_path(encoder):
    assert encoder.normal_key(Simple("A$B")) == encoder.normal_key(Path("A", "B"))


def test_hierarchical_key_is_disjoint_from_normal_keys(encoder):
    path = Path("A", "B")
    hierarchical = encoder.hierarchical_key(path)
    assert hierarchical == DEFAULT_HIERARCHY_MARKER + "$A$B"
    assert hierarchical != encoder.normal_key(path)
    with pytest.raises(InvalidEventTypeError):
        encoder.normal_key(Simple(hierarchical))


@pytest.mark.parametrize("event_type", [Simple("A"), Keyed({"a": 1})])
def test_hierarchical_key_requires_path(encoder, event_type):
    with pytest.raises(InvalidEventTypeError):
        encoder.hierarchical_key(event_type)


def test_segment_containing_separator_is_rejected(encoder):
    with pytest.raises(InvalidEventTypeError):
        encoder.normal_key(Path("A$B"))
    with pytest.raises(InvalidEventTypeError):
        encoder.hierarchical_key(Path("A", "B$C"))


def test_unserialisable_keyed_fields_are_rejected(encoder):
    with pytest.raises(InvalidEventTypeError):
        encoder.normal_key(Keyed({"when": object()}))


def test_separator_change_affects_later_keys(encoder):
    path = Path("A", "B")
    before = encoder.normal_key(path)
    encoder.separator = "."
    assert encoder.normal_key(path) == "A.B"
    assert before == "A$B"
    with pytest.raises(ValueError):
        encoder.separator = ""
