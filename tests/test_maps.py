from katana.utils.maps import merge_data_maps


def test_merge_data_map():
    data_map1 = {"key1": "value1", "key2": "value2"}
    data_map2 = {"key3": "value3", "key4": "value4"}

    merge_data_maps(data_map1, data_map2)

    assert data_map1["key1"] == "value1"
    assert data_map1["key2"] == "value2"
    assert data_map1["key3"] == "value3"
    assert data_map1["key4"] == "value4"


def test_merge_keeps_order_and_overrides():
    target = {"a": "1", "b": "2"}
    result = merge_data_maps(target, {"b": "3", "c": "4"})
    assert result is target
    assert list(target.items()) == [("a", "1"), ("b", "3"), ("c", "4")]


def test_source_is_unchanged():
    source = {"x": "y"}
    merge_data_maps({}, source)
    assert source == {"x": "y"}