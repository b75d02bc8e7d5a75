import numpy as np

from pixel_print.analysis import (
    dominant_channels,
    dominant_groups,
    unique_colours_and_counts,
)

from conftest import make_buffer, random_buffer


def test_two_pixel_example():
    buf = make_buffer([(10, 200, 10), (200, 10, 10)], width=2)
    groups = dominant_groups(buf)
    assert groups.green.tolist() == [0]
    assert groups.red.tolist() == [1]
    assert groups.blue.tolist() == []
    assert groups.sizes == (1, 1, 0)


def test_groups_partition_all_pixels():
    buf = random_buffer(23, 19, seed=5)
    groups = dominant_groups(buf)
    flat = np.concatenate([groups.red, groups.green, groups.blue])
    assert flat.size == buf.total
    assert np.array_equal(np.sort(flat), np.arange(buf.total))
    for c in range(3):
        members = groups.by_channel(c)
        assert np.all(np.diff(members) > 0)
        assert np.all(dominant_channels(buf.rgb[members]) == c)


def test_ties_prefer_earlier_channel():
    rgb = np.array(
        [[9, 9, 9], [9, 9, 1], [1, 9, 9], [9, 1, 9], [0, 0, 0]], dtype=np.uint8
    )
    assert dominant_channels(rgb).tolist() == [0, 0, 1, 0, 0]


def test_unique_colours_most_frequent_first():
    buf = make_buffer([(1, 2, 3), (4, 5, 6), (4, 5, 6), (1, 2, 3), (4, 5, 6), (7, 7, 7)], 3)
    items = unique_colours_and_counts(buf)
    assert items[0] == ((4, 5, 6), 3)
    assert items[1] == ((1, 2, 3), 2)
    assert items[2] == ((7, 7, 7), 1)
