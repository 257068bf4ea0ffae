from rating_rooms.services.rooms.stats import compute_stats


def test_empty_ratings():
    stats = compute_stats([])
    assert stats.to_dict() == {'count': 0, 'avg': 0, 'distribution': [0, 0, 0, 0, 0]}


def test_single_rating():
    stats = compute_stats([4])
    assert stats.count == 1
    assert stats.avg == 4.0
    assert stats.distribution == [0, 0, 0, 1, 0]


def test_mean_is_rounded_to_two_decimals():
    assert compute_stats([1, 2, 2]).avg == 1.67
    assert compute_stats([5, 4, 4]).avg == 4.33
    assert compute_stats([1, 2, 3, 4, 5]).avg == 3.0


def test_mean_rounds_half_up():
    # 17 / 8 = 2.125
    assert compute_stats([2, 2, 2, 2, 2, 2, 2, 3]).avg == 2.13


def test_distribution_counts_each_bucket():
    stats = compute_stats([1, 1, 3, 5, 5, 5])
    assert stats.count == 6
    assert stats.distribution == [2, 0, 1, 0, 3]
    assert sum(stats.distribution) == stats.count


def test_out_of_range_values_are_ignored():
    stats = compute_stats([0, 6, -1, 3, True, '4'])
    assert stats.distribution == [0, 0, 1, 0, 0]
    assert stats.count == 6
    assert stats.avg == 0.5


def test_to_dict_with_code():
    assert compute_stats([2]).to_dict('ABC234') == {
        'code': 'ABC234',
        'count': 1,
        'avg': 2.0,
        'distribution': [0, 1, 0, 0, 0],
    }
