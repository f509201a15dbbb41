from types import SimpleNamespace

from hero_quest.domain.leaderboard import RankedPlayer, rank_by_points


def _accounts(**points):
    return {
        address: SimpleNamespace(name=f"name-{address}", point=value)
        for address, value in points.items()
    }


def test_rank_by_points_descending():
    accounts = _accounts(a=10, b=50, c=30)

    ranking = rank_by_points(["a", "b", "c"], accounts)

    assert [entry.address for entry in ranking] == ["b", "c", "a"]
    assert ranking[0] == RankedPlayer("name-b", "b", 50)


def test_ties_keep_registration_order():
    accounts = _accounts(a=10, b=20, c=10, d=20)

    ranking = rank_by_points(["c", "a", "d", "b"], accounts)

    assert [entry.address for entry in ranking] == ["d", "b", "c", "a"]


def test_ranking_does_not_mutate_inputs():
    registry = ["a", "b"]
    accounts = _accounts(a=1, b=2)

    rank_by_points(registry, accounts)

    assert registry == ["a", "b"]
    assert accounts["a"].point == 1
    assert accounts["b"].point == 2


def test_empty_registry():
    assert rank_by_points([], {}) == []
