"""Points ranking over registered players."""

from typing import NamedTuple


class RankedPlayer(NamedTuple):
    name: str
    address: str
    points: int


def rank_by_points(registry, accounts) -> list[RankedPlayer]:
    """Rank every registered address by its current point total.

    Args:
        registry: addresses in registration order
        accounts: mapping of address -> account (anything with name and point)

    Returns:
        list[RankedPlayer]: highest points first; ties keep registration order
    """
    entries = [
        RankedPlayer(accounts[address].name, address, accounts[address].point)
        for address in registry
    ]
    # sorted() is stable, so equal points stay in registration order.
    return sorted(entries, key=lambda entry: entry.points, reverse=True)
