import hashlib

import pytest

from hero_quest.domain import round_rules, treasure_rng
from hero_quest.domain.errors import (
    InvalidRound,
    PreviousRoundNotCertified,
    TreasureAlreadyOpened,
)

from conftest import NOW, make_address

ADDRESS = "0x" + "ab" * 32


def test_address_bytes_are_left_padded():
    raw = treasure_rng.address_bytes("0x1")
    assert len(raw) == 32
    assert raw == b"\x00" * 31 + b"\x01"
    assert treasure_rng.address_bytes(ADDRESS) == bytes.fromhex("ab" * 32)


def test_address_longer_than_32_bytes_is_rejected():
    with pytest.raises(ValueError):
        treasure_rng.address_bytes("0x" + "ff" * 33)


def test_seed_byte_layout():
    timestamp = 1234
    digest = hashlib.sha3_256(
        bytes.fromhex("ab" * 32) + timestamp.to_bytes(8, "little")
    ).digest()

    assert treasure_rng.treasure_seed(ADDRESS, timestamp) == int.from_bytes(digest[:8], "big")


def test_reward_is_deterministic():
    first = treasure_rng.treasure_reward(1, ADDRESS, NOW)
    second = treasure_rng.treasure_reward(1, ADDRESS, NOW)
    assert first == second

    seed = treasure_rng.treasure_seed(ADDRESS, NOW)
    assert first == seed % 10 + 1
    assert treasure_rng.treasure_reward(2, ADDRESS, NOW) == seed % 11 + 5


def test_reward_ranges_cover_their_spans():
    round_one = {treasure_rng.treasure_reward(1, ADDRESS, NOW + t) for t in range(2000)}
    round_two = {treasure_rng.treasure_reward(2, ADDRESS, NOW + t) for t in range(2000)}

    assert round_one == set(range(1, 11))
    assert round_two == set(range(5, 16))


def test_round_three_has_no_treasure():
    with pytest.raises(InvalidRound):
        treasure_rng.treasure_reward(3, ADDRESS, NOW)


def test_open_treasure_requires_certified_round(account):
    round_rules.play_round(account, 1, NOW)

    with pytest.raises(PreviousRoundNotCertified):
        treasure_rng.open_treasure(account, 1, NOW)
    assert account.gold == 0
    assert not account.treasure_opened_1


def test_open_treasure_once_per_round(account):
    round_rules.play_round(account, 1, NOW)
    round_rules.certify_round(account, 1, 50, NOW)

    reward = treasure_rng.open_treasure(account, 1, NOW + 1)

    assert 1 <= reward <= 10
    assert account.gold == reward
    assert account.treasure_opened_1
    assert reward == treasure_rng.treasure_reward(1, account.address_id, NOW + 1)

    with pytest.raises(TreasureAlreadyOpened):
        treasure_rng.open_treasure(account, 1, NOW + 2)
    assert account.gold == reward


def test_round_two_treasure(account):
    account.credits = 2
    round_rules.play_round(account, 1, NOW)
    round_rules.certify_round(account, 1, 10, NOW)
    round_rules.play_round(account, 2, NOW)
    round_rules.certify_round(account, 2, 10, NOW)

    reward = treasure_rng.open_treasure(account, 2, NOW + 7)

    assert 5 <= reward <= 15
    assert account.treasure_opened_2
    assert not account.treasure_opened_1
    assert round_rules.invariant_violations(account) == []


def test_different_callers_can_get_different_rewards():
    rewards = {
        treasure_rng.treasure_reward(1, make_address(i), NOW) for i in range(1, 200)
    }
    assert len(rewards) > 1
