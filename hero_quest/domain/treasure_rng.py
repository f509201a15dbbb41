"""Treasure rewards derived from the caller address and the timestamp.

The seed is a pure function of (address, timestamp). Whoever controls when the
call is made controls the timestamp, so rewards are predictable and must not
be used where fairness against the caller matters.

Byte layout, kept stable so that rewards can be recomputed:
    sha3_256(address as 32 raw bytes || timestamp as u64 little-endian)
    first 8 digest bytes read as a big-endian u64.
"""

import hashlib

from hero_quest.domain.errors import (
    PreviousRoundNotCertified,
    TreasureAlreadyOpened,
)
from hero_quest.domain.round_rules import validate_round

ADDRESS_LENGTH = 32

TREASURE_ROUNDS = (1, 2)

# round -> (modulus, offset); reward = seed % modulus + offset
TREASURE_SPANS = {
    1: (10, 1),   # 1..10
    2: (11, 5),   # 5..15
}


def address_bytes(address: str) -> bytes:
    """Raw bytes of a hex address, left-padded to 32 bytes."""
    hex_part = address[2:] if address.startswith(("0x", "0X")) else address
    if len(hex_part) % 2:
        hex_part = "0" + hex_part
    raw = bytes.fromhex(hex_part)
    if len(raw) > ADDRESS_LENGTH:
        raise ValueError(f"address longer than {ADDRESS_LENGTH} bytes: {address}")
    return raw.rjust(ADDRESS_LENGTH, b"\x00")


def treasure_seed(address: str, timestamp: int) -> int:
    data = address_bytes(address) + timestamp.to_bytes(8, "little")
    digest = hashlib.sha3_256(data).digest()
    return int.from_bytes(digest[:8], "big")


def treasure_reward(round_number: int, address: str, timestamp: int) -> int:
    validate_round(round_number, TREASURE_ROUNDS)
    modulus, offset = TREASURE_SPANS[round_number]
    return treasure_seed(address, timestamp) % modulus + offset


def open_treasure(account, round_number: int, now: int) -> int:
    """Open the one-time treasure of a certified round and add its gold.

    Returns:
        int: gold added to the account

    Raises:
        InvalidRound: round_number is not 1 or 2
        PreviousRoundNotCertified: the round has not been certified
        TreasureAlreadyOpened: treasure was opened before
    """
    validate_round(round_number, TREASURE_ROUNDS)
    if not getattr(account, f"certified_{round_number}"):
        raise PreviousRoundNotCertified(
            f"round {round_number} must be certified before opening its treasure"
        )
    if getattr(account, f"treasure_opened_{round_number}"):
        raise TreasureAlreadyOpened()

    reward = treasure_reward(round_number, account.address_id, now)
    account.gold += reward
    setattr(account, f"treasure_opened_{round_number}", True)
    return reward
